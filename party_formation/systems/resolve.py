"""Anchor resolution system.

Turns the relative position records of a :class:`Formation` into absolute
anchors. Each record's anchor is its own offset added to the anchor of its
parent, or its offset alone when it has no valid parent.

Cycle handling: records are visited in ascending index order and every
parent chain is walked with an explicit stack. When a walk reaches a record
that is already on the current walk, that record (the cycle member reached
first) is anchored at its own offset and the rest of the cycle hangs off it.
For a self-parent record this means "parentless"; for a pure cycle it is the
lowest-index member. No anchor is ever computed from a parent that has not
been resolved yet.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from pyrsistent import pvector
from pyrsistent.typing import PVector

from party_formation.components import Anchor, PositionRecord
from party_formation.state import Formation
from party_formation.types import RecordIndex, Visit
from party_formation.utils.chain import has_valid_parent

logger = logging.getLogger(__name__)


def _resolve_chain(
    records: Sequence[PositionRecord],
    visit: List[Visit],
    anchors: List[Optional[Anchor]],
    start: RecordIndex,
) -> None:
    """Resolve ``start`` and every unresolved ancestor of it.

    Walks parent links from ``start`` until a parentless record, a resolved
    parent or a cycle, then computes anchors from the far end of the walk
    back towards ``start``.
    """
    count = len(records)
    path: List[RecordIndex] = []
    current = start
    while True:
        visit[current] = Visit.IN_PROGRESS
        path.append(current)
        parent = records[current].parent_index
        if not has_valid_parent(parent, count) or visit[parent] is Visit.DONE:
            break
        if visit[parent] is Visit.IN_PROGRESS:
            logger.debug(
                "Parent cycle closes at record %d; anchoring it at its own offset",
                parent,
            )
            anchors[parent] = Anchor.from_record(records[parent])
            visit[parent] = Visit.DONE
            break
        current = parent

    for index in reversed(path):
        if visit[index] is Visit.DONE:
            continue
        record = records[index]
        parent_anchor = (
            anchors[record.parent_index]
            if has_valid_parent(record.parent_index, count)
            else None
        )
        anchors[index] = Anchor.from_record(record, parent_anchor)
        visit[index] = Visit.DONE


def resolve_positions(records: Sequence[PositionRecord]) -> PVector[Anchor]:
    """Compute the absolute anchor of every record.

    Args:
        records (Sequence[PositionRecord]): Records in party order. Parent
            indices may be negative, out of range, self-referential or cyclic.

    Returns:
        PVector[Anchor]: One anchor per record, parallel to ``records``. Empty
            for an empty input.
    """
    visit: List[Visit] = [Visit.UNVISITED] * len(records)
    anchors: List[Optional[Anchor]] = [None] * len(records)
    for index in range(len(records)):
        if visit[index] is not Visit.DONE:
            _resolve_chain(records, visit, anchors, index)
    return pvector(anchors)


def resolution_system(formation: Formation) -> Formation:
    """Run one resolution pass over ``formation``.

    Args:
        formation (Formation): Formation with records loaded (resolved or not).

    Returns:
        Formation: New formation whose ``anchors`` hold the pass result and
            whose ``resolved`` flag is set. ``records`` are carried over as is.
    """
    anchors = resolve_positions(formation.records)
    logger.debug("Resolved %d party anchors", len(anchors))
    return replace(formation, anchors=anchors, resolved=True)
