"""Parent chain helpers.

Pure queries over an index-addressed sequence of position records. None of
them recurse or raise on malformed references: invalid parents end a chain
and cycles are cut at the first repeated index.
"""

from typing import List, Sequence, Set

from party_formation.components import PositionRecord
from party_formation.types import RecordIndex, Visit


def has_valid_parent(parent_index: RecordIndex, count: int) -> bool:
    """Return True if ``parent_index`` addresses one of ``count`` records."""
    return 0 <= parent_index < count


def parent_chain(
    records: Sequence[PositionRecord], index: RecordIndex
) -> List[RecordIndex]:
    """Return ``index`` followed by its ancestors, nearest first.

    The chain stops at a record without a valid parent or just before an
    index would repeat. An out-of-range ``index`` yields an empty chain.
    """
    count = len(records)
    chain: List[RecordIndex] = []
    seen: Set[RecordIndex] = set()
    current = index
    while has_valid_parent(current, count) and current not in seen:
        chain.append(current)
        seen.add(current)
        current = records[current].parent_index
    return chain


def find_cycles(records: Sequence[PositionRecord]) -> List[List[RecordIndex]]:
    """Return every parent cycle in ``records``.

    Chains are walked in ascending start index, the same order the resolution
    system uses. Each cycle is listed from the member its walk reaches first
    (the record the resolution anchors at its own offset) and then follows
    parent links. Cycles appear in the order they are discovered. A
    self-parent record is a cycle of length one.
    """
    count = len(records)
    visit: List[Visit] = [Visit.UNVISITED] * count
    cycles: List[List[RecordIndex]] = []

    for start in range(count):
        if visit[start] is not Visit.UNVISITED:
            continue
        path: List[RecordIndex] = []
        current = start
        while has_valid_parent(current, count) and visit[current] is Visit.UNVISITED:
            visit[current] = Visit.IN_PROGRESS
            path.append(current)
            current = records[current].parent_index
        if has_valid_parent(current, count) and visit[current] is Visit.IN_PROGRESS:
            cycles.append(path[path.index(current) :])
        for node in path:
            visit[node] = Visit.DONE

    return cycles


def cycle_break_points(records: Sequence[PositionRecord]) -> List[RecordIndex]:
    """Records the resolution system anchors at their own offset to cut cycles."""
    return [cycle[0] for cycle in find_cycles(records)]
