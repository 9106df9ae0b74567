"""Immutable formation state.

:class:`Formation` is the whole placement snapshot for one party: the ordered
position records loaded from configuration plus the anchors computed for them
by the most recent resolution pass. Like every value in this package it is
frozen; :func:`party_formation.systems.resolve.resolution_system` returns a
new ``Formation`` instead of writing into the old one.

Design notes:

* Records and anchors are **persistent vectors** (``pyrsistent.PVector``)
    addressed by record index. ``anchors[i]`` belongs to ``records[i]``.
* ``anchors`` is empty until the first pass; afterwards it has exactly one
    entry per record, including records involved in parent cycles.
* Nothing from a previous pass leaks into the next one, so re-running the
    resolution on an already resolved formation yields an equal formation.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from party_formation.components import Anchor, PositionRecord
from party_formation.types import RecordIndex


@dataclass(frozen=True)
class Formation:
    """Position records and their resolved anchors.

    Attributes:
        records (PVector[PositionRecord]): Placement rules, in party order.
        anchors (PVector[Anchor]): Absolute coordinates parallel to ``records``
            (empty before the first resolution pass).
        resolved (bool): True once a resolution pass has written ``anchors``.
    """

    records: PVector[PositionRecord] = pvector()
    anchors: PVector[Anchor] = pvector()
    resolved: bool = False

    def has_record(self, index: RecordIndex) -> bool:
        """Return True if a record is configured at ``index``."""
        return 0 <= index < len(self.records)

    def anchor_at(self, index: RecordIndex) -> Optional[Anchor]:
        """Anchor for ``index`` or ``None`` if unresolved / unconfigured."""
        if not self.resolved or not self.has_record(index):
            return None
        return self.anchors[index]


def make_formation(records: Iterable[PositionRecord]) -> Formation:
    """Build an unresolved formation from ``records``."""
    return Formation(records=pvector(records))
