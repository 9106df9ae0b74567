"""Anchor component.

Absolute screen coordinate produced by the resolution system. Stored in
``Formation.anchors`` parallel to ``Formation.records``.
"""

from dataclasses import dataclass
from typing import Optional

from party_formation.components.record import PositionRecord
from party_formation.types import Number


@dataclass(frozen=True)
class Anchor:
    """Resolved screen coordinate.

    Attributes:
        x: Column in pixels (0 at left).
        y: Row in pixels (0 at top).
    """

    x: Number
    y: Number

    @classmethod
    def from_record(
        cls, record: PositionRecord, parent: Optional["Anchor"] = None
    ) -> "Anchor":
        """Apply ``record``'s offset to ``parent`` (or the origin)."""
        if parent is None:
            return cls(record.x, record.y)
        return cls(parent.x + record.x, parent.y + record.y)
