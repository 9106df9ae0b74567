"""Position record component.

One party member's placement rule: a signed offset relative to the resolved
anchor of another record (its parent), or relative to the origin (0, 0) at
the top left of the UI area when it has no parent.
"""

from dataclasses import dataclass

from party_formation.types import NO_PARENT, Number, RecordIndex


@dataclass(frozen=True)
class PositionRecord:
    """Offset from a parent record.

    Attributes:
        parent_index: Index of the parent record. Negative values and indices
            past the end of the records vector mean "no parent".
        x: Horizontal offset (pixels, positive to the right).
        y: Vertical offset (pixels, positive downwards).
    """

    parent_index: RecordIndex = NO_PARENT
    x: Number = 0
    y: Number = 0
