"""Common type aliases and enumerations.

``RecordIndex`` is the identity of a position record (its slot in the ordered
records vector) and doubles as the party member index used by the host.
``DefaultHomeFn`` is the host extension point consulted when no anchor is
configured for a member.
"""

from enum import StrEnum, auto
from typing import Callable, TYPE_CHECKING, Union


# Forward declaration to avoid circular imports:
if TYPE_CHECKING:
    from party_formation.components import Anchor

RecordIndex = int
FrameCount = int
Number = Union[int, float]

NO_PARENT: RecordIndex = -1

DefaultHomeFn = Callable[[RecordIndex], "Anchor"]


class Visit(StrEnum):
    """Per-pass visitation marker used while resolving parent chains."""

    UNVISITED = auto()
    IN_PROGRESS = auto()
    DONE = auto()
