"""party_formation.components
=================================

Aggregate import surface for the value objects used by the formation systems.

All component classes are frozen ``@dataclass`` value objects; resolution and
placement logic lives in systems and providers, e.g.::

    from party_formation.components import Anchor, PositionRecord

"""

from .anchor import Anchor
from .record import PositionRecord
from .retreat import RetreatMotion

__all__ = [
    "Anchor",
    "PositionRecord",
    "RetreatMotion",
]
