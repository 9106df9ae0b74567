"""Placement and retreat capability interfaces.

A battle host asks two questions of the formation layer:

* *Where does party member ``index`` stand?* answered by an
  :class:`AnchorProvider`. ``None`` means "use your own default".
* *How does the party move when it escapes?* answered by a
  :class:`RetreatOverrideProvider`. ``None`` again means "use your default".

The host composes providers in (see :mod:`party_formation.battle`) instead of
having its methods replaced.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from party_formation.components import Anchor, RetreatMotion
from party_formation.params import RetreatParams
from party_formation.state import Formation
from party_formation.types import RecordIndex

logger = logging.getLogger(__name__)


class AnchorProvider(Protocol):
    def anchor_for(self, index: RecordIndex) -> Optional[Anchor]: ...


class RetreatOverrideProvider(Protocol):
    def retreat_override(self) -> Optional[RetreatMotion]: ...


@dataclass(frozen=True)
class FormationAnchorProvider:
    """Answers anchor lookups from a resolved :class:`Formation`.

    Indices without a configured record yield ``None``. So does every index
    while the formation is unresolved, which also logs a warning since the
    host is expected to run the resolution pass before placing anyone.
    """

    formation: Formation

    def anchor_for(self, index: RecordIndex) -> Optional[Anchor]:
        if not self.formation.has_record(index):
            return None
        if not self.formation.resolved:
            logger.warning(
                "Anchor for party member %d requested before resolution", index
            )
            return None
        return self.formation.anchor_at(index)


@dataclass(frozen=True)
class ConfiguredRetreatProvider:
    """Retreat override taken from :class:`RetreatParams`."""

    retreat: RetreatParams

    def retreat_override(self) -> Optional[RetreatMotion]:
        if not self.retreat.enabled:
            return None
        return RetreatMotion(
            dx=self.retreat.x, dy=self.retreat.y, duration=self.retreat.duration
        )
