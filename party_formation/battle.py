"""Side-view battle host.

A small host that plays the part of the game engine: it owns the actor
sprites, fires the session start event and asks its providers for anchors
and retreat motions. Placement and retreat are pure functions over frozen
:class:`ActorSprite` values; :class:`BattleSession` is the stateful shell
that strings them together for one battle at a time.

Ordering within :meth:`BattleSession.start_battle`:

1. ``resolution_system`` runs on the formation (session start).
2. Every party member is placed, asking the anchor provider first and
   falling back to ``default_home_fn``.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from party_formation.components import Anchor, RetreatMotion
from party_formation.params import FormationParams, formation_from_params
from party_formation.providers import (
    AnchorProvider,
    ConfiguredRetreatProvider,
    FormationAnchorProvider,
    RetreatOverrideProvider,
)
from party_formation.state import Formation
from party_formation.systems.resolve import resolution_system
from party_formation.types import DefaultHomeFn, RecordIndex

logger = logging.getLogger(__name__)

DEFAULT_HOME_X = 600
DEFAULT_HOME_Y = 280
DEFAULT_HOME_STEP_X = 32
DEFAULT_HOME_STEP_Y = 48

DEFAULT_RETREAT = RetreatMotion(dx=300, dy=0, duration=30)


def default_actor_home(index: RecordIndex) -> Anchor:
    """Host default home: a diagonal line starting at (600, 280)."""
    return Anchor(
        DEFAULT_HOME_X + index * DEFAULT_HOME_STEP_X,
        DEFAULT_HOME_Y + index * DEFAULT_HOME_STEP_Y,
    )


@dataclass(frozen=True)
class ActorSprite:
    """Battle sprite of one party member.

    Attributes:
        index: Party member index.
        home: Anchor the sprite stands on.
        motion: Movement in progress relative to ``home`` (set on retreat).
        configured: True if ``home`` came from the anchor provider, False if
            the host default was used.
    """

    index: RecordIndex
    home: Anchor
    motion: Optional[RetreatMotion] = None
    configured: bool = False

    @property
    def destination(self) -> Anchor:
        """Where the sprite ends up once ``motion`` completes."""
        if self.motion is None:
            return self.home
        return Anchor(self.home.x + self.motion.dx, self.home.y + self.motion.dy)


def place_actor(
    index: RecordIndex,
    anchors: AnchorProvider,
    default_home_fn: DefaultHomeFn = default_actor_home,
) -> ActorSprite:
    """Create the sprite for ``index`` at its configured or default home."""
    anchor = anchors.anchor_for(index)
    if anchor is None:
        return ActorSprite(index=index, home=default_home_fn(index))
    return ActorSprite(index=index, home=anchor, configured=True)


def retreat_actor(
    sprite: ActorSprite,
    retreat: RetreatOverrideProvider,
    default_retreat: RetreatMotion = DEFAULT_RETREAT,
) -> ActorSprite:
    """Start the escape movement of ``sprite``."""
    motion = retreat.retreat_override() or default_retreat
    return replace(sprite, motion=motion)


class BattleSession:
    """Battle-scoped host for one party.

    Parameters are loaded once and handed in; each :meth:`start_battle`
    re-runs the resolution pass so anchors always reflect the records.
    """

    def __init__(
        self,
        params: FormationParams,
        default_home_fn: DefaultHomeFn = default_actor_home,
        default_retreat: RetreatMotion = DEFAULT_RETREAT,
    ):
        self.params = params
        self.formation: Formation = formation_from_params(params)
        self.default_home_fn = default_home_fn
        self.default_retreat = default_retreat
        self.retreat_provider: RetreatOverrideProvider = ConfiguredRetreatProvider(
            params.retreat
        )
        self.sprites: PVector[ActorSprite] = pvector()

    @property
    def anchor_provider(self) -> AnchorProvider:
        return FormationAnchorProvider(self.formation)

    def start_battle(self, party_size: int) -> PVector[ActorSprite]:
        """Resolve the formation and place ``party_size`` members.

        Raises:
            ValueError: If ``party_size`` is negative.
        """
        if party_size < 0:
            raise ValueError(f"Party size must be non-negative, got {party_size}")
        self.formation = resolution_system(self.formation)
        anchors = self.anchor_provider
        self.sprites = pvector(
            place_actor(index, anchors, self.default_home_fn)
            for index in range(party_size)
        )
        logger.info(
            "Battle started with %d members (%d configured positions)",
            party_size,
            len(self.formation.records),
        )
        return self.sprites

    def retreat_party(self) -> PVector[ActorSprite]:
        """Start the escape movement of every placed member."""
        self.sprites = pvector(
            retreat_actor(sprite, self.retreat_provider, self.default_retreat)
            for sprite in self.sprites
        )
        return self.sprites
