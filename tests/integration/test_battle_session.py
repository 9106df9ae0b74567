import pytest

from party_formation.battle import (
    DEFAULT_RETREAT,
    ActorSprite,
    BattleSession,
    default_actor_home,
    place_actor,
    retreat_actor,
)
from party_formation.components import Anchor, RetreatMotion
from party_formation.params import RetreatParams
from party_formation.providers import ConfiguredRetreatProvider, FormationAnchorProvider
from party_formation.state import Formation
from tests.test_utils import anchor_tuples, make_params


def test_default_home_matches_vanilla_layout() -> None:
    assert [default_actor_home(i) for i in range(4)] == [
        Anchor(600, 280),
        Anchor(632, 328),
        Anchor(664, 376),
        Anchor(696, 424),
    ]


def test_start_battle_places_configured_members() -> None:
    session = BattleSession(make_params([(-1, 100, 200), (0, -20, 30), (0, 20, 30)]))
    sprites = session.start_battle(3)
    assert anchor_tuples(s.home for s in sprites) == [(100, 200), (80, 230), (120, 230)]
    assert session.formation.resolved


def test_members_beyond_configured_positions_use_default_home() -> None:
    session = BattleSession(make_params([(-1, 100, 200)]))
    sprites = session.start_battle(3)
    assert sprites[0].home == Anchor(100, 200)
    assert sprites[1].home == default_actor_home(1)
    assert sprites[2].home == default_actor_home(2)


def test_custom_default_home_fn() -> None:
    session = BattleSession(make_params([]), default_home_fn=lambda i: Anchor(i, i))
    assert anchor_tuples(s.home for s in session.start_battle(2)) == [(0, 0), (1, 1)]


def test_restarting_battle_gives_same_placement() -> None:
    session = BattleSession(make_params([(1, 10, 10), (0, 5, 5)]))
    first = session.start_battle(2)
    second = session.start_battle(2)
    assert first == second
    assert anchor_tuples(s.home for s in second) == [(10, 10), (15, 15)]


def test_negative_party_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        BattleSession(make_params()).start_battle(-1)


def test_retreat_uses_host_default_when_override_disabled() -> None:
    session = BattleSession(make_params())
    session.start_battle(2)
    sprites = session.retreat_party()
    assert all(s.motion == DEFAULT_RETREAT for s in sprites)
    assert sprites[0].destination == Anchor(900, 280)


def test_retreat_override_applies_to_every_member() -> None:
    retreat = RetreatParams(enabled=True, x=-150, y=10, duration=20)
    session = BattleSession(make_params(retreat=retreat))
    session.start_battle(5)
    sprites = session.retreat_party()
    assert len(sprites) == 5
    assert all(s.motion == RetreatMotion(-150, 10, 20) for s in sprites)
    assert sprites[4].destination == Anchor(
        default_actor_home(4).x - 150, default_actor_home(4).y + 10
    )


def test_retreat_before_battle_is_a_no_op() -> None:
    assert len(BattleSession(make_params()).retreat_party()) == 0


def test_place_actor_falls_back_on_unresolved_formation() -> None:
    provider = FormationAnchorProvider(Formation())
    assert place_actor(0, provider) == ActorSprite(index=0, home=default_actor_home(0))


def test_retreat_actor_keeps_home() -> None:
    sprite = ActorSprite(index=1, home=Anchor(10, 20))
    moved = retreat_actor(
        sprite, ConfiguredRetreatProvider(RetreatParams(enabled=True, x=5, y=0, duration=1))
    )
    assert moved.home == sprite.home
    assert moved.destination == Anchor(15, 20)
    assert sprite.motion is None


def test_sprites_record_where_their_home_came_from() -> None:
    session = BattleSession(make_params([(-1, 600, 280)]))
    sprites = session.start_battle(2)
    assert sprites[0].configured
    assert not sprites[1].configured
    # A configured anchor equal to the host default is still configured.
    assert sprites[0].home == default_actor_home(0)
    assert all(s.configured == r.configured for s, r in zip(sprites, session.retreat_party()))
