import logging

import pytest

from party_formation.components import Anchor, RetreatMotion
from party_formation.params import RetreatParams
from party_formation.providers import ConfiguredRetreatProvider, FormationAnchorProvider
from party_formation.state import Formation
from party_formation.systems.resolve import resolution_system
from tests.test_utils import VANILLA, make_test_formation


def test_anchor_for_configured_index() -> None:
    provider = FormationAnchorProvider(resolution_system(make_test_formation(VANILLA)))
    assert provider.anchor_for(0) == Anchor(600, 280)
    assert provider.anchor_for(3) == Anchor(696, 424)


@pytest.mark.parametrize("index", [4, 10, -1])
def test_unconfigured_index_means_use_default(index: int) -> None:
    provider = FormationAnchorProvider(resolution_system(make_test_formation(VANILLA)))
    assert provider.anchor_for(index) is None


def test_empty_formation_never_answers() -> None:
    provider = FormationAnchorProvider(resolution_system(Formation()))
    assert provider.anchor_for(0) is None


def test_unresolved_formation_defers_and_warns(caplog: pytest.LogCaptureFixture) -> None:
    provider = FormationAnchorProvider(make_test_formation(VANILLA))
    with caplog.at_level(logging.WARNING, logger="party_formation.providers"):
        assert provider.anchor_for(1) is None
    assert "before resolution" in caplog.text


def test_retreat_override_disabled() -> None:
    provider = ConfiguredRetreatProvider(RetreatParams(enabled=False, x=1, y=2, duration=3))
    assert provider.retreat_override() is None


def test_retreat_override_enabled() -> None:
    provider = ConfiguredRetreatProvider(RetreatParams(enabled=True, x=-120, y=8, duration=12))
    assert provider.retreat_override() == RetreatMotion(dx=-120, dy=8, duration=12)
