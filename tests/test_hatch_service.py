"""Tests for the hatch service."""

import pytest

from hatchery.api.config import Settings
from hatchery.api.services.hatch_service import HatchService
from hatchery.core.constants import LUCK_BOOST
from hatchery.core.effects import EffectAggregationEngine
from hatchery.core.hatcher import Hatcher
from hatchery.exceptions import UnknownEggError


class TickingClock:
    """Clock that moves forward on every read."""

    def __init__(self, start: float = 0.0, step: float = 100.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        now = self.now
        self.now += self.step
        return now


@pytest.fixture
def engine():
    return EffectAggregationEngine(clock=TickingClock())


@pytest.fixture
def service(engine):
    return HatchService(Hatcher(engine), Settings())


class TestPreview:
    """Tests for HatchService.preview."""

    def test_single_evaluation_time(self, service, engine):
        # Live at the first clock read, expired at any later one
        engine.apply_modifier("p1", "luck_potion", LUCK_BOOST, 1.0, 50, now=0.0)
        preview = service.preview("p1", "basic_egg")

        assert preview.aggregates[LUCK_BOOST] == pytest.approx(1.0)
        assert preview.rarity_chances["golden"] == pytest.approx(0.1)
        entries = {(e.pet_id, e.variant): e.chance for e in preview.entries}
        assert entries[("bear", "golden")] == pytest.approx(0.25 * 0.1)

    def test_unknown_egg(self, service):
        with pytest.raises(UnknownEggError):
            service.preview("p1", "nonexistent_egg")
