"""Tests for the effect management service."""

import pytest

from hatchery.api.services.effect_service import EffectService
from hatchery.core.constants import LUCK_BOOST, SPEED_MULTIPLIER
from hatchery.core.effects import EffectAggregationEngine
from hatchery.core.store import InMemoryEffectStore
from hatchery.exceptions import UnknownEffectError


class FakeClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(clock):
    return EffectService(EffectAggregationEngine(clock=clock), InMemoryEffectStore())


class TestApplyEffect:
    """Tests for applying configured effects."""

    def test_one_modifier_per_stat(self, service):
        response = service.apply_effect("p1", "speed_boost")

        assert response.source_id == "speed_boost"
        assert {m.stat_key for m in response.state.modifiers} == {SPEED_MULTIPLIER, LUCK_BOOST}
        assert response.state.aggregates[SPEED_MULTIPLIER] == pytest.approx(0.5)
        assert response.state.aggregates[LUCK_BOOST] == pytest.approx(0.1)

    def test_permanent_effect_prefix(self, service):
        response = service.apply_effect("p1", "lucky_pass")

        assert response.source_id == "permanent_lucky_pass"
        assert response.state.modifiers[0].permanent
        assert response.state.modifiers[0].remaining is None

    def test_stacking_effect(self, service):
        service.apply_effect("p1", "luck_potion")
        response = service.apply_effect("p1", "luck_potion")

        assert response.state.aggregates[LUCK_BOOST] == pytest.approx(2.0)

    def test_reset_effect(self, service):
        service.apply_effect("p1", "trader_blessing")
        response = service.apply_effect("p1", "trader_blessing")

        assert response.state.aggregates[SPEED_MULTIPLIER] == pytest.approx(0.25)

    def test_duration_override(self, service, clock):
        service.apply_effect("p1", "luck_potion", duration=10)
        clock.now = 10

        assert service.get_state("p1").aggregates[LUCK_BOOST] == 0.0

    def test_unknown_effect(self, service):
        with pytest.raises(UnknownEffectError):
            service.apply_effect("p1", "nonexistent_effect")


class TestRemoveEffect:
    """Tests for removing configured effects."""

    def test_removes_all_stats(self, service):
        service.apply_effect("p1", "speed_boost")
        response = service.remove_effect("p1", "speed_boost")

        assert response.removed == 2
        assert response.state.modifiers == []

    def test_removes_permanent(self, service):
        service.apply_effect("p1", "lucky_pass")
        assert service.remove_effect("p1", "lucky_pass").removed == 1

    def test_remove_inactive(self, service):
        response = service.remove_effect("p1", "speed_boost")
        assert response.removed == 0
        assert response.message is not None


class TestPersistence:
    """Tests for save/load through the store."""

    def test_save_and_load(self, service, clock):
        service.apply_effect("p1", "luck_potion")
        clock.now = 100
        assert service.save_subject("p1").count == 1

        service.clear_subject("p1")
        clock.now = 5000
        assert service.load_subject("p1").count == 1

        # 800 seconds were left when saved
        modifier = service.get_state("p1").modifiers[0]
        assert modifier.remaining == pytest.approx(800)

    def test_purge_expired(self, service, clock):
        service.apply_effect("p1", "luck_potion")
        service.apply_effect("p2", "lucky_pass")
        clock.now = 1000

        assert service.purge_expired().purged == 1
