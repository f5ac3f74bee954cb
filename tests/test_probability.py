"""Tests for probability helpers."""

import math

import pytest

from hatchery.core.constants import LUCK_BOOST
from hatchery.core.probability import ProbabilityCalculator
from hatchery.core.tables import RarityTable
from hatchery.exceptions import EmptyPoolError, InvalidModifierError


POOL = {"bear": 25, "bunny": 25, "doggy": 25, "kitty": 20, "dragon": 5}


@pytest.fixture
def table():
    return RarityTable.from_rates({"golden": 0.05, "rainbow": 0.005})


class TestLuckMultiplier:
    """Tests for ProbabilityCalculator.luck_multiplier."""

    def test_missing_stat_is_neutral(self):
        assert ProbabilityCalculator.luck_multiplier({}, LUCK_BOOST) == 1.0

    def test_additive_bonus(self):
        assert ProbabilityCalculator.luck_multiplier({LUCK_BOOST: 0.5}, LUCK_BOOST) == 1.5

    def test_never_negative(self):
        assert ProbabilityCalculator.luck_multiplier({LUCK_BOOST: -3.0}, LUCK_BOOST) == 0.0

    def test_max_multiplier(self):
        assert ProbabilityCalculator.luck_multiplier({LUCK_BOOST: 20.0}, LUCK_BOOST, 10.0) == 10.0

    def test_non_finite_aggregate(self):
        with pytest.raises(InvalidModifierError):
            ProbabilityCalculator.luck_multiplier({LUCK_BOOST: math.inf}, LUCK_BOOST)


class TestEffectiveChances:
    """Tests for effective rarity chances."""

    def test_sum_to_one(self, table):
        chances = ProbabilityCalculator.effective_rarity_chances(table, None, {LUCK_BOOST: 2.0})
        assert math.fsum(chances.values()) == pytest.approx(1.0)

    def test_ordered_rarest_first_common_last(self, table):
        chances = ProbabilityCalculator.effective_rarity_chances(table, None, {})
        assert list(chances) == ["rainbow", "golden", "basic"]

    def test_common_gets_remainder(self, table):
        chances = ProbabilityCalculator.effective_rarity_chances(table, None, {})
        assert chances["basic"] == pytest.approx(0.945)


class TestCategoryAndHatchChances:
    """Tests for category and combined outcome chances."""

    def test_category_chances(self):
        chances = ProbabilityCalculator.category_chances(POOL)
        assert chances["bear"] == pytest.approx(0.25)
        assert chances["dragon"] == pytest.approx(0.05)

    def test_category_chances_empty_pool(self):
        with pytest.raises(EmptyPoolError):
            ProbabilityCalculator.category_chances({})

    def test_hatch_chances_products(self, table):
        chances = ProbabilityCalculator.hatch_chances(POOL, table, None, {})

        assert len(chances) == 15
        assert chances[("dragon", "rainbow")] == pytest.approx(0.05 * 0.005)
        assert math.fsum(chances.values()) == pytest.approx(1.0)


class TestFormatting:
    """Tests for display helpers."""

    def test_format_percentage(self):
        assert ProbabilityCalculator.format_chance(0.0525) == "5.25%"

    def test_hidden_below_threshold(self):
        assert ProbabilityCalculator.format_chance(0.0005) == "??"

    def test_threshold_is_shown(self):
        assert ProbabilityCalculator.format_chance(0.001) == "0.10%"

    def test_custom_precision(self):
        assert ProbabilityCalculator.format_chance(0.5, precision=0) == "50%"

    def test_expected_hatches(self):
        assert ProbabilityCalculator.expected_hatches(0.05) == pytest.approx(20.0)
        assert ProbabilityCalculator.expected_hatches(0.0) == float("inf")
