"""Tests for the two-stage reward resolver."""

import math
import random

import pytest

from hatchery.core.constants import LUCK_BOOST, RARE_LUCK_BOOST
from hatchery.core.resolver import RewardResolver, resolve
from hatchery.core.tables import RarityTable, RarityTier
from hatchery.exceptions import EmptyPoolError, InvalidRarityTableError


POOL = {"bear": 25, "bunny": 25, "doggy": 25, "kitty": 20, "dragon": 5}
CAPS = {"golden": 1.0, "rainbow": 1.0}


class SequenceSource:
    """Random source returning fixed values and counting calls."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def __call__(self) -> float:
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def table():
    return RarityTable.from_rates({"golden": 0.05, "rainbow": 0.005})


class TestScenarios:
    """End-to-end resolution scenarios."""

    def test_no_luck_mid_rolls(self, table):
        source = SequenceSource(0.5, 0.5)
        reward = resolve(POOL, table, CAPS, {LUCK_BOOST: 0}, source)

        assert reward.category_id == "bunny"
        assert reward.rarity_id == "basic"
        assert source.calls == 2

    def test_luck_turns_roll_golden(self, table):
        source = SequenceSource(0.5, 0.3)
        reward = resolve(POOL, table, CAPS, {LUCK_BOOST: 10.0}, source)

        assert reward.rarity_id == "golden"
        assert reward.rarity_chances["golden"] == pytest.approx(0.55)
        assert reward.rarity_chances["rainbow"] == pytest.approx(0.055)

    def test_same_roll_without_luck_is_basic(self, table):
        reward = resolve(POOL, table, CAPS, {}, SequenceSource(0.5, 0.3))
        assert reward.rarity_id == "basic"


class TestCategorySelection:
    """Tests for stage 1."""

    @pytest.mark.parametrize("roll,expected", [
        (0.0, "bear"),
        (0.2499, "bear"),
        (0.25, "bear"),
        (0.2501, "bunny"),
        (0.74, "doggy"),
        (0.78, "dragon"),
        (0.9, "kitty"),
        (0.999, "kitty"),
    ])
    def test_cumulative_bands(self, table, roll, expected):
        reward = resolve(POOL, table, CAPS, {}, SequenceSource(roll, 0.9))
        assert reward.category_id == expected

    def test_categories_ordered_by_id(self, table):
        shuffled = {"kitty": 20, "dragon": 5, "bear": 25, "doggy": 25, "bunny": 25}
        # Sorted: bear(25) bunny(50) doggy(75) dragon(80) kitty(100)
        reward = resolve(shuffled, table, CAPS, {}, SequenceSource(0.78, 0.9))
        assert reward.category_id == "dragon"

    def test_single_category(self, table):
        reward = resolve({"bear": 1}, table, CAPS, {}, SequenceSource(0.999, 0.9))
        assert reward.category_id == "bear"

    def test_fractional_weights(self, table):
        reward = resolve({"a": 0.1, "b": 0.2}, table, CAPS, {}, SequenceSource(0.5, 0.9))
        assert reward.category_id == "b"


class TestRaritySelection:
    """Tests for stage 2."""

    def test_rarest_tier_checked_first(self, table):
        reward = resolve(POOL, table, CAPS, {}, SequenceSource(0.5, 0.004))
        assert reward.rarity_id == "rainbow"

    def test_band_lower_edge_inclusive(self):
        # rainbow [0, 0.125), golden [0.125, 0.375)
        table = RarityTable.from_rates({"golden": 0.25, "rainbow": 0.125})
        reward = resolve(POOL, table, None, {}, SequenceSource(0.5, 0.125))
        assert reward.rarity_id == "golden"

    def test_band_upper_edge_exclusive(self):
        table = RarityTable.from_rates({"golden": 0.25, "rainbow": 0.125})
        reward = resolve(POOL, table, None, {}, SequenceSource(0.5, 0.375))
        assert reward.rarity_id == "basic"

    def test_caps_limit_effective_chance(self, table):
        caps = {"golden": 0.1, "rainbow": 0.01}
        reward = resolve(POOL, table, caps, {LUCK_BOOST: 10.0}, SequenceSource(0.5, 0.2))

        assert reward.rarity_chances["golden"] == pytest.approx(0.1)
        assert reward.rarity_chances["rainbow"] == pytest.approx(0.01)
        assert reward.rarity_id == "basic"

    def test_missing_cap_means_uncapped(self, table):
        reward = resolve(POOL, table, {"rainbow": 0.01}, {LUCK_BOOST: 3.0}, SequenceSource(0.5, 0.1))
        assert reward.rarity_chances["golden"] == pytest.approx(0.2)
        assert reward.rarity_id == "golden"

    def test_negative_luck_clamped_to_zero(self, table):
        reward = resolve(POOL, table, CAPS, {LUCK_BOOST: -5.0}, SequenceSource(0.5, 0.0))

        assert reward.rarity_chances["golden"] == 0.0
        assert reward.rarity_chances["rainbow"] == 0.0
        assert reward.rarity_id == "basic"

    def test_custom_common_rarity(self):
        table = RarityTable.from_rates({"rainbow": 0.05}, common_rarity="golden")
        reward = resolve(POOL, table, None, {}, SequenceSource(0.5, 0.5))
        assert reward.rarity_id == "golden"

    def test_no_explicit_tiers(self):
        reward = resolve(POOL, RarityTable(), None, {}, SequenceSource(0.5, 0.0))
        assert reward.rarity_id == "basic"
        assert reward.rarity_chance == 1.0

    def test_tier_reads_its_own_stat(self):
        table = RarityTable(tiers=(
            RarityTier("golden", 0.05, rank=1, luck_stat=RARE_LUCK_BOOST),
        ))
        plain = resolve(POOL, table, None, {LUCK_BOOST: 10.0}, SequenceSource(0.5, 0.1))
        rare = resolve(POOL, table, None, {RARE_LUCK_BOOST: 1.0}, SequenceSource(0.5, 0.09))

        assert plain.rarity_id == "basic"
        assert rare.rarity_id == "golden"

    def test_max_luck_multiplier(self, table):
        capped = RarityTable(tiers=table.tiers, max_luck_multiplier=2.0)
        reward = resolve(POOL, capped, None, {LUCK_BOOST: 10.0}, SequenceSource(0.5, 0.5))
        assert reward.rarity_chances["golden"] == pytest.approx(0.1)

    def test_overflow_rescaled_to_fill_remainder(self):
        table = RarityTable.from_rates({"golden": 0.5, "rainbow": 0.25})
        reward = resolve(POOL, table, None, {LUCK_BOOST: 1.0}, SequenceSource(0.5, 0.5))

        # 1.0 and 0.5 scaled down to sum to 1
        assert reward.rarity_chances["golden"] == pytest.approx(2 / 3)
        assert reward.rarity_chances["rainbow"] == pytest.approx(1 / 3)
        assert reward.rarity_chances["basic"] == pytest.approx(0.0)
        assert reward.rarity_id == "golden"

    def test_common_floor_reserved(self):
        table = RarityTable.from_rates({"golden": 0.5}, common_floor=0.2)
        reward = resolve(POOL, table, None, {LUCK_BOOST: 9.0}, SequenceSource(0.5, 0.85))

        assert reward.rarity_chances["golden"] == pytest.approx(0.8)
        assert reward.rarity_chances["basic"] == pytest.approx(0.2)
        assert reward.rarity_id == "basic"


class TestValidation:
    """Tests for failures before any random draw."""

    def test_empty_pool_consumes_no_draws(self, table):
        source = SequenceSource(0.5, 0.5)
        with pytest.raises(EmptyPoolError):
            resolve({}, table, CAPS, {}, source)
        assert source.calls == 0

    @pytest.mark.parametrize("pool", [
        {"bear": 0},
        {"bear": -1, "bunny": 5},
        {"bear": math.nan},
        {"bear": math.inf},
    ])
    def test_bad_weights(self, table, pool):
        source = SequenceSource(0.5, 0.5)
        with pytest.raises(EmptyPoolError):
            resolve(pool, table, CAPS, {}, source)
        assert source.calls == 0

    @pytest.mark.parametrize("rates", [
        {"golden": 1.5},
        {"golden": -0.1},
        {"golden": math.nan},
        {"golden": 0.6, "rainbow": 0.6},
    ])
    def test_bad_probabilities(self, rates):
        source = SequenceSource(0.5, 0.5)
        with pytest.raises(InvalidRarityTableError):
            resolve(POOL, RarityTable.from_rates(rates), None, {}, source)
        assert source.calls == 0

    @pytest.mark.parametrize("caps", [
        {"golden": 0},
        {"golden": -1.0},
        {"golden": math.nan},
        {"mythic": 0.5},
    ])
    def test_bad_caps(self, table, caps):
        source = SequenceSource(0.5, 0.5)
        with pytest.raises(InvalidRarityTableError):
            resolve(POOL, table, caps, {}, source)
        assert source.calls == 0

    def test_tier_named_like_common(self):
        table = RarityTable.from_rates({"basic": 0.1})
        with pytest.raises(InvalidRarityTableError) as exc_info:
            resolve(POOL, table, None, {}, SequenceSource(0.5, 0.5))
        assert exc_info.value.rarity_id == "basic"

    def test_random_source_out_of_range(self, table):
        with pytest.raises(ValueError):
            resolve(POOL, table, CAPS, {}, SequenceSource(1.0, 0.5))


class TestDistribution:
    """Statistical checks against the expected frequencies."""

    def test_frequencies_converge(self, table):
        rng = random.Random(12345)
        resolver = RewardResolver()
        n = 100_000
        categories = {}
        rarities = {}

        for _ in range(n):
            reward = resolver.resolve(POOL, table, CAPS, {LUCK_BOOST: 1.0}, rng.random)
            categories[reward.category_id] = categories.get(reward.category_id, 0) + 1
            rarities[reward.rarity_id] = rarities.get(reward.rarity_id, 0) + 1

        total_weight = sum(POOL.values())
        for category_id, weight in POOL.items():
            assert categories[category_id] / n == pytest.approx(weight / total_weight, abs=0.01)

        assert rarities["golden"] / n == pytest.approx(0.10, abs=0.01)
        assert rarities["rainbow"] / n == pytest.approx(0.01, abs=0.01)
        assert rarities["basic"] / n == pytest.approx(0.89, abs=0.01)

    def test_always_terminates_with_valid_result(self, table):
        rng = random.Random(7)
        for _ in range(2000):
            reward = resolve(POOL, table, CAPS, {LUCK_BOOST: rng.uniform(-2, 20)}, rng.random)
            assert reward.category_id in POOL
            assert reward.rarity_id in table.rarity_ids
