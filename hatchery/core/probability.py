"""Probability Calculator for Hatchery.

Turns egg configuration and player aggregates into concrete chances, and
formats them for display.
"""

import math
from typing import Dict, Mapping, Optional, Tuple

from hatchery.core.constants import CHANCE_PRECISION, HIDDEN_CHANCE_LABEL, MIN_CHANCE_TO_SHOW
from hatchery.core.tables import RarityCaps, RarityTable, RewardPool, validate_pool
from hatchery.exceptions import InvalidModifierError


class ProbabilityCalculator:
    """
    Calculate hatch probabilities for decision making and previews.
    """

    @staticmethod
    def luck_multiplier(
        aggregates: Mapping[str, float],
        stat: str,
        max_multiplier: Optional[float] = None,
    ) -> float:
        """
        Multiplier applied to a rarity tier.

        Args:
            aggregates: Summed stat bonuses for the subject.
            stat: Stat the tier reads (e.g. "luckBoost").
            max_multiplier: Optional upper bound.

        Returns:
            1 + aggregate, never below 0.
        """
        bonus = aggregates.get(stat, 0.0)
        if not math.isfinite(bonus):
            raise InvalidModifierError(f"Aggregate for '{stat}' is not finite: {bonus!r}", stat)

        multiplier = max(0.0, 1.0 + bonus)
        if max_multiplier is not None:
            multiplier = min(multiplier, max_multiplier)
        return multiplier

    @staticmethod
    def effective_rarity_chances(
        table: RarityTable,
        caps: Optional[RarityCaps],
        aggregates: Mapping[str, float],
    ) -> Dict[str, float]:
        """
        Effective probability of every rarity, including the common tier.

        Each explicit tier is `min(base * luck, cap)`. When the explicit
        tiers need more than `1 - common_floor`, they are scaled down
        proportionally and the common tier keeps only the floor.

        Args:
            table: Rarity table (assumed validated).
            caps: Cap per rarity; tiers without one are uncapped.
            aggregates: Summed stat bonuses for the subject.

        Returns:
            Ordered dict rarest first, common last. Values sum to 1.
        """
        caps = caps or {}
        chances: Dict[str, float] = {}

        for tier in table.ordered_tiers():
            luck = ProbabilityCalculator.luck_multiplier(
                aggregates, tier.luck_stat, table.max_luck_multiplier
            )
            chance = tier.base_probability * luck
            cap = caps.get(tier.rarity_id)
            if cap is not None:
                chance = min(chance, cap)
            chances[tier.rarity_id] = chance

        available = 1.0 - table.common_floor
        explicit_total = math.fsum(chances.values())
        if explicit_total > available:
            scale = available / explicit_total
            chances = {rarity_id: chance * scale for rarity_id, chance in chances.items()}

        chances[table.common_rarity] = max(0.0, 1.0 - math.fsum(chances.values()))
        return chances

    @staticmethod
    def category_chances(pool: RewardPool) -> Dict[str, float]:
        """
        Probability of each category in the first stage.

        Returns:
            Dict of category_id -> weight / total weight, in id order.
        """
        total = validate_pool(pool)
        return {category_id: pool[category_id] / total for category_id in sorted(pool)}

    @staticmethod
    def hatch_chances(
        pool: RewardPool,
        table: RarityTable,
        caps: Optional[RarityCaps],
        aggregates: Mapping[str, float],
    ) -> Dict[Tuple[str, str], float]:
        """
        Probability of every (category, rarity) outcome.

        The two stages are independent, so each outcome is the product of
        its category chance and rarity chance.
        """
        table.validate(caps)
        rarity_chances = ProbabilityCalculator.effective_rarity_chances(table, caps, aggregates)
        return {
            (category_id, rarity_id): category_chance * rarity_chance
            for category_id, category_chance in ProbabilityCalculator.category_chances(pool).items()
            for rarity_id, rarity_chance in rarity_chances.items()
        }

    @staticmethod
    def expected_hatches(chance: float) -> float:
        """Expected number of hatches to see an outcome once."""
        if chance <= 0:
            return float("inf")
        return 1.0 / chance

    @staticmethod
    def format_chance(
        chance: float,
        min_chance_to_show: float = MIN_CHANCE_TO_SHOW,
        precision: int = CHANCE_PRECISION,
    ) -> str:
        """
        Format a chance as a percentage label.

        Chances below the threshold are hidden as "??" to keep very rare
        outcomes mysterious.

        Args:
            chance: Probability (0.0 to 1.0).
            min_chance_to_show: Threshold below which the label is hidden.
            precision: Decimal places in the percentage.

        Returns:
            Label such as "5.25%" or "??".
        """
        if chance < min_chance_to_show:
            return HIDDEN_CHANCE_LABEL
        return f"{chance * 100:.{precision}f}%"
