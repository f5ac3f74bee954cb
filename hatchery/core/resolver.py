"""Reward Resolver for Hatchery.

Two-stage weighted draw used when an egg hatches:
1. Pick a category (pet type) by weight
2. Pick a rarity tier, with luck aggregates scaling the tier chances

All validation happens before the random source is touched, so a failed
call never shifts the sequence seen by later calls.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from hatchery.core.probability import ProbabilityCalculator
from hatchery.core.tables import RarityCaps, RarityTable, RewardPool, validate_pool

RandomSource = Callable[[], float]


@dataclass(frozen=True)
class ResolvedReward:
    """
    Outcome of one resolution.

    Attributes:
        category_id: Selected category.
        rarity_id: Selected rarity (explicit tier or the common tier).
        rarity_chances: Effective chances the rarity was drawn from.
    """

    category_id: str
    rarity_id: str
    rarity_chances: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    @property
    def rarity_chance(self) -> float:
        """Effective chance of the rarity that was drawn."""
        return self.rarity_chances.get(self.rarity_id, 0.0)


class RewardResolver:
    """
    Resolves one reward from a pool and a rarity table.

    The resolver holds no state besides its logger and may be shared
    between threads; the random source is the caller's to protect.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def resolve(
        self,
        pool: RewardPool,
        rarity_table: RarityTable,
        modifier_caps: Optional[RarityCaps],
        aggregates: Mapping[str, float],
        random_source: RandomSource,
    ) -> ResolvedReward:
        """
        Resolve a reward.

        Args:
            pool: Category weights.
            rarity_table: Explicit tiers plus the common tier.
            modifier_caps: Cap on each tier's effective probability.
            aggregates: Summed stat bonuses for the subject.
            random_source: Callable returning floats in [0, 1).

        Returns:
            The resolved reward.

        Raises:
            EmptyPoolError: Pool has nothing to draw.
            InvalidRarityTableError: Malformed probabilities or caps.
        """
        total_weight = validate_pool(pool)
        rarity_table.validate(modifier_caps)
        chances = ProbabilityCalculator.effective_rarity_chances(
            rarity_table, modifier_caps, aggregates
        )

        category_id = self._select_category(pool, total_weight, self._draw(random_source))
        rarity_id = self._select_rarity(
            chances, rarity_table.common_rarity, self._draw(random_source)
        )

        self._logger.debug(
            "Resolved reward: category=%s rarity=%s chances=%s",
            category_id, rarity_id, chances,
        )
        return ResolvedReward(
            category_id=category_id,
            rarity_id=rarity_id,
            rarity_chances=MappingProxyType(dict(chances)),
        )

    @staticmethod
    def _draw(random_source: RandomSource) -> float:
        value = random_source()
        if not 0.0 <= value < 1.0:
            raise ValueError(f"Random source must return a value in [0, 1), got {value!r}")
        return value

    @staticmethod
    def _select_category(pool: RewardPool, total_weight: float, roll: float) -> str:
        """
        Walk categories in id order and take the first whose cumulative
        weight reaches the scaled roll.
        """
        target = roll * total_weight
        ordered = sorted(pool)
        cumulative = 0.0

        for category_id in ordered:
            cumulative += pool[category_id]
            if target <= cumulative:
                return category_id

        # Float summation can land a hair under the target
        return ordered[-1]

    @staticmethod
    def _select_rarity(chances: Mapping[str, float], common_rarity: str, roll: float) -> str:
        """
        Walk explicit tiers rarest first; the tier whose band [low, high)
        holds the roll wins, otherwise the common tier.
        """
        cumulative = 0.0

        for rarity_id, chance in chances.items():
            if rarity_id == common_rarity:
                continue
            cumulative += chance
            if roll < cumulative:
                return rarity_id

        return common_rarity


_default_resolver = RewardResolver()


def resolve(
    pool: RewardPool,
    rarity_table: RarityTable,
    modifier_caps: Optional[RarityCaps],
    aggregates: Mapping[str, float],
    random_source: RandomSource,
) -> ResolvedReward:
    """Resolve a reward with the default resolver."""
    return _default_resolver.resolve(pool, rarity_table, modifier_caps, aggregates, random_source)
