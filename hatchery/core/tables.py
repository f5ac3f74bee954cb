"""Reward pool and rarity table definitions."""

import math
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from hatchery.core.constants import DEFAULT_COMMON_RARITY, LUCK_BOOST
from hatchery.exceptions import EmptyPoolError, InvalidRarityTableError

# category_id -> positive weight
RewardPool = Mapping[str, float]

# rarity_id -> cap on effective probability
RarityCaps = Mapping[str, float]


def validate_pool(pool: RewardPool) -> float:
    """
    Check a reward pool can be drawn from.

    Args:
        pool: Category weights.

    Returns:
        Total weight.

    Raises:
        EmptyPoolError: Pool is empty, or a weight is not a finite positive number.
    """
    if not pool:
        raise EmptyPoolError("Reward pool is empty")

    for category_id, weight in pool.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise EmptyPoolError(f"Category '{category_id}' has non-numeric weight {weight!r}")
        if not math.isfinite(weight) or weight <= 0:
            raise EmptyPoolError(f"Category '{category_id}' has non-positive weight {weight!r}")

    total = math.fsum(pool.values())
    if total <= 0:
        raise EmptyPoolError("Reward pool has no weight")
    return total


@dataclass(frozen=True)
class RarityTier:
    """
    An explicit rarity band layered on top of the category draw.

    Attributes:
        rarity_id: Tier name (e.g. "golden").
        base_probability: Chance before luck, in [0, 1].
        rank: Higher is rarer; rarer tiers claim probability mass first.
        luck_stat: Aggregate stat that scales this tier.
    """

    rarity_id: str
    base_probability: float
    rank: int = 0
    luck_stat: str = LUCK_BOOST


@dataclass(frozen=True)
class RarityTable:
    """
    Rarity tiers plus the implicit common tier that takes the remainder.

    Attributes:
        tiers: Explicit tiers.
        common_rarity: Name of the implicit tier.
        common_floor: Minimum probability reserved for the common tier.
        max_luck_multiplier: Optional cap on each tier's luck multiplier.
    """

    tiers: Tuple[RarityTier, ...] = ()
    common_rarity: str = DEFAULT_COMMON_RARITY
    common_floor: float = 0.0
    max_luck_multiplier: Optional[float] = None

    @classmethod
    def from_rates(
        cls,
        rates: Mapping[str, float],
        luck_stats: Optional[Mapping[str, str]] = None,
        **kwargs,
    ) -> "RarityTable":
        """
        Build a table from `rarity_id -> base probability`.

        Ranks follow the probabilities: the least likely tier is the rarest.

        Args:
            rates: Base probability per tier.
            luck_stats: Optional aggregate stat per tier (default luckBoost).
            **kwargs: Remaining RarityTable fields.
        """
        luck_stats = luck_stats or {}
        ordered = sorted(rates.items(), key=lambda item: (-item[1], item[0]))
        tiers = tuple(
            RarityTier(
                rarity_id=rarity_id,
                base_probability=probability,
                rank=rank,
                luck_stat=luck_stats.get(rarity_id, LUCK_BOOST),
            )
            for rank, (rarity_id, probability) in enumerate(ordered, start=1)
        )
        return cls(tiers=tiers, **kwargs)

    @property
    def rarity_ids(self) -> Tuple[str, ...]:
        """Every rarity this table can produce, rarest first, common last."""
        return tuple(t.rarity_id for t in self.ordered_tiers()) + (self.common_rarity,)

    def ordered_tiers(self) -> Tuple[RarityTier, ...]:
        """Explicit tiers rarest first; equal ranks fall back to id order."""
        return tuple(sorted(self.tiers, key=lambda t: (-t.rank, t.rarity_id)))

    def validate(self, caps: Optional[RarityCaps] = None) -> None:
        """
        Check probabilities and caps.

        Raises:
            InvalidRarityTableError: On any malformed value.
        """
        caps = caps or {}

        if not 0 <= self.common_floor < 1:
            raise InvalidRarityTableError(
                f"common_floor must be in [0, 1), got {self.common_floor!r}"
            )
        if self.max_luck_multiplier is not None and not self.max_luck_multiplier > 0:
            raise InvalidRarityTableError(
                f"max_luck_multiplier must be positive, got {self.max_luck_multiplier!r}"
            )

        seen = set()
        for tier in self.tiers:
            if tier.rarity_id == self.common_rarity:
                raise InvalidRarityTableError(
                    f"Tier '{tier.rarity_id}' collides with the common rarity", tier.rarity_id
                )
            if tier.rarity_id in seen:
                raise InvalidRarityTableError(
                    f"Duplicate rarity tier '{tier.rarity_id}'", tier.rarity_id
                )
            seen.add(tier.rarity_id)

            p = tier.base_probability
            if isinstance(p, bool) or not isinstance(p, (int, float)) or not math.isfinite(p):
                raise InvalidRarityTableError(
                    f"Tier '{tier.rarity_id}' has invalid probability {p!r}", tier.rarity_id
                )
            if p < 0 or p > 1:
                raise InvalidRarityTableError(
                    f"Tier '{tier.rarity_id}' probability {p!r} outside [0, 1]", tier.rarity_id
                )

        if math.fsum(t.base_probability for t in self.tiers) > 1:
            raise InvalidRarityTableError("Rarity probabilities sum to more than 1")

        for rarity_id, cap in caps.items():
            if rarity_id not in seen:
                raise InvalidRarityTableError(
                    f"Cap given for unknown rarity '{rarity_id}'", rarity_id
                )
            if isinstance(cap, bool) or not isinstance(cap, (int, float)) or math.isnan(cap) or cap <= 0:
                raise InvalidRarityTableError(
                    f"Cap for '{rarity_id}' must be positive, got {cap!r}", rarity_id
                )
