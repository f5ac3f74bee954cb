"""Monte Carlo simulation of egg hatching."""

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from hatchery.core.constants import LUCK_BOOST
from hatchery.core.resolver import RewardResolver
from hatchery.core.tables import RarityCaps, RarityTable, RewardPool


@dataclass
class SimulationReport:
    """Counts and observed frequencies from a batch of resolutions."""
    simulations: int
    category_counts: Counter = field(default_factory=Counter)
    rarity_counts: Counter = field(default_factory=Counter)
    outcome_counts: Counter = field(default_factory=Counter)

    def category_frequencies(self) -> Dict[str, float]:
        return {k: v / self.simulations for k, v in sorted(self.category_counts.items())}

    def rarity_frequencies(self) -> Dict[str, float]:
        return {k: v / self.simulations for k, v in sorted(self.rarity_counts.items())}

    def outcome_frequencies(self) -> Dict[Tuple[str, str], float]:
        return {k: v / self.simulations for k, v in sorted(self.outcome_counts.items())}

    def to_dict(self) -> dict:
        return {
            "simulations": self.simulations,
            "category_counts": dict(self.category_counts),
            "rarity_counts": dict(self.rarity_counts),
            "category_frequencies": self.category_frequencies(),
            "rarity_frequencies": self.rarity_frequencies(),
        }


def simulate(
    pool: RewardPool,
    table: RarityTable,
    caps: Optional[RarityCaps],
    aggregates: Mapping[str, float],
    simulations: int = 1000,
    seed: Optional[int] = None,
    resolver: Optional[RewardResolver] = None,
) -> SimulationReport:
    """
    Resolve `simulations` rewards and count the outcomes.

    Args:
        pool: Category weights.
        table: Rarity table.
        caps: Cap per rarity.
        aggregates: Summed stat bonuses held fixed for the whole run.
        simulations: Number of resolutions.
        seed: Seed for a private random generator (reproducible runs).
        resolver: Resolver to use; a quiet default when omitted.

    Returns:
        SimulationReport with counts per category, rarity and pair.
    """
    if simulations <= 0:
        raise ValueError(f"simulations must be positive, got {simulations}")

    resolver = resolver or RewardResolver()
    rng = random.Random(seed)
    report = SimulationReport(simulations=simulations)

    for _ in range(simulations):
        reward = resolver.resolve(pool, table, caps, aggregates, rng.random)
        report.category_counts[reward.category_id] += 1
        report.rarity_counts[reward.rarity_id] += 1
        report.outcome_counts[(reward.category_id, reward.rarity_id)] += 1

    return report


def compare_luck(
    pool: RewardPool,
    table: RarityTable,
    caps: Optional[RarityCaps],
    luck_boost: float,
    simulations: int = 1000,
    seed: Optional[int] = None,
    stat: str = LUCK_BOOST,
) -> Dict[str, SimulationReport]:
    """
    Run the same seeded simulation without and with a luck boost.

    Returns:
        {"baseline": report, "boosted": report}
    """
    return {
        "baseline": simulate(pool, table, caps, {}, simulations, seed),
        "boosted": simulate(pool, table, caps, {stat: luck_boost}, simulations, seed),
    }
