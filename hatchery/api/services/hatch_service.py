"""
Egg hatching service.
"""

import random
from typing import Optional

from hatchery.core.constants import LUCK_BOOST
from hatchery.core.hatcher import Hatcher
from hatchery.core.probability import ProbabilityCalculator
from hatchery.core.simulation import simulate

from ..config import Settings
from ..schemas.hatch import (
    HatchResultSchema,
    PreviewEntrySchema,
    PreviewSchema,
    SimulateRequest,
    SimulationResultSchema,
)


class HatchService:
    """Hatching, previews and simulations over the shared effect engine."""

    def __init__(self, hatcher: Hatcher, settings: Settings):
        self.hatcher = hatcher
        self.settings = settings

    def hatch(
        self,
        subject_id: str,
        egg_id: str,
        seed: Optional[int] = None,
    ) -> HatchResultSchema:
        """
        Hatch an egg for a subject.

        Args:
            subject_id: Player id.
            egg_id: Egg id.
            seed: Optional seed for a reproducible hatch.

        Returns:
            Hatch result with the pet's attributes.
        """
        random_source = random.Random(seed).random if seed is not None else None
        result = self.hatcher.hatch(subject_id, egg_id, random_source)
        pet = result.pet

        return HatchResultSchema(
            subject_id=subject_id,
            egg_id=egg_id,
            pet_id=result.pet_id,
            variant=result.variant,
            rarity=pet.rarity if pet else result.variant,
            display_name=pet.display_name if pet else None,
            power=pet.power if pet else None,
            health=pet.health if pet else None,
            abilities=list(pet.abilities) if pet else [],
            chance=result.reward.rarity_chance,
            luck_multiplier=result.luck_multiplier,
        )

    def preview(self, subject_id: str, egg_id: str) -> PreviewSchema:
        """Outcome chances for a subject's current effects."""
        egg = self.hatcher.get_egg(egg_id)
        now = self.hatcher.engine.resolve_now()
        aggregates = self.hatcher.aggregates_for(subject_id, now)
        entries = self.hatcher.preview(
            subject_id,
            egg_id,
            now=now,
            min_chance_to_show=self.settings.MIN_CHANCE_TO_SHOW,
            precision=self.settings.CHANCE_PRECISION,
        )
        rarity_chances = ProbabilityCalculator.effective_rarity_chances(
            egg.rarity_table(), egg.rarity_caps, aggregates
        )

        return PreviewSchema(
            subject_id=subject_id,
            egg_id=egg_id,
            aggregates=aggregates,
            rarity_chances=rarity_chances,
            entries=[
                PreviewEntrySchema(
                    pet_id=e.pet_id,
                    variant=e.variant,
                    display_name=e.display_name,
                    chance=e.chance,
                    label=e.label,
                )
                for e in entries
            ],
        )

    def simulate(self, request: SimulateRequest) -> SimulationResultSchema:
        """
        Run a Monte Carlo simulation of an egg.

        Raises:
            ValueError: Simulation count above the configured maximum.
        """
        simulations = request.simulations or self.settings.DEFAULT_SIMULATION_COUNT
        if simulations > self.settings.MAX_SIMULATION_COUNT:
            raise ValueError(
                f"simulations must be at most {self.settings.MAX_SIMULATION_COUNT}"
            )

        egg = self.hatcher.get_egg(request.egg_id)
        aggregates = self.hatcher.aggregates_for(request.subject_id) if request.subject_id else {}
        if request.luck_boost:
            aggregates[LUCK_BOOST] = aggregates.get(LUCK_BOOST, 0.0) + request.luck_boost

        table = egg.rarity_table()
        report = simulate(
            egg.pool,
            table,
            egg.rarity_caps,
            aggregates,
            simulations,
            request.seed,
            self.hatcher.resolver,
        )

        return SimulationResultSchema(
            egg_id=egg.id,
            simulations=simulations,
            aggregates=aggregates,
            expected_rarity_chances=ProbabilityCalculator.effective_rarity_chances(
                table, egg.rarity_caps, aggregates
            ),
            category_counts=dict(report.category_counts),
            rarity_counts=dict(report.rarity_counts),
            category_frequencies=report.category_frequencies(),
            rarity_frequencies=report.rarity_frequencies(),
        )
