"""Egg hatching.

Ties the effect engine, the reward resolver and the egg/pet data together:
a subject's live aggregates (plus server-wide ones) feed the resolver, and
the resolved (pet, variant) pair is looked up in the pet catalog.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from hatchery.core.constants import CHANCE_PRECISION, GLOBAL_SUBJECT, LUCK_BOOST, MIN_CHANCE_TO_SHOW
from hatchery.core.effects import EffectAggregationEngine
from hatchery.core.probability import ProbabilityCalculator
from hatchery.core.resolver import RandomSource, ResolvedReward, RewardResolver
from hatchery.data.loaders import get_egg_by_id, get_pet_variant
from hatchery.data.models import Egg, PetVariant
from hatchery.exceptions import UnknownEggError

EggLookup = Callable[[str], Optional[Egg]]
PetCatalog = Callable[[str, str], Optional[PetVariant]]


@dataclass(frozen=True)
class HatchResult:
    """Result of hatching one egg."""
    egg_id: str
    reward: ResolvedReward
    pet: Optional[PetVariant]
    luck_multiplier: float

    @property
    def pet_id(self) -> str:
        return self.reward.category_id

    @property
    def variant(self) -> str:
        return self.reward.rarity_id


@dataclass(frozen=True)
class PreviewEntry:
    """One row of an egg preview."""
    pet_id: str
    variant: str
    chance: float
    label: str
    display_name: Optional[str] = None


class Hatcher:
    """
    Hatches eggs for subjects.

    Usage:
        engine = EffectAggregationEngine()
        hatcher = Hatcher(engine)
        result = hatcher.hatch("player_1", "basic_egg")
    """

    def __init__(
        self,
        engine: EffectAggregationEngine,
        eggs: EggLookup = get_egg_by_id,
        catalog: PetCatalog = get_pet_variant,
        resolver: Optional[RewardResolver] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.engine = engine
        self._eggs = eggs
        self._catalog = catalog
        self._logger = logger or logging.getLogger(__name__)
        self.resolver = resolver or RewardResolver(self._logger)

    def get_egg(self, egg_id: str) -> Egg:
        egg = self._eggs(egg_id)
        if egg is None:
            raise UnknownEggError(egg_id)
        return egg

    def aggregates_for(self, subject_id: str, now: Optional[float] = None) -> Dict[str, float]:
        """
        Aggregates a hatch sees: the subject's own plus server-wide effects.
        """
        aggregates = self.engine.get_all_aggregates(subject_id, now)
        if subject_id == GLOBAL_SUBJECT:
            return aggregates

        for stat, value in self.engine.get_all_aggregates(GLOBAL_SUBJECT, now).items():
            aggregates[stat] = aggregates.get(stat, 0.0) + value
        return aggregates

    def hatch(
        self,
        subject_id: str,
        egg_id: str,
        random_source: Optional[RandomSource] = None,
        now: Optional[float] = None,
    ) -> HatchResult:
        """
        Hatch one egg for a subject.

        Args:
            subject_id: Player hatching the egg.
            egg_id: Egg to hatch.
            random_source: Callable returning floats in [0, 1); defaults
                to the module-level `random.random`.
            now: Evaluation time for effect expiry.

        Raises:
            UnknownEggError: No egg with that id.
        """
        egg = self.get_egg(egg_id)
        aggregates = self.aggregates_for(subject_id, now)

        reward = self.resolver.resolve(
            egg.pool,
            egg.rarity_table(),
            egg.rarity_caps,
            aggregates,
            random_source or random.random,
        )
        pet = self._catalog(reward.category_id, reward.rarity_id)
        if pet is None:
            self._logger.warning(
                "No catalog entry for pet=%s variant=%s", reward.category_id, reward.rarity_id
            )

        luck = ProbabilityCalculator.luck_multiplier(
            aggregates, LUCK_BOOST, egg.max_luck_multiplier
        )
        self._logger.info(
            "Hatched %s: subject=%s pet=%s variant=%s luck=%.2f",
            egg_id, subject_id, reward.category_id, reward.rarity_id, luck,
        )
        return HatchResult(egg_id=egg_id, reward=reward, pet=pet, luck_multiplier=luck)

    def preview(
        self,
        subject_id: str,
        egg_id: str,
        now: Optional[float] = None,
        min_chance_to_show: float = MIN_CHANCE_TO_SHOW,
        precision: int = CHANCE_PRECISION,
    ) -> List[PreviewEntry]:
        """
        Chance of every (pet, variant) outcome for this subject right now,
        most likely first.
        """
        egg = self.get_egg(egg_id)
        chances = ProbabilityCalculator.hatch_chances(
            egg.pool,
            egg.rarity_table(),
            egg.rarity_caps,
            self.aggregates_for(subject_id, now),
        )

        entries = []
        for (pet_id, variant), chance in chances.items():
            pet = self._catalog(pet_id, variant)
            entries.append(PreviewEntry(
                pet_id=pet_id,
                variant=variant,
                chance=chance,
                label=ProbabilityCalculator.format_chance(chance, min_chance_to_show, precision),
                display_name=pet.display_name if pet else None,
            ))

        entries.sort(key=lambda e: (-e.chance, e.pet_id, e.variant))
        return entries
