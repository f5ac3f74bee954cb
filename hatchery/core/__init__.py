# Core engine modules
from .constants import (
    PERMANENT,
    PERMANENT_PREFIX,
    GLOBAL_SUBJECT,
    LUCK_BOOST,
    RARE_LUCK_BOOST,
    ULTRA_LUCK_BOOST,
    SPEED_MULTIPLIER,
    DAMAGE_BOOST,
    DEFENSE_BOOST,
    BASE_STATS,
    DEFAULT_COMMON_RARITY,
)

from .effects import (
    StackingPolicy,
    ModifierEventType,
    Modifier,
    ModifierHandle,
    ModifierRecord,
    ModifierEvent,
    EffectAggregationEngine,
)
from .tables import RarityTier, RarityTable, validate_pool
from .probability import ProbabilityCalculator
from .resolver import ResolvedReward, RewardResolver, resolve
from .simulation import SimulationReport, simulate, compare_luck
from .store import EffectStore, InMemoryEffectStore, JsonFileEffectStore

__all__ = [
    # Constants
    "PERMANENT",
    "PERMANENT_PREFIX",
    "GLOBAL_SUBJECT",
    "LUCK_BOOST",
    "RARE_LUCK_BOOST",
    "ULTRA_LUCK_BOOST",
    "SPEED_MULTIPLIER",
    "DAMAGE_BOOST",
    "DEFENSE_BOOST",
    "BASE_STATS",
    "DEFAULT_COMMON_RARITY",
    # Effects
    "StackingPolicy",
    "ModifierEventType",
    "Modifier",
    "ModifierHandle",
    "ModifierRecord",
    "ModifierEvent",
    "EffectAggregationEngine",
    # Resolution
    "RarityTier",
    "RarityTable",
    "validate_pool",
    "ProbabilityCalculator",
    "ResolvedReward",
    "RewardResolver",
    "resolve",
    # Simulation
    "SimulationReport",
    "simulate",
    "compare_luck",
    # Persistence
    "EffectStore",
    "InMemoryEffectStore",
    "JsonFileEffectStore",
]
