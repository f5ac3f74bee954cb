"""
Dependency injection for API services.
"""

from functools import lru_cache

from hatchery.core.effects import EffectAggregationEngine
from hatchery.core.hatcher import Hatcher
from hatchery.core.store import EffectStore, InMemoryEffectStore, JsonFileEffectStore

from .config import settings
from .services.effect_service import EffectService
from .services.hatch_service import HatchService


@lru_cache()
def get_engine() -> EffectAggregationEngine:
    """Get the shared EffectAggregationEngine."""
    return EffectAggregationEngine()


@lru_cache()
def get_effect_store() -> EffectStore:
    """Get the effect store (JSON files when EFFECT_STORE_DIR is set)."""
    if settings.EFFECT_STORE_DIR:
        return JsonFileEffectStore(settings.EFFECT_STORE_DIR)
    return InMemoryEffectStore()


@lru_cache()
def get_effect_service() -> EffectService:
    """Get EffectService singleton."""
    return EffectService(get_engine(), get_effect_store())


@lru_cache()
def get_hatch_service() -> HatchService:
    """Get HatchService singleton."""
    return HatchService(Hatcher(get_engine()), settings)
