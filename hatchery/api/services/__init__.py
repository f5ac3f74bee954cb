"""API services."""

from .effect_service import EffectService
from .hatch_service import HatchService

__all__ = [
    "EffectService",
    "HatchService",
]
