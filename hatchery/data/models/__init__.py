# Data Models
from .pet import Pet, PetVariant
from .egg import Egg, RarityTierConfig
from .effect import EffectDefinition

__all__ = [
    "Pet",
    "PetVariant",
    "Egg",
    "RarityTierConfig",
    "EffectDefinition",
]
