# Data Loaders
from .pet_loader import (
    load_pets,
    get_pet_by_id,
    get_pet_variant,
    get_pets_by_rarity,
)
from .egg_loader import (
    load_eggs,
    get_egg_by_id,
)
from .effect_loader import (
    load_effects,
    get_effect_by_id,
)

__all__ = [
    # Pet loaders
    "load_pets",
    "get_pet_by_id",
    "get_pet_variant",
    "get_pets_by_rarity",
    # Egg loaders
    "load_eggs",
    "get_egg_by_id",
    # Effect loaders
    "load_effects",
    "get_effect_by_id",
]
