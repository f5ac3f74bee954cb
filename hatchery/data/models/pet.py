"""Pet data model for Hatchery."""

import math
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from hatchery.core.constants import POWER_PER_LEVEL, VARIANT_RARITY


class PetVariant(BaseModel):
    """One hatchable form of a pet (basic, golden, rainbow)."""
    variant: str = Field(..., description="Variant id")
    display_name: str = Field(..., description="Display name")
    power: int = Field(..., ge=0)
    health: int = Field(..., ge=0)
    abilities: List[str] = Field(default_factory=list)

    @property
    def rarity(self) -> str:
        """Display rarity of this variant."""
        return VARIANT_RARITY.get(self.variant, "common")

    def effective_power(self, level: int = 1) -> int:
        """Power at a given level, +10% per level above 1."""
        level_multiplier = 1 + (max(1, level) - 1) * POWER_PER_LEVEL
        return math.floor(self.power * level_multiplier)


class Pet(BaseModel):
    """Hatchery pet model."""
    id: str = Field(..., description="Unique identifier (lowercase)")
    name: str = Field(..., description="Display name")
    category: str = Field(..., description="Habitat category")
    base_power: int = Field(default=0, ge=0)
    base_health: int = Field(default=0, ge=0)
    variants: Dict[str, PetVariant] = Field(default_factory=dict)

    def get_variant(self, variant: str) -> Optional[PetVariant]:
        return self.variants.get(variant)
