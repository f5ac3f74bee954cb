"""Egg data model for Hatchery."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from hatchery.core.constants import DEFAULT_COMMON_RARITY, LUCK_BOOST
from hatchery.core.tables import RarityTable, RarityTier


class RarityTierConfig(BaseModel):
    """Rarity tier as written in egg configuration."""
    id: str = Field(..., description="Rarity id (e.g. golden)")
    chance: float = Field(..., description="Base probability before luck")
    rank: int = Field(default=0, description="Higher is rarer")
    luck_stat: str = Field(default=LUCK_BOOST, description="Aggregate stat scaling this tier")
    cap: Optional[float] = Field(default=None, description="Cap on effective probability")


class Egg(BaseModel):
    """
    Hatchery egg model.

    Stage 1 draws a pet from `pet_weights`; stage 2 draws a variant from
    `rarity_tiers`, with `common_rarity` taking whatever chance is left.
    """
    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    pet_weights: Dict[str, float] = Field(..., description="Pet id -> weight")
    rarity_tiers: List[RarityTierConfig] = Field(default_factory=list)
    common_rarity: str = Field(default=DEFAULT_COMMON_RARITY)
    common_floor: float = Field(default=0.0)
    max_luck_multiplier: Optional[float] = Field(default=None)

    @property
    def pool(self) -> Dict[str, float]:
        return dict(self.pet_weights)

    @property
    def rarity_caps(self) -> Dict[str, float]:
        return {t.id: t.cap for t in self.rarity_tiers if t.cap is not None}

    def rarity_table(self) -> RarityTable:
        """Build the resolver's rarity table for this egg."""
        return RarityTable(
            tiers=tuple(
                RarityTier(
                    rarity_id=t.id,
                    base_probability=t.chance,
                    rank=t.rank,
                    luck_stat=t.luck_stat,
                )
                for t in self.rarity_tiers
            ),
            common_rarity=self.common_rarity,
            common_floor=self.common_floor,
            max_luck_multiplier=self.max_luck_multiplier,
        )
