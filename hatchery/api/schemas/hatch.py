"""
Hatch-related API schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Optional


class HatchRequest(BaseModel):
    """Optional hatch parameters."""

    seed: Optional[int] = None  # reproducible hatch


class HatchResultSchema(BaseModel):
    """Result of hatching one egg."""

    subject_id: str
    egg_id: str
    pet_id: str
    variant: str
    rarity: str
    display_name: Optional[str] = None
    power: Optional[int] = None
    health: Optional[int] = None
    abilities: List[str] = Field(default_factory=list)
    chance: float
    luck_multiplier: float


class PreviewEntrySchema(BaseModel):
    """Chance of one (pet, variant) outcome."""

    pet_id: str
    variant: str
    display_name: Optional[str] = None
    chance: float
    label: str


class PreviewSchema(BaseModel):
    """Egg preview for a subject."""

    subject_id: str
    egg_id: str
    aggregates: Dict[str, float]
    rarity_chances: Dict[str, float]
    entries: List[PreviewEntrySchema]


class SimulateRequest(BaseModel):
    """Monte Carlo hatch simulation request."""

    egg_id: str
    subject_id: Optional[str] = None  # use this subject's live effects
    simulations: Optional[int] = Field(default=None, ge=1)
    seed: Optional[int] = None
    luck_boost: Optional[float] = None  # extra luckBoost on top of effects


class SimulationResultSchema(BaseModel):
    """Simulation result schema."""

    egg_id: str
    simulations: int
    aggregates: Dict[str, float]
    expected_rarity_chances: Dict[str, float]
    category_counts: Dict[str, int]
    rarity_counts: Dict[str, int]
    category_frequencies: Dict[str, float]
    rarity_frequencies: Dict[str, float]
