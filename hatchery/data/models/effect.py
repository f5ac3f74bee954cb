"""Effect definition model for Hatchery."""

from typing import Dict, Optional

from pydantic import BaseModel, Field

from hatchery.core.effects import StackingPolicy


class EffectDefinition(BaseModel):
    """Configured effect: a bundle of stat modifiers with a shared duration."""
    id: str = Field(..., description="Unique identifier")
    display_name: str = Field(..., description="Display name")
    description: str = Field(default="")
    duration: Optional[float] = Field(default=None, ge=0, description="Seconds; null is permanent")
    stacking: StackingPolicy = Field(default=StackingPolicy.RESET)
    stat_modifiers: Dict[str, float] = Field(default_factory=dict)

    @property
    def is_permanent(self) -> bool:
        return self.duration is None
