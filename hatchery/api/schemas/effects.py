"""
Effect-related API schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Optional

from .common import BaseResponse


class ApplyEffectRequest(BaseModel):
    """Apply a configured effect."""

    effect_id: str
    duration: Optional[float] = Field(
        default=None, ge=0, description="Override the configured duration (seconds)"
    )


class ModifierSchema(BaseModel):
    """One live modifier."""

    source_id: str
    stat_key: str
    value: float
    remaining: Optional[float] = None  # None = permanent
    permanent: bool = False


class EffectStateSchema(BaseModel):
    """Live modifiers and aggregates of a subject."""

    subject_id: str
    modifiers: List[ModifierSchema]
    aggregates: Dict[str, float]


class ApplyEffectResponse(BaseResponse):
    """Result of applying an effect."""

    effect_id: str
    source_id: str
    state: EffectStateSchema


class RemoveEffectResponse(BaseResponse):
    """Result of removing an effect."""

    effect_id: str
    removed: int
    state: EffectStateSchema


class PersistResponse(BaseResponse):
    """Result of a save, load or clear."""

    subject_id: str
    count: int


class PurgeResponse(BaseResponse):
    """Result of purging expired modifiers."""

    purged: int
