"""Effect definition loader for Hatchery."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..models.effect import EffectDefinition


DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
EFFECTS_FILE = DATA_DIR / "effects.json"


@lru_cache(maxsize=1)
def load_effects() -> list[EffectDefinition]:
    """Load all effect definitions from the JSON file."""
    with open(EFFECTS_FILE, "r", encoding="utf-8") as f:
        data = json.load(f)

    return [EffectDefinition(**effect) for effect in data["effects"]]


def get_effect_by_id(effect_id: str) -> Optional[EffectDefinition]:
    """Get an effect definition by its ID, or None if unknown."""
    for effect in load_effects():
        if effect.id == effect_id:
            return effect
    return None
