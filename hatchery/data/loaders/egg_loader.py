"""Egg data loader for Hatchery."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..models.egg import Egg, RarityTierConfig


DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
EGGS_FILE = DATA_DIR / "eggs.json"


def _parse_egg(egg_data: dict) -> Egg:
    """Parse an egg from JSON data."""
    tiers = [RarityTierConfig(**tier) for tier in egg_data.get("rarity_tiers", [])]

    return Egg(
        id=egg_data["id"],
        name=egg_data["name"],
        description=egg_data.get("description", ""),
        pet_weights=egg_data["pet_weights"],
        rarity_tiers=tiers,
        common_rarity=egg_data.get("common_rarity", "basic"),
        common_floor=egg_data.get("common_floor", 0.0),
        max_luck_multiplier=egg_data.get("max_luck_multiplier"),
    )


@lru_cache(maxsize=1)
def load_eggs() -> list[Egg]:
    """Load all eggs from the JSON file.

    Returns:
        List of Egg objects.
    """
    with open(EGGS_FILE, "r", encoding="utf-8") as f:
        data = json.load(f)

    return [_parse_egg(egg) for egg in data["eggs"]]


def get_egg_by_id(egg_id: str) -> Optional[Egg]:
    """Get an egg by its ID, or None if unknown."""
    for egg in load_eggs():
        if egg.id == egg_id:
            return egg
    return None
