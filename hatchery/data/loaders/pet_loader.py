"""Pet data loader for Hatchery."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..models.pet import Pet, PetVariant


# Get the data directory path
DATA_DIR = Path(__file__).parent.parent.parent.parent / "data"
PETS_FILE = DATA_DIR / "pets.json"


def _parse_pet(pet_data: dict) -> Pet:
    """Parse a pet from JSON data.

    Args:
        pet_data: Dictionary containing pet data.

    Returns:
        Pet object.
    """
    variants = {
        variant_id: PetVariant(variant=variant_id, **variant_data)
        for variant_id, variant_data in pet_data.get("variants", {}).items()
    }

    return Pet(
        id=pet_data["id"],
        name=pet_data["name"],
        category=pet_data["category"],
        base_power=pet_data.get("base_power", 0),
        base_health=pet_data.get("base_health", 0),
        variants=variants,
    )


@lru_cache(maxsize=1)
def load_pets() -> list[Pet]:
    """Load all pets from the JSON file.

    Returns:
        List of Pet objects.
    """
    with open(PETS_FILE, "r", encoding="utf-8") as f:
        data = json.load(f)

    return [_parse_pet(pet) for pet in data["pets"]]


def get_pet_by_id(pet_id: str) -> Optional[Pet]:
    """Get a pet by its ID.

    Args:
        pet_id: The pet ID (e.g., "bear").

    Returns:
        Pet object if found, None otherwise.
    """
    for pet in load_pets():
        if pet.id == pet_id:
            return pet
    return None


def get_pet_variant(pet_id: str, variant: str) -> Optional[PetVariant]:
    """Look up the attributes of a hatched (pet, variant) pair."""
    pet = get_pet_by_id(pet_id)
    if pet is None:
        return None
    return pet.get_variant(variant)


def get_pets_by_rarity(rarity: str) -> list[PetVariant]:
    """Get every pet variant with a given display rarity."""
    return [
        variant
        for pet in load_pets()
        for variant in pet.variants.values()
        if variant.rarity == rarity
    ]
