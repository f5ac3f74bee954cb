"""
Static data API routes.
"""

from fastapi import APIRouter, HTTPException
from typing import Optional, List, Dict, Any

from hatchery.data.loaders import (
    load_eggs,
    get_egg_by_id,
    load_pets,
    get_pet_by_id,
    load_effects,
)

router = APIRouter()


# === Eggs ===


@router.get("/eggs")
async def get_all_eggs() -> List[Dict[str, Any]]:
    """Get all eggs."""
    return [e.model_dump() for e in load_eggs()]


@router.get("/eggs/{egg_id}")
async def get_egg(egg_id: str) -> Dict[str, Any]:
    """Get specific egg by ID."""
    egg = get_egg_by_id(egg_id)
    if egg is None:
        raise HTTPException(status_code=404, detail="Egg not found")
    return egg.model_dump()


# === Pets ===


@router.get("/pets")
async def get_all_pets(category: Optional[str] = None) -> List[Dict[str, Any]]:
    """Get all pets, optionally filtered by category."""
    pets = load_pets()
    if category is not None:
        pets = [p for p in pets if p.category == category]
    return [p.model_dump() for p in pets]


@router.get("/pets/{pet_id}")
async def get_pet(pet_id: str) -> Dict[str, Any]:
    """Get specific pet by ID."""
    pet = get_pet_by_id(pet_id)
    if pet is None:
        raise HTTPException(status_code=404, detail="Pet not found")
    return pet.model_dump()


# === Effects ===


@router.get("/effects")
async def get_all_effects() -> List[Dict[str, Any]]:
    """Get all effect definitions."""
    return [e.model_dump(mode="json") for e in load_effects()]
