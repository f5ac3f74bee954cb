"""
Egg hatching API routes.
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from hatchery.exceptions import HatcheryError, UnknownEggError

from ..schemas.hatch import (
    HatchRequest,
    HatchResultSchema,
    PreviewSchema,
    SimulateRequest,
    SimulationResultSchema,
)
from ..services.hatch_service import HatchService
from ..dependencies import get_hatch_service

router = APIRouter()


@router.post("/simulate", response_model=SimulationResultSchema)
def simulate_hatches(
    request: SimulateRequest,
    service: HatchService = Depends(get_hatch_service),
):
    """
    Simulate many hatches of one egg.

    Uses the subject's live effects when `subject_id` is given.
    """
    try:
        return service.simulate(request)
    except UnknownEggError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (HatcheryError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{subject_id}/{egg_id}", response_model=HatchResultSchema)
async def hatch_egg(
    subject_id: str,
    egg_id: str,
    request: Optional[HatchRequest] = None,
    service: HatchService = Depends(get_hatch_service),
):
    """Hatch one egg for a subject."""
    seed = request.seed if request else None
    try:
        return service.hatch(subject_id, egg_id, seed)
    except UnknownEggError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HatcheryError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{subject_id}/{egg_id}/preview", response_model=PreviewSchema)
async def preview_egg(
    subject_id: str,
    egg_id: str,
    service: HatchService = Depends(get_hatch_service),
):
    """Chance of every outcome with the subject's current effects."""
    try:
        return service.preview(subject_id, egg_id)
    except UnknownEggError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HatcheryError as e:
        raise HTTPException(status_code=400, detail=str(e))
