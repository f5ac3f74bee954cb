"""
Effect API routes.
"""

from fastapi import APIRouter, HTTPException, Depends

from hatchery.core.constants import GLOBAL_SUBJECT
from hatchery.exceptions import HatcheryError, UnknownEffectError

from ..schemas.effects import (
    ApplyEffectRequest,
    ApplyEffectResponse,
    EffectStateSchema,
    PersistResponse,
    PurgeResponse,
    RemoveEffectResponse,
)
from ..services.effect_service import EffectService
from ..dependencies import get_effect_service

router = APIRouter()


def _apply(service: EffectService, subject_id: str, request: ApplyEffectRequest):
    try:
        return service.apply_effect(subject_id, request.effect_id, request.duration)
    except UnknownEffectError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except HatcheryError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _remove(service: EffectService, subject_id: str, effect_id: str):
    try:
        return service.remove_effect(subject_id, effect_id)
    except UnknownEffectError as e:
        raise HTTPException(status_code=404, detail=str(e))


# === Global effects ===


@router.get("/global", response_model=EffectStateSchema)
async def get_global_effects(service: EffectService = Depends(get_effect_service)):
    """Server-wide effects, added to every subject when hatching."""
    return service.get_state(GLOBAL_SUBJECT)


@router.post("/global/apply", response_model=ApplyEffectResponse)
async def apply_global_effect(
    request: ApplyEffectRequest,
    service: EffectService = Depends(get_effect_service),
):
    """Apply a server-wide effect."""
    return _apply(service, GLOBAL_SUBJECT, request)


@router.delete("/global/{effect_id}", response_model=RemoveEffectResponse)
async def remove_global_effect(
    effect_id: str,
    service: EffectService = Depends(get_effect_service),
):
    """Remove a server-wide effect."""
    return _remove(service, GLOBAL_SUBJECT, effect_id)


@router.post("/purge", response_model=PurgeResponse)
async def purge_expired(service: EffectService = Depends(get_effect_service)):
    """Drop expired modifiers for every subject."""
    return service.purge_expired()


# === Subject effects ===


@router.get("/{subject_id}", response_model=EffectStateSchema)
async def get_effects(
    subject_id: str,
    service: EffectService = Depends(get_effect_service),
):
    """Live modifiers and aggregates of a subject."""
    return service.get_state(subject_id)


@router.post("/{subject_id}/apply", response_model=ApplyEffectResponse)
async def apply_effect(
    subject_id: str,
    request: ApplyEffectRequest,
    service: EffectService = Depends(get_effect_service),
):
    """Apply a configured effect to a subject."""
    return _apply(service, subject_id, request)


@router.delete("/{subject_id}/{effect_id}", response_model=RemoveEffectResponse)
async def remove_effect(
    subject_id: str,
    effect_id: str,
    service: EffectService = Depends(get_effect_service),
):
    """Remove an effect from a subject."""
    return _remove(service, subject_id, effect_id)


@router.post("/{subject_id}/clear", response_model=PersistResponse)
async def clear_effects(
    subject_id: str,
    service: EffectService = Depends(get_effect_service),
):
    """Remove every modifier from a subject."""
    return service.clear_subject(subject_id)


@router.post("/{subject_id}/save", response_model=PersistResponse)
async def save_effects(
    subject_id: str,
    service: EffectService = Depends(get_effect_service),
):
    """Persist a subject's live modifiers."""
    return service.save_subject(subject_id)


@router.post("/{subject_id}/load", response_model=PersistResponse)
async def load_effects(
    subject_id: str,
    service: EffectService = Depends(get_effect_service),
):
    """Replace a subject's modifiers with the persisted ones."""
    return service.load_subject(subject_id)
