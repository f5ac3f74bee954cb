"""
Effect management service.
"""

import logging
from typing import List, Optional

from hatchery.core.constants import PERMANENT_PREFIX
from hatchery.core.effects import EffectAggregationEngine
from hatchery.core.store import EffectStore
from hatchery.data.loaders import get_effect_by_id
from hatchery.data.models import EffectDefinition
from hatchery.exceptions import UnknownEffectError

from ..schemas.effects import (
    ApplyEffectResponse,
    EffectStateSchema,
    ModifierSchema,
    PersistResponse,
    PurgeResponse,
    RemoveEffectResponse,
)


class EffectService:
    """
    Applies configured effects to subjects.

    An effect contributes one modifier per stat, all sharing the effect id
    as their source, so removing the effect removes every contribution.
    Permanent effects (game passes) use a `permanent_` source prefix.
    """

    def __init__(
        self,
        engine: EffectAggregationEngine,
        store: EffectStore,
        logger: Optional[logging.Logger] = None,
    ):
        self.engine = engine
        self.store = store
        self._logger = logger or logging.getLogger(__name__)

    @staticmethod
    def _get_effect(effect_id: str) -> EffectDefinition:
        effect = get_effect_by_id(effect_id)
        if effect is None:
            raise UnknownEffectError(effect_id)
        return effect

    @staticmethod
    def source_id(effect_id: str, duration: Optional[float]) -> str:
        """Source id the effect's modifiers are registered under."""
        if duration is None:
            return f"{PERMANENT_PREFIX}{effect_id}"
        return effect_id

    def get_state(self, subject_id: str, now: Optional[float] = None) -> EffectStateSchema:
        """Live modifiers and aggregates of a subject."""
        now = self.engine.resolve_now(now)
        modifiers: List[ModifierSchema] = [
            ModifierSchema(
                source_id=m.source_id,
                stat_key=m.stat_key,
                value=m.value,
                remaining=m.remaining(now),
                permanent=m.is_permanent,
            )
            for m in self.engine.get_modifiers(subject_id, now)
        ]
        return EffectStateSchema(
            subject_id=subject_id,
            modifiers=modifiers,
            aggregates=self.engine.get_all_aggregates(subject_id, now),
        )

    def apply_effect(
        self,
        subject_id: str,
        effect_id: str,
        duration: Optional[float] = None,
        now: Optional[float] = None,
    ) -> ApplyEffectResponse:
        """
        Apply a configured effect.

        Args:
            subject_id: Target subject.
            effect_id: Effect definition id.
            duration: Optional override of the configured duration.
            now: Evaluation time.

        Raises:
            UnknownEffectError: No effect with that id.
        """
        effect = self._get_effect(effect_id)
        if duration is None:
            duration = effect.duration
        source_id = self.source_id(effect.id, duration)

        for stat_key, value in effect.stat_modifiers.items():
            self.engine.apply_modifier(
                subject_id,
                source_id,
                stat_key,
                value,
                duration,
                effect.stacking,
                now=now,
            )

        self._logger.info(
            "Applied effect %s to subject=%s (duration=%s, stacking=%s)",
            effect.id, subject_id, duration, effect.stacking.value,
        )
        return ApplyEffectResponse(
            message=f"Applied {effect.display_name}",
            effect_id=effect.id,
            source_id=source_id,
            state=self.get_state(subject_id, now),
        )

    def remove_effect(
        self,
        subject_id: str,
        effect_id: str,
        now: Optional[float] = None,
    ) -> RemoveEffectResponse:
        """Remove every stat contribution of an effect (timed and permanent)."""
        effect = self._get_effect(effect_id)
        removed = 0
        for source_id in (effect.id, f"{PERMANENT_PREFIX}{effect.id}"):
            for stat_key in effect.stat_modifiers:
                if self.engine.remove_modifier(subject_id, source_id, stat_key):
                    removed += 1

        return RemoveEffectResponse(
            message=None if removed else f"{effect.display_name} was not active",
            effect_id=effect.id,
            removed=removed,
            state=self.get_state(subject_id, now),
        )

    def clear_subject(self, subject_id: str) -> PersistResponse:
        count = self.engine.clear_subject(subject_id)
        return PersistResponse(subject_id=subject_id, count=count)

    def save_subject(self, subject_id: str, now: Optional[float] = None) -> PersistResponse:
        """Write the subject's live modifiers to the store."""
        records = self.engine.snapshot(subject_id, now)
        self.store.save(subject_id, records)
        return PersistResponse(
            message=f"Saved {len(records)} modifiers",
            subject_id=subject_id,
            count=len(records),
        )

    def load_subject(self, subject_id: str, now: Optional[float] = None) -> PersistResponse:
        """Replace the subject's modifiers with the stored ones."""
        restored = self.engine.restore(subject_id, self.store.load(subject_id), now)
        return PersistResponse(
            message=f"Loaded {restored} modifiers",
            subject_id=subject_id,
            count=restored,
        )

    def purge_expired(self, now: Optional[float] = None) -> PurgeResponse:
        """Drop expired modifiers for every subject."""
        return PurgeResponse(purged=self.engine.purge_all_expired(now))
