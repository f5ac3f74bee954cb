"""Effect Aggregation System for Hatchery.

Tracks independently sourced modifiers per subject (player) and sums them
into one aggregate value per stat:
- Timed and permanent modifiers
- Extend, reset or stack when a source re-applies
- Lazy expiry on read, explicit purge sweeps
- Change notifications for UI layers
"""

import itertools
import logging
import math
import threading
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional

from hatchery.core.constants import BASE_STATS, PERMANENT
from hatchery.exceptions import InvalidModifierError


class StackingPolicy(str, Enum):
    """What happens when the same source re-applies a modifier."""

    EXTEND_DURATION = "extend_duration"  # Keep the later expiry
    RESET = "reset"  # Replace with a fresh expiry
    STACK = "stack"  # Add an independent entry

    @classmethod
    def coerce(cls, policy) -> "StackingPolicy":
        """Turn a config string into a policy, failing on unknown values."""
        if isinstance(policy, cls):
            return policy
        try:
            return cls(policy)
        except ValueError:
            raise InvalidModifierError(f"Unknown stacking policy: {policy!r}") from None


class ModifierEventType(str, Enum):
    """Kinds of modifier change notifications."""

    APPLIED = "applied"
    REMOVED = "removed"
    EXPIRED = "expired"
    CLEARED = "cleared"


@dataclass
class Modifier:
    """
    A single additive contribution to a stat.

    Attributes:
        subject_id: Entity the modifier applies to.
        source_id: Effect instance that created it.
        stat_key: Stat affected (e.g. "luckBoost").
        value: Additive fraction, 0.5 means +50%.
        expires_at: Absolute expiry time, None when permanent.
        entry_id: Distinguishes stacked entries of the same source.
    """

    subject_id: str
    source_id: str
    stat_key: str
    value: float
    expires_at: Optional[float] = None
    entry_id: int = 0

    @property
    def is_permanent(self) -> bool:
        return self.expires_at is None

    def is_expired(self, now: float) -> bool:
        """Check if modifier has expired at the given time."""
        return self.expires_at is not None and self.expires_at <= now

    def remaining(self, now: float) -> Optional[float]:
        """Seconds left, or None for permanent modifiers."""
        if self.expires_at is None:
            return None
        return max(0.0, self.expires_at - now)

    def handle(self) -> "ModifierHandle":
        return ModifierHandle(
            subject_id=self.subject_id,
            source_id=self.source_id,
            stat_key=self.stat_key,
            entry_id=self.entry_id,
            value=self.value,
            expires_at=self.expires_at,
        )


@dataclass(frozen=True)
class ModifierHandle:
    """Receipt returned by apply_modifier."""

    subject_id: str
    source_id: str
    stat_key: str
    entry_id: int
    value: float
    expires_at: Optional[float]


@dataclass(frozen=True)
class ModifierRecord:
    """
    Persisted form of a modifier.

    Stores the time left rather than the absolute expiry so a restored
    modifier loses no time while the subject was offline.
    """

    source_id: str
    stat_key: str
    value: float
    remaining: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "source_id": self.source_id,
            "stat_key": self.stat_key,
            "value": self.value,
            "remaining": self.remaining,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ModifierRecord":
        return cls(
            source_id=data["source_id"],
            stat_key=data["stat_key"],
            value=data["value"],
            remaining=data.get("remaining"),
        )


@dataclass(frozen=True)
class ModifierEvent:
    """Change notification delivered to subscribers."""

    type: ModifierEventType
    subject_id: str
    source_id: str
    stat_key: str
    value: float
    expires_at: Optional[float] = None


ModifierListener = Callable[[ModifierEvent], None]


def _later(current: Optional[float], candidate: Optional[float]) -> Optional[float]:
    """Later of two expiries, where None (permanent) outlasts everything."""
    if current is None or candidate is None:
        return None
    return max(current, candidate)


class EffectAggregationEngine:
    """
    Manages modifiers for every subject and sums them per stat.

    Each subject's modifier list is guarded by its own lock, so writes to
    one subject never block another.

    Usage:
        engine = EffectAggregationEngine()
        engine.apply_modifier("player1", "speed_potion", "luckBoost", 0.1, 300)
        luck = 1 + engine.get_aggregate("player1", "luckBoost")
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            clock: Time source used when a call omits `now`.
            logger: Logger for engine activity (module logger if omitted).
        """
        self._clock = clock
        self._logger = logger or logging.getLogger(__name__)

        # Modifiers per subject
        self._subject_modifiers: Dict[str, List[Modifier]] = {}
        self._subject_locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

        self._listeners: List[ModifierListener] = []
        self._entry_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def apply_modifier(
        self,
        subject_id: str,
        source_id: str,
        stat_key: str,
        value: float,
        duration: Optional[float] = PERMANENT,
        stacking_policy: StackingPolicy = StackingPolicy.RESET,
        now: Optional[float] = None,
    ) -> ModifierHandle:
        """
        Apply a modifier to a subject.

        If the subject already has a live modifier for the same source and
        stat, the stacking policy decides the outcome:
        - EXTEND_DURATION: expiry becomes the later of the two, never shorter.
        - RESET: existing entries are replaced by one fresh entry.
        - STACK: an independent entry is added; both count.

        Args:
            subject_id: Subject receiving the modifier.
            source_id: Effect instance creating it.
            stat_key: Stat affected.
            value: Additive fraction.
            duration: Seconds until expiry, or PERMANENT.
            stacking_policy: Policy (or its config string).
            now: Current time (engine clock if omitted).

        Returns:
            Handle for the entry that now carries the contribution.

        Raises:
            InvalidModifierError: Non-finite value, negative duration or
                unknown policy.
        """
        policy = StackingPolicy.coerce(stacking_policy)
        self._validate(stat_key, value, duration)
        now = self.resolve_now(now)
        expires_at = None if duration is PERMANENT else now + duration

        events: List[ModifierEvent] = []
        with self._lock_for(subject_id):
            with self._registry_lock:
                modifiers = self._subject_modifiers.setdefault(subject_id, [])
            events.extend(
                self._drop(
                    subject_id,
                    lambda m: m.source_id == source_id
                    and m.stat_key == stat_key
                    and m.is_expired(now),
                    ModifierEventType.EXPIRED,
                )
            )
            existing = [
                m for m in modifiers
                if m.source_id == source_id and m.stat_key == stat_key
            ]

            if existing and policy is StackingPolicy.EXTEND_DURATION:
                for modifier in existing:
                    modifier.expires_at = _later(modifier.expires_at, expires_at)
                    modifier.value = value
                target = existing[-1]
            else:
                if existing and policy is StackingPolicy.RESET:
                    for modifier in existing:
                        modifiers.remove(modifier)
                target = Modifier(
                    subject_id=subject_id,
                    source_id=source_id,
                    stat_key=stat_key,
                    value=value,
                    expires_at=expires_at,
                    entry_id=next(self._entry_ids),
                )
                modifiers.append(target)

            handle = target.handle()

        events.append(self._event(ModifierEventType.APPLIED, target))
        self._logger.debug(
            "Modifier applied: subject=%s source=%s stat=%s value=%s expires_at=%s policy=%s",
            subject_id, source_id, stat_key, value, handle.expires_at, policy.value,
        )
        self._notify(events)
        return handle

    def remove_modifier(self, subject_id: str, source_id: str, stat_key: str) -> bool:
        """
        Remove every entry for a source and stat.

        Returns:
            True if anything was removed, False otherwise.
        """
        with self._lock_for(subject_id):
            events = self._drop(
                subject_id,
                lambda m: m.source_id == source_id and m.stat_key == stat_key,
                ModifierEventType.REMOVED,
            )

        if events:
            self._logger.debug(
                "Modifier removed: subject=%s source=%s stat=%s entries=%d",
                subject_id, source_id, stat_key, len(events),
            )
            self._notify(events)
        return bool(events)

    def release(self, handle: ModifierHandle) -> bool:
        """Remove the single entry a handle refers to."""
        with self._lock_for(handle.subject_id):
            events = self._drop(
                handle.subject_id,
                lambda m: m.entry_id == handle.entry_id,
                ModifierEventType.REMOVED,
            )
        self._notify(events)
        return bool(events)

    def purge_expired(self, subject_id: str, now: Optional[float] = None) -> int:
        """
        Remove modifiers whose expiry is at or before `now`.

        Returns:
            Number of modifiers removed.
        """
        now = self.resolve_now(now)
        with self._lock_for(subject_id):
            events = self._drop(
                subject_id,
                lambda m: m.is_expired(now),
                ModifierEventType.EXPIRED,
            )

        if events:
            self._logger.debug(
                "Purged %d expired modifiers for subject=%s", len(events), subject_id
            )
            self._notify(events)
        return len(events)

    def purge_all_expired(self, now: Optional[float] = None) -> int:
        """Purge expired modifiers across every subject."""
        now = self.resolve_now(now)
        return sum(self.purge_expired(subject_id, now) for subject_id in self.get_subjects())

    def clear_subject(self, subject_id: str) -> int:
        """Clear all modifiers from a subject."""
        with self._lock_for(subject_id):
            events = self._drop(subject_id, lambda m: True, ModifierEventType.CLEARED)
            with self._registry_lock:
                self._subject_modifiers.pop(subject_id, None)

        if events:
            self._logger.info("Cleared %d modifiers for subject=%s", len(events), subject_id)
            self._notify(events)
        return len(events)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_aggregate(
        self,
        subject_id: str,
        stat_key: str,
        now: Optional[float] = None,
    ) -> float:
        """
        Sum of live modifier values for a stat.

        Returns 0.0 when the subject has no live modifiers for the stat.
        Consumers turn this into a multiplier as `1 + aggregate`.
        """
        now = self.resolve_now(now)
        with self._lock_for(subject_id):
            return math.fsum(
                m.value
                for m in self._subject_modifiers.get(subject_id, [])
                if m.stat_key == stat_key and not m.is_expired(now)
            )

    def get_all_aggregates(
        self,
        subject_id: str,
        now: Optional[float] = None,
    ) -> Dict[str, float]:
        """
        Aggregate for every known stat plus any stat with live modifiers.

        Returns dict with keys like 'luckBoost', 'speedMultiplier', etc.
        """
        now = self.resolve_now(now)
        values: Dict[str, List[float]] = {stat: [] for stat in BASE_STATS}
        with self._lock_for(subject_id):
            for modifier in self._subject_modifiers.get(subject_id, []):
                if not modifier.is_expired(now):
                    values.setdefault(modifier.stat_key, []).append(modifier.value)
        return {stat: math.fsum(stat_values) for stat, stat_values in values.items()}

    def get_modifiers(
        self,
        subject_id: str,
        now: Optional[float] = None,
    ) -> List[Modifier]:
        """Copies of the live modifiers on a subject."""
        now = self.resolve_now(now)
        with self._lock_for(subject_id):
            return [
                replace(m)
                for m in self._subject_modifiers.get(subject_id, [])
                if not m.is_expired(now)
            ]

    def get_subjects(self) -> List[str]:
        """Subjects that currently hold modifier state."""
        with self._registry_lock:
            return list(self._subject_modifiers.keys())

    def resolve_now(self, now: Optional[float] = None) -> float:
        """Explicit evaluation time, or the engine clock when omitted."""
        return self._clock() if now is None else now

    # ------------------------------------------------------------------
    # Persistence hooks
    # ------------------------------------------------------------------

    def snapshot(self, subject_id: str, now: Optional[float] = None) -> List[ModifierRecord]:
        """
        Modifier records for saving. Aggregates are never part of a snapshot.
        """
        now = self.resolve_now(now)
        return [
            ModifierRecord(
                source_id=m.source_id,
                stat_key=m.stat_key,
                value=m.value,
                remaining=m.remaining(now),
            )
            for m in self.get_modifiers(subject_id, now)
        ]

    def restore(
        self,
        subject_id: str,
        records: Iterable[ModifierRecord],
        now: Optional[float] = None,
    ) -> int:
        """
        Replace a subject's modifiers with saved records.

        Records with no time left are skipped.

        Returns:
            Number of modifiers restored.
        """
        now = self.resolve_now(now)
        self.clear_subject(subject_id)

        restored = 0
        for record in records:
            if record.remaining is not None and record.remaining <= 0:
                self._logger.debug(
                    "Skipping expired record: subject=%s source=%s",
                    subject_id, record.source_id,
                )
                continue
            self.apply_modifier(
                subject_id,
                record.source_id,
                record.stat_key,
                record.value,
                record.remaining,
                StackingPolicy.STACK,
                now=now,
            )
            restored += 1

        self._logger.info("Restored %d modifiers for subject=%s", restored, subject_id)
        return restored

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, listener: ModifierListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Function that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _lock_for(self, subject_id: str) -> threading.RLock:
        """
        Lock guarding one subject's modifier list.

        Locks live as long as the engine, one per subject ever seen, even
        after `clear_subject`. A caller may hold a reference between
        fetching and acquiring it, so dropping it could let two writers
        run under different locks.
        """
        with self._registry_lock:
            lock = self._subject_locks.get(subject_id)
            if lock is None:
                lock = threading.RLock()
                self._subject_locks[subject_id] = lock
            return lock

    def _drop(
        self,
        subject_id: str,
        predicate: Callable[[Modifier], bool],
        event_type: ModifierEventType,
    ) -> List[ModifierEvent]:
        """Remove matching modifiers. Caller holds the subject lock."""
        modifiers = self._subject_modifiers.get(subject_id)
        if not modifiers:
            return []

        kept = []
        events = []
        for modifier in modifiers:
            if predicate(modifier):
                events.append(self._event(event_type, modifier))
            else:
                kept.append(modifier)
        modifiers[:] = kept
        return events

    @staticmethod
    def _event(event_type: ModifierEventType, modifier: Modifier) -> ModifierEvent:
        return ModifierEvent(
            type=event_type,
            subject_id=modifier.subject_id,
            source_id=modifier.source_id,
            stat_key=modifier.stat_key,
            value=modifier.value,
            expires_at=modifier.expires_at,
        )

    def _notify(self, events: List[ModifierEvent]) -> None:
        for listener in list(self._listeners):
            for event in events:
                listener(event)

    @staticmethod
    def _validate(stat_key: str, value: float, duration: Optional[float]) -> None:
        if not isinstance(stat_key, str) or not stat_key:
            raise InvalidModifierError("stat_key must be a non-empty string")

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidModifierError(f"Modifier value must be a number, got {value!r}", stat_key)
        if not math.isfinite(value):
            raise InvalidModifierError(f"Modifier value must be finite, got {value!r}", stat_key)

        if duration is PERMANENT:
            return
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise InvalidModifierError(f"Duration must be a number, got {duration!r}", stat_key)
        if not math.isfinite(duration) or duration < 0:
            raise InvalidModifierError(
                f"Duration must be a finite non-negative number, got {duration!r}", stat_key
            )
