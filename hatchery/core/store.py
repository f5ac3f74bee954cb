"""Effect persistence stores.

Stores hold modifier records (remaining time, not absolute expiry) per
subject. Aggregates are derived on load and never written.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union
from urllib.parse import quote

from hatchery.core.effects import ModifierRecord


class EffectStore(ABC):
    """Abstract base for modifier persistence."""

    @abstractmethod
    def load(self, subject_id: str) -> List[ModifierRecord]:
        """Saved records for a subject (empty if none)."""
        pass

    @abstractmethod
    def save(self, subject_id: str, records: List[ModifierRecord]) -> None:
        """Replace the saved records for a subject."""
        pass

    @abstractmethod
    def delete(self, subject_id: str) -> bool:
        """Forget a subject. Returns True if anything was stored."""
        pass


class InMemoryEffectStore(EffectStore):
    """Process-local store, used by tests and the default API service."""

    def __init__(self):
        self._records: Dict[str, List[ModifierRecord]] = {}
        self._lock = threading.Lock()

    def load(self, subject_id: str) -> List[ModifierRecord]:
        with self._lock:
            return list(self._records.get(subject_id, []))

    def save(self, subject_id: str, records: List[ModifierRecord]) -> None:
        with self._lock:
            self._records[subject_id] = list(records)

    def delete(self, subject_id: str) -> bool:
        with self._lock:
            return self._records.pop(subject_id, None) is not None


class JsonFileEffectStore(EffectStore):
    """
    One JSON file per subject inside a directory.

    File layout:
        {"subject_id": "...", "modifiers": [{"source_id": ..., "remaining": ...}]}
    """

    def __init__(
        self,
        directory: Union[str, Path],
        logger: Optional[logging.Logger] = None,
    ):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()

    def _path(self, subject_id: str) -> Path:
        # Reversible encoding: one file per distinct subject id
        return self.directory / f"{quote(subject_id, safe='')}.json"

    def load(self, subject_id: str) -> List[ModifierRecord]:
        path = self._path(subject_id)
        with self._lock:
            if not path.exists():
                return []
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)

        if data.get("subject_id") != subject_id:
            self._logger.warning(
                "Ignoring %s: saved for subject=%r, not %r",
                path.name, data.get("subject_id"), subject_id,
            )
            return []

        records = [ModifierRecord.from_dict(item) for item in data.get("modifiers", [])]
        self._logger.debug("Loaded %d records for subject=%s", len(records), subject_id)
        return records

    def save(self, subject_id: str, records: List[ModifierRecord]) -> None:
        path = self._path(subject_id)
        payload = {
            "subject_id": subject_id,
            "modifiers": [record.to_dict() for record in records],
        }
        tmp_path = path.with_suffix(".json.tmp")
        with self._lock:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
            tmp_path.replace(path)
        self._logger.debug("Saved %d records for subject=%s", len(records), subject_id)

    def delete(self, subject_id: str) -> bool:
        path = self._path(subject_id)
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
            return True
