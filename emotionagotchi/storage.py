"""Persistence gateway for the three session records.

Records (key → JSON payload):

    emotionagotchi_logs      ← list of {id, text, action, timestamp}
    emotionagotchi_creature  ← {brightness, size, animation}
    emotionagotchi_safety    ← non-negative integer

Each record is saved and loaded independently. Reads are defensive: a
backend that throws, a payload that is not JSON, or JSON of the wrong
shape all yield the safe default for that record ([] / None / 0) and leave
the other records alone. Writes never raise either: failures come back as
SaveResult(success=False, error=...) and are remembered, both in a single
most-recent slot (last_error) and per record kind (error_for()).

The gateway serializes what it is handed and keeps no reference to it.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Literal

from pydantic import Field, TypeAdapter, ValidationError

from emotionagotchi.backends import KeyValueBackend, StorageQuotaError
from emotionagotchi.creature import clamped
from emotionagotchi.models import CreatureState, EmotionLog, SaveResult

logger = logging.getLogger(__name__)

LOGS_KEY = "emotionagotchi_logs"
CREATURE_KEY = "emotionagotchi_creature"
SAFETY_KEY = "emotionagotchi_safety"
PROBE_KEY = "__emotionagotchi_probe__"

RecordKind = Literal["logs", "creature", "safety"]

_KEYS: dict[str, str] = {
    "logs": LOGS_KEY,
    "creature": CREATURE_KEY,
    "safety": SAFETY_KEY,
}

_LABELS: dict[str, str] = {
    "logs": "emotion logs",
    "creature": "creature state",
    "safety": "safety score",
}

_logs_adapter = TypeAdapter(list[EmotionLog])

# largest integer a JSON number round-trips exactly as a double
MAX_SAFETY_SCORE = 2**53 - 1

_score_adapter = TypeAdapter(Annotated[int, Field(ge=0, le=MAX_SAFETY_SCORE, strict=True)])


def _full_message(label: str, error: Exception) -> str:
    return f"Storage full: could not save {label}. Clear old entries to free space. ({error})"


class Storage:
    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend
        self._last_error: str | None = None
        self._errors: dict[str, str | None] = {kind: None for kind in _KEYS}

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    @property
    def last_error(self) -> str | None:
        """Message of the most recent save failure, across all records."""
        return self._last_error

    def error_for(self, kind: RecordKind) -> str | None:
        """Message of the most recent save failure for one record kind."""
        return self._errors[kind]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def is_available(self) -> bool:
        """Probe the backend with a throwaway write."""
        try:
            self._probe()
        except Exception as e:
            logger.warning("Storage backend unavailable: %s", e)
            return False
        return True

    def _probe(self) -> None:
        self._backend.set_item(PROBE_KEY, PROBE_KEY)
        self._backend.remove_item(PROBE_KEY)

    def _save(self, kind: RecordKind, payload: str) -> SaveResult:
        label = _LABELS[kind]
        try:
            self._probe()
        except StorageQuotaError as e:
            return self._fail(kind, _full_message(label, e))
        except Exception as e:
            return self._fail(kind, f"Storage unavailable: could not save {label} ({e})")

        try:
            self._backend.set_item(_KEYS[kind], payload)
        except StorageQuotaError as e:
            return self._fail(kind, _full_message(label, e))
        except Exception as e:
            return self._fail(kind, f"Failed to save {label}: {e}")

        self._errors[kind] = None
        logger.debug("saved %s (%d bytes)", label, len(payload))
        return SaveResult.ok()

    def _fail(self, kind: RecordKind, message: str) -> SaveResult:
        logger.warning(message)
        self._last_error = message
        self._errors[kind] = message
        return SaveResult.failure(message)

    def _read(self, kind: RecordKind) -> str | None:
        try:
            return self._backend.get_item(_KEYS[kind])
        except Exception as e:
            logger.warning("Could not read %s: %s", _LABELS[kind], e)
            return None

    # ------------------------------------------------------------------
    # Emotion logs
    # ------------------------------------------------------------------

    def save_logs(self, logs: list[EmotionLog]) -> SaveResult:
        payload = json.dumps([log.model_dump() for log in logs])
        return self._save("logs", payload)

    def load_logs(self) -> list[EmotionLog]:
        """Stored logs in insertion order. Returns [] if missing or corrupt."""
        raw = self._read("logs")
        if raw is None:
            return []
        try:
            return _logs_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding corrupt emotion logs: %d error(s)", e.error_count())
            return []

    # ------------------------------------------------------------------
    # Creature state
    # ------------------------------------------------------------------

    def save_creature_state(self, state: CreatureState) -> SaveResult:
        return self._save("creature", state.model_dump_json())

    def load_creature_state(self) -> CreatureState | None:
        """Stored snapshot, clamped into bounds. Returns None if missing or corrupt."""
        raw = self._read("creature")
        if raw is None:
            return None
        try:
            state = CreatureState.model_validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding corrupt creature state: %d error(s)", e.error_count())
            return None
        return clamped(state)

    # ------------------------------------------------------------------
    # Safety score
    # ------------------------------------------------------------------

    def save_safety_score(self, score: int) -> SaveResult:
        return self._save("safety", json.dumps(score))

    def load_safety_score(self) -> int:
        """Stored score. Returns 0 if missing, corrupt, negative, or implausibly large."""
        raw = self._read("safety")
        if raw is None:
            return 0
        try:
            return _score_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning("Discarding corrupt safety score: %d error(s)", e.error_count())
            return 0

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def clear_all(self) -> None:
        """Remove all three records. Best effort: failures are only logged."""
        for kind, key in _KEYS.items():
            try:
                self._backend.remove_item(key)
            except Exception as e:
                logger.warning("Could not clear %s: %s", _LABELS[kind], e)
