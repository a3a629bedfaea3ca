"""Session coordinator. Owns the in-memory records and runs one action end-to-end.

Action flow:
  1. Reject text that is empty after trimming (silent no-op).
  2. Create an EmotionLog with a fresh id and the current timestamp.
  3. Append it to the log list.
  4. Compute the next creature state via creature.transition().
  5. Add 1 to the safety score if the action was expressed.
  6. Persist logs, creature state, and score, in that order. Every write is
     attempted even if an earlier one failed. The in-memory update is not
     rolled back on failure.

A session starts uninitialized; initialize() loads the persisted records
(falling back to defaults) and is the only way to become ready. Any other
call before that raises SessionNotReadyError.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from emotionagotchi.creature import initial_state, transition
from emotionagotchi.models import ACTIONS, Action, CreatureState, EmotionLog, SaveResult
from emotionagotchi.storage import Storage

logger = logging.getLogger(__name__)


class SessionNotReadyError(RuntimeError):
    """Raised when a session is used before initialize()."""


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _new_id() -> str:
    return str(uuid.uuid4())


class Session:
    """Holds logs, creature state and safety score for one user on one device.

    Args:
        storage:    Persistence gateway the records are loaded from and saved to.
        clock:      Returns the current time in ms since epoch.
        id_factory: Returns a new unique log id.
    """

    def __init__(
        self,
        storage: Storage,
        clock: Callable[[], int] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._storage = storage
        self._clock = clock or _now_ms
        self._id_factory = id_factory or _new_id
        self._ready = False
        self._logs: list[EmotionLog] = []
        self._creature: CreatureState = initial_state()
        self._score = 0
        self._last_results: tuple[SaveResult, ...] = ()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._ready

    def _require_ready(self, operation: str) -> None:
        if not self._ready:
            raise SessionNotReadyError(f"Call initialize() before {operation}")

    def initialize(self) -> None:
        """Load persisted records, using defaults for anything missing."""
        self._logs = self._storage.load_logs()
        self._creature = self._storage.load_creature_state() or initial_state()
        self._score = self._storage.load_safety_score()
        self._ready = True
        logger.info(
            "session ready logs=%d brightness=%d size=%d score=%d",
            len(self._logs), self._creature.brightness, self._creature.size, self._score,
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def logs(self) -> tuple[EmotionLog, ...]:
        self._require_ready("reading logs")
        return tuple(self._logs)

    @property
    def creature_state(self) -> CreatureState:
        self._require_ready("reading the creature state")
        return self._creature

    @property
    def safety_score(self) -> int:
        self._require_ready("reading the safety score")
        return self._score

    @property
    def last_save_results(self) -> tuple[SaveResult, ...]:
        """(logs, creature, safety) results of the most recent recorded action."""
        return self._last_results

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def record_action(self, text: str, action: Action) -> EmotionLog | None:
        """Log a feeling and evolve the creature. Returns the new log, or None
        if the text was blank."""
        self._require_ready("recording an action")
        if action not in ACTIONS:
            raise ValueError(f"Unknown action {action!r}")
        if not text.strip():
            return None

        timestamp = self._clock()
        if self._logs:
            timestamp = max(timestamp, self._logs[-1].timestamp)
        log = EmotionLog(id=self._id_factory(), text=text, action=action, timestamp=timestamp)

        self._logs = [*self._logs, log]
        self._creature = transition(self._creature, action)
        if action == "expressed":
            self._score += 1

        self._last_results = (
            self._storage.save_logs(self._logs),
            self._storage.save_creature_state(self._creature),
            self._storage.save_safety_score(self._score),
        )
        failed = [r.error for r in self._last_results if not r.success]
        if failed:
            logger.warning("action %s kept in memory but %d write(s) failed", log.id, len(failed))
        return log

    def reset(self) -> None:
        """Back to defaults, and wipe the persisted records."""
        self._require_ready("resetting")
        self._logs = []
        self._creature = initial_state()
        self._score = 0
        self._last_results = ()
        self._storage.clear_all()
        logger.info("session reset")
