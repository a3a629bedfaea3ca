"""Core domain models.

The session coordinator and the storage gateway operate on these types.
Pydantic is used for validation and serialisation at every storage boundary.
Snapshots are frozen: a new creature state replaces the old one wholesale.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Action = Literal["expressed", "suppressed"]

Animation = Literal["idle", "grow", "curl", "celebrate"]

ACTIONS: tuple[str, ...] = ("expressed", "suppressed")

# 9999-12-30T00:00:00Z in ms; later values do not fit a datetime in every timezone
MAX_TIMESTAMP = 253_402_128_000_000


class EmotionLog(BaseModel):
    """One logged feeling and whether it was expressed or suppressed."""

    model_config = ConfigDict(frozen=True, strict=True)

    id: str
    text: str = Field(min_length=1)
    action: Action
    timestamp: int = Field(ge=0, le=MAX_TIMESTAMP)  # ms since epoch


class CreatureState(BaseModel):
    """Visual condition of the creature.

    brightness and size live in 0–100; creature.transition() keeps them there.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    brightness: int
    size: int
    animation: Animation


class SaveResult(BaseModel):
    """Outcome of a single storage write. Saves never raise."""

    model_config = ConfigDict(frozen=True)

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> SaveResult:
        return cls(success=True)

    @classmethod
    def failure(cls, message: str) -> SaveResult:
        return cls(success=False, error=message)
