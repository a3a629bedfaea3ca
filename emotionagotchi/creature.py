"""Creature state rules (pure functions, no storage, no clock)."""

from __future__ import annotations

from emotionagotchi.models import Action, Animation, CreatureState

MIN_LEVEL = 0
MAX_LEVEL = 100

# (brightness, size) change per action
DELTAS: dict[str, tuple[int, int]] = {
    "expressed": (5, 2),
    "suppressed": (-3, -1),
}


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def initial_state() -> CreatureState:
    """Snapshot used on first start and after a reset."""
    return CreatureState(brightness=50, size=50, animation="idle")


def transition(current: CreatureState, action: Action) -> CreatureState:
    """Return the creature state after one action.

    Out-of-range inputs are accepted and pulled back into bounds. The
    animation depends on the action and the resulting brightness only:
    expressed at full brightness celebrates, expressed otherwise grows,
    suppressed always curls.
    """
    if action not in DELTAS:
        raise ValueError(f"Unknown action {action!r}")
    d_brightness, d_size = DELTAS[action]

    brightness = clamp(current.brightness + d_brightness, MIN_LEVEL, MAX_LEVEL)
    size = clamp(current.size + d_size, MIN_LEVEL, MAX_LEVEL)

    animation: Animation
    if action == "expressed":
        animation = "celebrate" if brightness == MAX_LEVEL else "grow"
    else:
        animation = "curl"

    return CreatureState(brightness=brightness, size=size, animation=animation)


def clamped(state: CreatureState) -> CreatureState:
    """Pull a snapshot's levels into bounds, keeping its animation."""
    brightness = clamp(state.brightness, MIN_LEVEL, MAX_LEVEL)
    size = clamp(state.size, MIN_LEVEL, MAX_LEVEL)
    if brightness == state.brightness and size == state.size:
        return state
    return CreatureState(brightness=brightness, size=size, animation=state.animation)
