"""CHIP-8 60 Hz timer domain, keypad and draw handshake."""

import jax
import jax.numpy as jnp
from octocore.state import EmulatorState, DrawState
from octocore.constants import NUM_KEYS


def _count_down(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, 0).astype(timer.dtype)


@jax.jit
def tick(state: EmulatorState) -> EmulatorState:
    """Advance the 60 Hz domain by one tick.

    Decrements both timers (saturating at zero), releases every key, and
    retires an acknowledged frame.
    """
    draw_state = jnp.where(
        state.draw_state == DrawState.ACKNOWLEDGED.value,
        DrawState.IDLE.value,
        state.draw_state,
    ).astype(state.draw_state.dtype)
    return state.replace(
        delay_timer=_count_down(state.delay_timer),
        sound_timer=_count_down(state.sound_timer),
        keypad=jnp.zeros_like(state.keypad),
        draw_state=draw_state,
    )


def acknowledge_draw(state: EmulatorState) -> EmulatorState:
    """Mark the pending frame as consumed by the host."""
    if state.draw_state == DrawState.PENDING:
        return state.replace(draw_state=jnp.int32(DrawState.ACKNOWLEDGED.value))
    return state


def set_key(state: EmulatorState, index: int, pressed: bool = True) -> EmulatorState:
    """Set the state of one keypad key."""
    if not 0 <= index < NUM_KEYS:
        raise ValueError(f"key index must be in [0, {NUM_KEYS}), got {index}")
    return state.replace(keypad=state.keypad.at[index].set(bool(pressed)))
