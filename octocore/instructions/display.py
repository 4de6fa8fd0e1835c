"""CHIP-8 display operations."""

import jax.numpy as jnp
from octocore.state import EmulatorState, DrawState
from octocore.decode import DecodedInstruction
from octocore.constants import FLAG_REGISTER, SCREEN_HEIGHT, SCREEN_ROW_BYTES, MAX_SPRITE_HEIGHT
from octocore.faults import Fault, range_fault
from octocore.memory import read_bytes

# Sprite rows are processed at full height and masked down to N
sprite_rows = jnp.arange(MAX_SPRITE_HEIGHT)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Each sprite byte straddles at most two screen bytes of the same row. Both
    the row and the column byte wrap around the screen edges.
    """
    V = state.V.at[FLAG_REGISTER].set(0)
    vx = V[instruction.x]
    vy = jnp.astype(V[instruction.y], jnp.int32)

    sprite = read_bytes(state.memory, state.I, MAX_SPRITE_HEIGHT)
    sprite = jnp.where(sprite_rows < instruction.n, sprite, 0).astype(jnp.uint16)

    rows = (vy + sprite_rows) % SCREEN_HEIGHT
    column = jnp.astype(vx // 8, jnp.int32) % SCREEN_ROW_BYTES
    shift = vx % 8

    # Shifting in 16 bits leaves the spill-over byte zero when shift is 0
    first = jnp.astype(sprite >> shift, jnp.uint8)
    second = jnp.astype((sprite << (8 - shift)) & 0xFF, jnp.uint8)

    first_idx = rows * SCREEN_ROW_BYTES + column
    second_idx = rows * SCREEN_ROW_BYTES + (column + 1) % SCREEN_ROW_BYTES

    display = state.display
    collision = jnp.any(display[first_idx] & first) | jnp.any(display[second_idx] & second)
    display = display.at[first_idx].set(display[first_idx] ^ first)
    display = display.at[second_idx].set(display[second_idx] ^ second)

    return state.replace(
        display=display,
        V=V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8)),
        draw_state=jnp.int32(DrawState.PENDING.value),
    )


def check_display(state: EmulatorState, instruction: DecodedInstruction):
    return range_fault(state.I, instruction.n, Fault.SPRITE_READ)
