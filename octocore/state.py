"""CHIP-8 interpreter state structures."""

import enum

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from octocore.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_BYTES, STACK_SIZE,
    NUM_REGISTERS, NUM_KEYS, DEFAULT_LEGACY_SHIFT, DEFAULT_BORROW_SETS_FLAG,
    DEFAULT_STRICT_OPCODES,
)


class DrawState(enum.IntEnum):
    """Draw handshake between the interpreter and its host.

    IDLE -> PENDING when cls/drw mutates the screen, PENDING -> ACKNOWLEDGED
    when the host has consumed the frame, ACKNOWLEDGED -> IDLE on the next
    timer tick. A new draw always moves back to PENDING.
    """
    IDLE = 0
    PENDING = 1
    ACKNOWLEDGED = 2


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.int32))


class EmulatorState(PyTreeNode):
    """Main CHIP-8 interpreter state."""
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: jnp.zeros(SCREEN_BYTES, dtype=jnp.uint8))
    stack: StackState = StackState()
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    draw_state: jnp.ndarray = field(default_factory=lambda: jnp.asarray(DrawState.IDLE.value, dtype=jnp.int32))
    invalid_opcodes: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.int32))
    legacy_shift: bool = field(pytree_node=False, default=DEFAULT_LEGACY_SHIFT)
    borrow_sets_flag: bool = field(pytree_node=False, default=DEFAULT_BORROW_SETS_FLAG)
    strict_opcodes: bool = field(pytree_node=False, default=DEFAULT_STRICT_OPCODES)

    @property
    def drawn(self) -> bool:
        """True while a screen mutation has not been cleared by a tick."""
        return bool(self.draw_state != DrawState.IDLE)

    @property
    def draw_ready(self) -> bool:
        """True when the host has a frame it has not acknowledged yet."""
        return bool(self.draw_state == DrawState.PENDING)


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    legacy_shift: bool = DEFAULT_LEGACY_SHIFT,
    borrow_sets_flag: bool = DEFAULT_BORROW_SETS_FLAG,
    strict_opcodes: bool = DEFAULT_STRICT_OPCODES,
) -> EmulatorState:
    """Create initial interpreter state with font data loaded."""
    state = EmulatorState(
        rng,
        legacy_shift=legacy_shift,
        borrow_sets_flag=borrow_sets_flag,
        strict_opcodes=strict_opcodes,
    )
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))
