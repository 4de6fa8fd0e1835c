"""
Stateful interpreter facade.

The functional API passes `EmulatorState` values around; hosts that prefer a
single mutable object (a terminal front-end, a pygame window, a test harness)
use `Interpreter`, which owns one state and replaces it after every call.

Example:
    ```python
    from octocore import Interpreter

    chip8 = Interpreter(legacy_shift=False)
    chip8.load(rom_bytes)
    while running:
        for key in pressed_keys():
            chip8.set_key(key, True)
        clocks, ticks = pacer.owed()
        chip8.run(clocks)
        for _ in range(ticks):
            chip8.tick()
            if chip8.draw_ready():
                render(chip8.pixels())
                chip8.acknowledge_draw()
    ```
"""

from typing import List, Optional, Sequence

import jax
import jax.numpy as jnp
import numpy as np

from octocore.constants import (
    DEFAULT_LEGACY_SHIFT, DEFAULT_BORROW_SETS_FLAG, DEFAULT_STRICT_OPCODES, NUM_KEYS,
)
from octocore.state import EmulatorState, create_state
from octocore.emulator import step, run_until_fault, load, mnemonic_at
from octocore.timers import tick, acknowledge_draw, set_key
from octocore.display import framebuffer_pixels
from octocore.errors import Chip8Error
from octocore.logging import DiagnosticsCallback, logger
from octocore.pacing import Pacer


class Interpreter:
    """CHIP-8 interpreter owning its machine state."""

    def __init__(
        self,
        legacy_shift: bool = DEFAULT_LEGACY_SHIFT,
        borrow_sets_flag: bool = DEFAULT_BORROW_SETS_FLAG,
        strict_opcodes: bool = DEFAULT_STRICT_OPCODES,
        seed: int = 0,
        callbacks: Optional[Sequence[DiagnosticsCallback]] = None,
    ):
        """
        Args:
            legacy_shift: Use the VY-source forms of 8XY6/8XYE
            borrow_sets_flag: Set VF to 1 when a subtraction borrows (instead of when it does not)
            strict_opcodes: Raise InvalidOpcode on unknown instructions instead of skipping them
            seed: Seed for the random number instruction
            callbacks: Diagnostics callbacks notified of invalid opcodes and faults
        """
        self.legacy_shift = legacy_shift
        self.borrow_sets_flag = borrow_sets_flag
        self.strict_opcodes = strict_opcodes
        self.seed = seed
        self.callbacks: List[DiagnosticsCallback] = list(callbacks or [])
        self._state = self._fresh_state()

    def _fresh_state(self) -> EmulatorState:
        return create_state(
            jax.random.PRNGKey(self.seed),
            legacy_shift=self.legacy_shift,
            borrow_sets_flag=self.borrow_sets_flag,
            strict_opcodes=self.strict_opcodes,
        )

    @property
    def state(self) -> EmulatorState:
        """Current (immutable) machine state snapshot."""
        return self._state

    def reset(self):
        """Discard all machine state, keeping the configuration."""
        self._state = self._fresh_state()

    def load(self, rom: bytes):
        """Copy ROM bytes into memory at 0x200. Raises RomTooLarge."""
        self._state = load(self._state, rom)

    def clock(self):
        """Execute exactly one instruction.

        Fatal interpreter errors are reported to the callbacks and re-raised;
        the machine state is left as it was before the call.
        """
        try:
            state, invalid = step(self._state)
        except Chip8Error as error:
            address = int(self._state.pc)
            logger.error(f"{type(error).__name__} at 0x{address:03X}: {error}")
            for callback in self.callbacks:
                callback.on_fault(error)
            raise

        if invalid is not None:
            for callback in self.callbacks:
                callback.on_invalid_opcode(*invalid)
        self._state = state

    def run(self, n: int):
        """Execute `n` instructions.

        Runs batches in a single jitted loop and falls back to `clock` for
        the instruction that stopped a batch, so faults and invalid opcodes
        are reported exactly as they are for single steps.
        """
        while n > 0:
            self._state, count, stopped = run_until_fault(self._state, n)
            n -= count
            if not stopped:
                break
            self.clock()
            n -= 1

    def tick(self):
        """Advance timers, release keys and retire an acknowledged frame."""
        self._state = tick(self._state)

    def catch_up(self, pacer: Pacer, now_ns: Optional[int] = None) -> int:
        """Run every clock and tick owed by `pacer`; returns the number of ticks."""
        clocks, ticks = pacer.owed(now_ns)
        self.run(clocks)
        for _ in range(ticks):
            self.tick()
        return ticks

    def set_key(self, index: int, pressed: bool = True):
        self._state = set_key(self._state, index, pressed)

    def key(self, index: int) -> bool:
        if not 0 <= index < NUM_KEYS:
            raise ValueError(f"key index must be in [0, {NUM_KEYS}), got {index}")
        return bool(self._state.keypad[index])

    def framebuffer(self) -> bytes:
        """Packed framebuffer, 8 bytes per row, MSB is the left-most pixel."""
        return np.asarray(self._state.display, dtype=np.uint8).tobytes()

    def pixels(self) -> jnp.ndarray:
        """Framebuffer as a (32, 64) boolean array."""
        return framebuffer_pixels(self._state.display)

    @property
    def drawn(self) -> bool:
        return self._state.drawn

    def draw_ready(self) -> bool:
        return self._state.draw_ready

    def acknowledge_draw(self):
        self._state = acknowledge_draw(self._state)

    def delay(self) -> int:
        return int(self._state.delay_timer)

    def sound(self) -> int:
        return int(self._state.sound_timer)

    @property
    def invalid_opcodes(self) -> int:
        return int(self._state.invalid_opcodes)

    def mnemonic_at(self, offset: int = 0) -> str:
        """Mnemonic of the instruction `offset` instructions from the program counter."""
        return mnemonic_at(self._state, offset)
