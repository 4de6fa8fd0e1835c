"""Main CHIP-8 interpreter execution engine.

Instruction semantics are traced and jitted: `execute` dispatches through
`jax.lax.switch` and `run` executes whole batches inside a single
`jax.lax.while_loop`. The traced code reports faults as codes; the Python
wrappers here turn them into exceptions and log absorbed invalid opcodes.
"""

from typing import Optional

import jax
import jax.lax
import jax.numpy as jnp
from octocore.state import EmulatorState
from octocore.decode import decode
from octocore.constants import PROGRAM_START, MEMORY_SIZE, INSTRUCTION_SIZE
from octocore.errors import InvalidOpcode, RomTooLarge
from octocore.faults import Fault, range_fault, fault_error
from octocore.memory import check_range, read_word
from octocore.table import INSTRUCTIONS, lookup, instruction_index
from octocore.logging import logger


def _match_dtypes(new: EmulatorState, like: EmulatorState) -> EmulatorState:
    return jax.tree_util.tree_map(lambda a, b: jnp.asarray(a, dtype=b.dtype), new, like)


def _branch(entry):
    def run_entry(state, instruction):
        fault, detail = entry.guard(state, instruction)
        return _match_dtypes(entry.handler(state, instruction), state), fault, detail
    return run_entry


BRANCHES = [_branch(entry) for entry in INSTRUCTIONS]


def _execute(state: EmulatorState, instruction: jnp.ndarray):
    decoded_instruction = decode(instruction)
    return jax.lax.switch(
        instruction_index(state, decoded_instruction),
        BRANCHES,
        state, decoded_instruction
    )


def _fetch(state: EmulatorState):
    fault, detail = range_fault(state.pc, INSTRUCTION_SIZE, Fault.INSTRUCTION_FETCH)
    instruction = read_word(state.memory, state.pc)
    return state.replace(pc=state.pc + INSTRUCTION_SIZE), instruction, fault, detail


def _step(state: EmulatorState):
    fetched, instruction, fetch_fault, fetch_detail = _fetch(state)
    new_state, fault, detail = _execute(fetched, instruction)
    fetch_failed = fetch_fault != Fault.NONE.value
    return (
        new_state,
        jnp.where(fetch_failed, fetch_fault, fault),
        jnp.where(fetch_failed, fetch_detail, detail),
    )


@jax.jit
def _run_until_fault(state: EmulatorState, n):
    """Run up to `n` instructions, stopping in front of the first fault."""
    state = _match_dtypes(state, state)

    def cond_fn(carry):
        _, count, fault = carry
        return (count < n) & (fault == Fault.NONE.value)

    def body_fn(carry):
        state, count, _ = carry
        new_state, fault, _ = _step(state)
        ok = fault == Fault.NONE.value
        state = jax.tree_util.tree_map(lambda a, b: jnp.where(ok, a, b), new_state, state)
        return state, count + ok, fault

    return jax.lax.while_loop(cond_fn, body_fn, (state, jnp.int32(0), jnp.int32(Fault.NONE.value)))


_fetch_jit = jax.jit(_fetch)
_execute_jit = jax.jit(_execute)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Expects the program counter to already point past the instruction, as
    left by `fetch`. Unknown opcodes run as a no-op and are counted, unless
    the state is in strict mode.
    """
    instruction = jnp.asarray(int(instruction) & 0xFFFF, dtype=jnp.uint16)
    new_state, fault, detail = _execute_jit(state, instruction)

    fault = int(fault)
    if fault == Fault.NONE:
        return new_state
    if fault != Fault.INVALID_OPCODE:
        raise fault_error(fault, int(detail))

    address = int(state.pc) - INSTRUCTION_SIZE
    if state.strict_opcodes:
        raise InvalidOpcode(address, int(detail))
    logger.warning(f"Invalid opcode 0x{int(detail):04X} at 0x{address:03X}, executed as no-op")
    return new_state.replace(invalid_opcodes=new_state.invalid_opcodes + 1)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    new_state, instruction, fault, detail = _fetch_jit(state)
    if int(fault) != Fault.NONE:
        raise fault_error(int(fault), int(detail))
    return new_state, int(instruction)


def step(state: EmulatorState) -> tuple[EmulatorState, Optional[tuple[int, int]]]:
    """Fetch, decode and execute exactly one instruction.

    Returns the new state and, when an unknown opcode was absorbed as a
    no-op, its (address, opcode) pair.
    """
    new_state, _, fault = _run_until_fault(state, 1)
    if int(fault) == Fault.NONE:
        return new_state, None

    # Replay through the raising path
    fetched, instruction = fetch(state)
    return execute(fetched, instruction), (int(state.pc), instruction)


def clock(state: EmulatorState) -> EmulatorState:
    """Fetch, decode and execute exactly one instruction."""
    return step(state)[0]


def run_until_fault(state: EmulatorState, n: int) -> tuple[EmulatorState, int, bool]:
    """Run up to `n` instructions in one jitted loop.

    Stops in front of the first instruction that faults or is not an
    instruction, without executing it. Returns the state, the number of
    instructions executed and whether the loop stopped early.
    """
    state, count, fault = _run_until_fault(state, n)
    return state, int(count), int(fault) != Fault.NONE


def run(state: EmulatorState, n: int) -> EmulatorState:
    """Run `n` clock cycles."""
    while n > 0:
        state, count, stopped = run_until_fault(state, n)
        n -= count
        if not stopped:
            break
        state = clock(state)
        n -= 1
    return state


def load(state: EmulatorState, rom: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    capacity = MEMORY_SIZE - PROGRAM_START
    if len(rom) > capacity:
        raise RomTooLarge(len(rom), capacity)
    rom_array = jnp.array(list(rom), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(rom_array)
    logger.debug(f"Loaded ROM of {len(rom)} bytes at 0x{PROGRAM_START:03X}")
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load a ROM file into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load(state, rom_data)


def mnemonic_at(state: EmulatorState, offset: int = 0) -> str:
    """Mnemonic of the instruction `offset` instructions away from the program counter."""
    address = int(state.pc) + offset * INSTRUCTION_SIZE
    check_range(address, INSTRUCTION_SIZE, "instruction fetch")
    instruction = decode(int(read_word(state.memory, address)))
    return lookup(state, instruction).mnemonic
