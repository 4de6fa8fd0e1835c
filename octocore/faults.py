"""Fault codes for traced instruction steps.

Handlers run under `jax.jit` and cannot raise. Each fallible instruction has
a guard that reports a `Fault` code plus a detail word (the offending address
or instruction), and the Python side turns a non-zero code into the matching
`Chip8Error`.
"""

import enum

import jax.numpy as jnp

from octocore.constants import MEMORY_SIZE, STACK_SIZE
from octocore.errors import Chip8Error, InvalidAddress, StackOverflow, StackUnderflow


class Fault(enum.IntEnum):
    NONE = 0
    INVALID_OPCODE = 1
    STACK_OVERFLOW = 2
    STACK_UNDERFLOW = 3
    INSTRUCTION_FETCH = 4
    SPRITE_READ = 5
    INDEX_REGISTER = 6
    BCD_STORE = 7
    REGISTER_STORE = 8
    REGISTER_LOAD = 9


ADDRESS_FAULTS = {
    Fault.INSTRUCTION_FETCH: "instruction fetch",
    Fault.SPRITE_READ: "sprite read",
    Fault.INDEX_REGISTER: "index register",
    Fault.BCD_STORE: "BCD store",
    Fault.REGISTER_STORE: "register store",
    Fault.REGISTER_LOAD: "register load",
}


def fault_if(condition, fault: Fault, detail=0) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Report `fault` with `detail` where `condition` holds."""
    code = jnp.where(condition, jnp.int32(fault.value), jnp.int32(Fault.NONE.value))
    return code, jnp.asarray(detail, dtype=jnp.int32)


def no_fault(state, instruction) -> tuple[jnp.ndarray, jnp.ndarray]:
    return fault_if(False, Fault.NONE)


def range_fault(address, length, fault: Fault) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Report `fault` unless [address, address + length) lies in memory.

    The detail is the first address past the end of memory that was touched.
    """
    address = jnp.asarray(address, dtype=jnp.int32)
    bad_address = jnp.where(address >= MEMORY_SIZE, address, MEMORY_SIZE)
    return fault_if(address + length > MEMORY_SIZE, fault, bad_address)


def fault_error(fault: int, detail: int) -> Chip8Error:
    """Exception for a fatal fault code."""
    fault = Fault(fault)
    if fault == Fault.STACK_OVERFLOW:
        return StackOverflow(f"call nesting exceeds {STACK_SIZE} levels")
    if fault == Fault.STACK_UNDERFLOW:
        return StackUnderflow("return with empty stack")
    return InvalidAddress(detail, ADDRESS_FAULTS[fault])
