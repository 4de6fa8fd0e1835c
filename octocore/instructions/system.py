"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from octocore.state import EmulatorState, DrawState
from octocore.decode import DecodedInstruction
from octocore.faults import Fault, fault_if
from octocore.stack import pop, underflow_fault


def no_op(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """No operation."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(
        display=jnp.zeros_like(state.display),
        draw_state=jnp.int32(DrawState.PENDING.value),
    )


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


def check_return(state: EmulatorState, instruction: DecodedInstruction):
    return underflow_fault(state.stack)


def check_not_an_instruction(state: EmulatorState, instruction: DecodedInstruction):
    return fault_if(True, Fault.INVALID_OPCODE, instruction.raw)
