"""CHIP-8 stack operations."""

import jax.numpy as jnp
from octocore.constants import ADDRESS_MASK, STACK_SIZE
from octocore.faults import Fault, fault_if
from octocore.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    masked_address = address & ADDRESS_MASK
    new_data = stack.data.at[stack.pointer].set(masked_address, mode="drop")
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = stack.pointer - 1
    popped_address = stack.data.at[new_pointer].get(mode="fill", fill_value=0)
    new_data = stack.data.at[new_pointer].set(0, mode="drop")
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def overflow_fault(stack: StackState):
    return fault_if(stack.pointer >= STACK_SIZE, Fault.STACK_OVERFLOW, stack.pointer)


def underflow_fault(stack: StackState):
    return fault_if(stack.pointer <= 0, Fault.STACK_UNDERFLOW, stack.pointer)
