"""CHIP-8 ALU operations (8xxx).

Each operation maps (vx, vy) to (result, flag). A flag of None leaves VF
untouched; otherwise VF is written before the result is stored, so the
result wins when the destination register is VF itself.
"""

from typing import Callable, Optional

import jax.numpy as jnp

from octocore.constants import FLAG_REGISTER
from octocore.state import EmulatorState
from octocore.decode import DecodedInstruction

AluResult = tuple[jnp.ndarray, Optional[jnp.ndarray]]


def alu_set(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, result > 0xFF


def alu_sub_xy(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    return (vx - vy) & 0xFF, vx >= vy


def alu_sub_yx(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    return (vy - vx) & 0xFF, vy >= vx


def alu_shift_right(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_shift_left(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


def alu_shift_right_from_y(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XY6 (legacy) - VX = VY >> 1, VY unchanged."""
    return alu_shift_right(vy, vy)


def alu_shift_left_from_y(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
    """8XYE (legacy) - VX = VY << 1, VY unchanged."""
    return alu_shift_left(vy, vy)


def _invert_borrow(operation):
    def inverted(vx: jnp.ndarray, vy: jnp.ndarray) -> AluResult:
        result, flag = operation(vx, vy)
        return result, ~flag
    return inverted


def make_alu_instruction(operation: Callable[[jnp.ndarray, jnp.ndarray], AluResult], borrow: bool = False):
    """Wrap an ALU operation into an instruction handler.

    Operands are widened to int32 so carries and borrows are visible.
    `borrow` marks subtractions, whose flag polarity follows the state's
    `borrow_sets_flag` setting.
    """
    inverted = _invert_borrow(operation) if borrow else None

    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        vx = jnp.astype(state.V[instruction.x], jnp.int32)
        vy = jnp.astype(state.V[instruction.y], jnp.int32)
        fn = inverted if borrow and state.borrow_sets_flag else operation
        result, vf = fn(vx, vy)

        new_V = state.V
        if vf is not None:
            new_V = new_V.at[FLAG_REGISTER].set(jnp.astype(vf, jnp.uint8))
        new_V = new_V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
        return state.replace(V=new_V)

    alu_instruction.__doc__ = operation.__doc__
    return alu_instruction


execute_alu_set = make_alu_instruction(alu_set)
execute_alu_or = make_alu_instruction(alu_or)
execute_alu_and = make_alu_instruction(alu_and)
execute_alu_xor = make_alu_instruction(alu_xor)
execute_alu_add = make_alu_instruction(alu_add)
execute_alu_sub_xy = make_alu_instruction(alu_sub_xy, borrow=True)
execute_alu_sub_yx = make_alu_instruction(alu_sub_yx, borrow=True)
execute_alu_shift_right = make_alu_instruction(alu_shift_right)
execute_alu_shift_left = make_alu_instruction(alu_shift_left)
execute_alu_shift_right_from_y = make_alu_instruction(alu_shift_right_from_y)
execute_alu_shift_left_from_y = make_alu_instruction(alu_shift_left_from_y)
