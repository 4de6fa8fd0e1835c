"""CHIP-8 instruction table.

Maps a decoded instruction to its handler, the guard that reports its faults,
and a diagnostic mnemonic. The top nibble selects a group; groups 0, 5, 8, 9,
E and F are refined by the full word, the low nibble or the low byte.
Anything not in the table resolves to `nai` ("not an instruction").

Every 16-bit word is resolved ahead of time into an index into
`INSTRUCTIONS`, once per shift mode, so traced code can dispatch with a
single table read and `jax.lax.switch`.
"""

from typing import Callable, NamedTuple

import jax.numpy as jnp
import numpy as np

from octocore.state import EmulatorState
from octocore.decode import DecodedInstruction
from octocore.faults import no_fault
from octocore.instructions.system import (
    no_op, execute_clear_screen, execute_return, check_return, check_not_an_instruction,
)
from octocore.instructions.control_flow import (
    execute_jump, execute_call, check_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed,
)
from octocore.instructions.alu import (
    execute_alu_set, execute_alu_or, execute_alu_and, execute_alu_xor,
    execute_alu_add, execute_alu_sub_xy, execute_alu_sub_yx,
    execute_alu_shift_right, execute_alu_shift_left,
    execute_alu_shift_right_from_y, execute_alu_shift_left_from_y,
)
from octocore.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from octocore.instructions.display import execute_display, check_display
from octocore.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, check_add_to_index, execute_font_character,
    execute_bcd_conversion, check_bcd_conversion, execute_store_registers,
    check_store_registers, execute_load_registers, check_load_registers,
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]
Guard = Callable[[EmulatorState, DecodedInstruction], tuple[jnp.ndarray, jnp.ndarray]]


class Instruction(NamedTuple):
    mnemonic: str
    handler: Handler
    guard: Guard = no_fault


NOT_AN_INSTRUCTION = Instruction("nai", no_op, check_not_an_instruction)

SYSTEM = {
    0x00E0: Instruction("cls", execute_clear_screen),
    0x00EE: Instruction("ret", execute_return, check_return),
}

# Groups fully identified by their top nibble
FIXED = {
    0x1: Instruction("jp", execute_jump),
    0x2: Instruction("call", execute_call, check_call),
    0x3: Instruction("se", execute_skip_if_equal_immediate),
    0x4: Instruction("sne", execute_skip_if_not_equal_immediate),
    0x6: Instruction("ld", execute_set),
    0x7: Instruction("add", execute_add),
    0xA: Instruction("ldi", execute_set_index),
    0xB: Instruction("jp0", execute_jump_with_offset),
    0xC: Instruction("rnd", execute_random),
    0xD: Instruction("drw", execute_display, check_display),
}

# 5XY0 / 9XY0, low nibble must be zero
REGISTER_COMPARE = {
    0x5: Instruction("sey", execute_skip_if_equal_register),
    0x9: Instruction("sney", execute_skip_if_not_equal_register),
}

ALU = {
    0x0: Instruction("ldy", execute_alu_set),
    0x1: Instruction("or", execute_alu_or),
    0x2: Instruction("and", execute_alu_and),
    0x3: Instruction("xor", execute_alu_xor),
    0x4: Instruction("addy", execute_alu_add),
    0x5: Instruction("sub", execute_alu_sub_xy),
    0x7: Instruction("subn", execute_alu_sub_yx),
}

# 8XY6 / 8XYE, keyed by legacy_shift
SHIFT_RIGHT = {
    False: Instruction("shr", execute_alu_shift_right),
    True: Instruction("shry", execute_alu_shift_right_from_y),
}
SHIFT_LEFT = {
    False: Instruction("shl", execute_alu_shift_left),
    True: Instruction("shly", execute_alu_shift_left_from_y),
}

KEYS = {
    0x9E: Instruction("skp", execute_skip_if_key_pressed),
    0xA1: Instruction("skpn", execute_skip_if_key_not_pressed),
}

MISC = {
    0x07: Instruction("ldxdt", execute_get_delay_timer),
    0x0A: Instruction("ldk", execute_wait_for_key),
    0x15: Instruction("lddt", execute_set_delay_timer),
    0x18: Instruction("ldst", execute_set_sound_timer),
    0x1E: Instruction("addi", execute_add_to_index, check_add_to_index),
    0x29: Instruction("ldf", execute_font_character),
    0x33: Instruction("ldb", execute_bcd_conversion, check_bcd_conversion),
    0x55: Instruction("ldix", execute_store_registers, check_store_registers),
    0x65: Instruction("ldxi", execute_load_registers, check_load_registers),
}

INSTRUCTIONS = [
    NOT_AN_INSTRUCTION,
    *SYSTEM.values(),
    *FIXED.values(),
    *REGISTER_COMPARE.values(),
    *ALU.values(),
    *SHIFT_RIGHT.values(),
    *SHIFT_LEFT.values(),
    *KEYS.values(),
    *MISC.values(),
]


def _build_table(legacy_shift: bool) -> np.ndarray:
    """Resolve every 16-bit word to an index into INSTRUCTIONS."""
    words = np.arange(0x10000)
    group, n, nn = words >> 12, words & 0xF, words & 0xFF
    table = np.zeros(0x10000, dtype=np.uint8)

    for word, entry in SYSTEM.items():
        table[word] = INSTRUCTIONS.index(entry)
    for opcode, entry in FIXED.items():
        table[group == opcode] = INSTRUCTIONS.index(entry)
    for opcode, entry in REGISTER_COMPARE.items():
        table[(group == opcode) & (n == 0)] = INSTRUCTIONS.index(entry)

    alu = {**ALU, 0x6: SHIFT_RIGHT[legacy_shift], 0xE: SHIFT_LEFT[legacy_shift]}
    for operation, entry in alu.items():
        table[(group == 0x8) & (n == operation)] = INSTRUCTIONS.index(entry)
    for low_byte, entry in KEYS.items():
        table[(group == 0xE) & (nn == low_byte)] = INSTRUCTIONS.index(entry)
    for low_byte, entry in MISC.items():
        table[(group == 0xF) & (nn == low_byte)] = INSTRUCTIONS.index(entry)
    return table


OPCODE_TABLES = {legacy_shift: _build_table(legacy_shift) for legacy_shift in (False, True)}


def lookup(state: EmulatorState, instruction: DecodedInstruction) -> Instruction:
    """Select the table entry for a concrete decoded instruction."""
    return INSTRUCTIONS[OPCODE_TABLES[bool(state.legacy_shift)][int(instruction.raw)]]


def instruction_index(state: EmulatorState, instruction: DecodedInstruction) -> jnp.ndarray:
    """Traceable index into INSTRUCTIONS."""
    return jnp.asarray(OPCODE_TABLES[bool(state.legacy_shift)])[instruction.raw]
