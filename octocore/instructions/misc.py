"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from octocore.state import EmulatorState
from octocore.decode import DecodedInstruction
from octocore.constants import FONT_START, GLYPH_SIZE, MEMORY_SIZE, NUM_REGISTERS, INSTRUCTION_SIZE
from octocore.faults import Fault, fault_if, range_fault
from octocore.memory import read_bytes, write_bytes


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def _index_sum(state: EmulatorState, instruction: DecodedInstruction) -> jnp.ndarray:
    return jnp.astype(state.I, jnp.int32) + jnp.astype(state.V[instruction.x], jnp.int32)


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    return state.replace(I=jnp.astype(_index_sum(state, instruction), jnp.uint16))


def check_add_to_index(state: EmulatorState, instruction: DecodedInstruction):
    """An index at or past the end of memory is fatal."""
    new_i = _index_sum(state, instruction)
    return fault_if(new_i >= MEMORY_SIZE, Fault.INDEX_REGISTER, new_i)


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the program counter is rewound so the same instruction
    runs again on the next clock; the lowest pressed key wins.
    """
    def key_pressed_action(state):
        pressed_key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
        return state.replace(V=state.V.at[instruction.x].set(pressed_key))

    def wait_action(state):
        return state.replace(pc=state.pc - INSTRUCTION_SIZE)

    return jax.lax.cond(jnp.any(state.keypad), key_pressed_action, wait_action, state)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = jnp.astype(state.V[instruction.x] & 0xF, jnp.uint16)
    return state.replace(I=FONT_START + digit * GLYPH_SIZE)


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = state.V[instruction.x]
    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)
    return state.replace(memory=write_bytes(state.memory, state.I, digits))


def check_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction):
    return range_fault(state.I, 3, Fault.BCD_STORE)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I, I unchanged."""
    new_memory = write_bytes(state.memory, state.I, state.V, count=instruction.x + 1)
    return state.replace(memory=new_memory)


def check_store_registers(state: EmulatorState, instruction: DecodedInstruction):
    return range_fault(state.I, instruction.x + 1, Fault.REGISTER_STORE)


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I, I unchanged."""
    register_mask = jnp.arange(NUM_REGISTERS) <= instruction.x
    memory_values = read_bytes(state.memory, state.I, NUM_REGISTERS)
    return state.replace(V=jnp.where(register_mask, memory_values, state.V))


def check_load_registers(state: EmulatorState, instruction: DecodedInstruction):
    return range_fault(state.I, instruction.x + 1, Fault.REGISTER_LOAD)
