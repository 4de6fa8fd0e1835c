"""CHIP-8 interpreter core package."""

from octocore.state import EmulatorState, StackState, DrawState, create_state
from octocore.emulator import execute, fetch, step, clock, run, run_until_fault, load, load_rom, mnemonic_at
from octocore.timers import tick, acknowledge_draw, set_key
from octocore.decode import DecodedInstruction, decode
from octocore.table import Instruction, lookup
from octocore.display import framebuffer_pixels
from octocore.errors import (
    Chip8Error, InvalidOpcode, InvalidAddress, StackOverflow, StackUnderflow, RomTooLarge,
)
from octocore.interpreter import Interpreter
from octocore.pacing import Pacer
from octocore.constants import *

__all__ = [
    "EmulatorState",
    "StackState",
    "DrawState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "clock",
    "run",
    "run_until_fault",
    "load",
    "load_rom",
    "mnemonic_at",
    "tick",
    "acknowledge_draw",
    "set_key",
    "DecodedInstruction",
    "decode",
    "Instruction",
    "lookup",
    "framebuffer_pixels",
    "Chip8Error",
    "InvalidOpcode",
    "InvalidAddress",
    "StackOverflow",
    "StackUnderflow",
    "RomTooLarge",
    "Interpreter",
    "Pacer",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
