"""CHIP-8 machine constants."""

MEMORY_SIZE = 0xFFF
PROGRAM_START = 0x200
FONT_START = 0x000
ADDRESS_MASK = 0xFFF

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 16
NUM_KEYS = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SCREEN_ROW_BYTES = SCREEN_WIDTH // 8
SCREEN_BYTES = SCREEN_ROW_BYTES * SCREEN_HEIGHT

INSTRUCTION_SIZE = 2
GLYPH_SIZE = 5
MAX_SPRITE_HEIGHT = 15

CLOCK_FREQUENCY = 1000  # Hz
TIMER_FREQUENCY = 60  # Hz

# Quirk defaults, see create_state()
DEFAULT_LEGACY_SHIFT = False
DEFAULT_BORROW_SETS_FLAG = False
DEFAULT_STRICT_OPCODES = False

FONT_DATA = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]
