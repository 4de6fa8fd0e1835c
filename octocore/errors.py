"""CHIP-8 interpreter errors."""


class Chip8Error(Exception):
    """Base class for all interpreter faults."""


class InvalidOpcode(Chip8Error):
    """Instruction word not in the CHIP-8 table (raised in strict mode only)."""

    def __init__(self, address: int, opcode: int):
        self.address = address
        self.opcode = opcode
        super().__init__(f"invalid opcode 0x{opcode:04X} at 0x{address:03X}")


class InvalidAddress(Chip8Error):
    """Memory access outside the addressable space."""

    def __init__(self, address: int, reason: str = "memory access"):
        self.address = address
        super().__init__(f"{reason} out of bounds at 0x{address:X}")


class StackOverflow(Chip8Error):
    """Subroutine call nested deeper than the stack allows."""


class StackUnderflow(Chip8Error):
    """Return executed with an empty stack."""


class RomTooLarge(Chip8Error):
    """ROM does not fit between the program start and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM of {size} bytes exceeds capacity of {capacity} bytes")
