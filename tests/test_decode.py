"""Tests for instruction decoding and the instruction table."""

import pytest
from octocore import decode, lookup, create_state


def test_decode_fields():
    instruction = decode(0xD12F)
    assert instruction.raw == 0xD12F
    assert instruction.opcode == 0xD
    assert instruction.x == 0x1
    assert instruction.y == 0x2
    assert instruction.n == 0xF
    assert instruction.nn == 0x2F
    assert instruction.nnn == 0x12F


@pytest.mark.parametrize("word, mnemonic", [
    (0x00E0, "cls"), (0x00EE, "ret"), (0x0123, "nai"),
    (0x1234, "jp"), (0x2345, "call"), (0x3456, "se"), (0x4567, "sne"),
    (0x5670, "sey"), (0x5671, "nai"), (0x6789, "ld"), (0x789A, "add"),
    (0x8120, "ldy"), (0x8121, "or"), (0x8122, "and"), (0x8123, "xor"),
    (0x8124, "addy"), (0x8125, "sub"), (0x8126, "shr"), (0x8127, "subn"),
    (0x812E, "shl"), (0x812F, "nai"), (0x9AB0, "sney"), (0x9AB1, "nai"),
    (0xABCD, "ldi"), (0xBCDE, "jp0"), (0xCDEF, "rnd"), (0xDEF1, "drw"),
    (0xE19E, "skp"), (0xE1A1, "skpn"), (0xE1A2, "nai"),
    (0xF107, "ldxdt"), (0xF10A, "ldk"), (0xF115, "lddt"), (0xF118, "ldst"),
    (0xF11E, "addi"), (0xF129, "ldf"), (0xF133, "ldb"), (0xF155, "ldix"),
    (0xF165, "ldxi"), (0xF166, "nai"),
])
def test_instruction_table(word, mnemonic):
    assert lookup(create_state(), decode(word)).mnemonic == mnemonic
