"""Tests for control flow instructions."""

import pytest
from octocore import execute, set_key


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_execute_call(self, fresh_state):
        """Test 2NNN - Call pushes the current program counter."""
        state = execute(fresh_state, 0x2ABC)
        assert state.pc == 0xABC
        assert state.stack.pointer == 1
        assert state.stack.data[0] == 0x200


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x42))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[5].set(0x41))
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x10))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = fresh_state.replace(V=fresh_state.V.at[3].set(0x20))
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x55))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[1].set(0x55))
        state = state.replace(V=state.V.at[2].set(0x44))
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xAA))
        state = state.replace(V=state.V.at[8].set(0xBB))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = fresh_state
        state = state.replace(V=state.V.at[7].set(0xCC))
        state = state.replace(V=state.V.at[8].set(0xCC))
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc

    def test_register_skips_need_zero_low_nibble(self, fresh_state):
        """5XY1 and 9XY1 are not instructions."""
        for instruction in (0x5121, 0x9781):
            state = execute(fresh_state, instruction)
            assert state.pc == fresh_state.pc
            assert state.invalid_opcodes == 1

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(0xFF))
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestJumpWithOffset:
    """Test BNNN."""

    def test_jump_with_offset(self, fresh_state):
        """BNNN - Jump with V0 offset."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0x6230)  # V2 = 0x30, ignored
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_does_not_wrap(self, fresh_state):
        """BNNN - Targets past 0xFFF are kept, the next fetch faults."""
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xBFFF)
        assert state.pc == 0xFFF + 0xFF


class TestKeySkips:
    """Test EX9E / EXA1."""

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip when the key in VX is down."""
        state = execute(fresh_state, 0x6A07)  # VA = 7
        state = set_key(state, 7, True)

        state = execute(state, 0xEA9E)
        assert state.pc == fresh_state.pc + 2

    def test_skip_if_key_pressed_not_down(self, fresh_state):
        """EX9E - No skip when another key is down."""
        state = execute(fresh_state, 0x6A07)
        state = set_key(state, 8, True)

        state = execute(state, 0xEA9E)
        assert state.pc == fresh_state.pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        """EXA1 - Skip when the key in VX is up."""
        state = execute(fresh_state, 0x6A07)

        skipped = execute(state, 0xEAA1)
        held = execute(set_key(state, 7, True), 0xEAA1)

        assert skipped.pc == fresh_state.pc + 2
        assert held.pc == fresh_state.pc

    def test_key_index_uses_low_nibble(self, fresh_state):
        """A register value above 0xF selects key VX & 0xF."""
        state = execute(fresh_state, 0x6A13)  # VA = 0x13 -> key 3
        state = set_key(state, 3, True)

        state = execute(state, 0xEA9E)
        assert state.pc == fresh_state.pc + 2

    def test_unknown_key_instruction(self, fresh_state):
        """EX00 is not an instruction."""
        state = execute(fresh_state, 0xE100)
        assert state.invalid_opcodes == 1
