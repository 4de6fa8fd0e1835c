"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from octocore import create_state, display


@pytest.fixture
def fresh_state():
    """Provide a fresh interpreter state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state with in-place shifts."""
    return create_state(legacy_shift=False)


@pytest.fixture
def legacy_state():
    """Provide a fresh state with VY-source shifts."""
    return create_state(legacy_shift=True)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def setup_program(state, words, address=0x200):
    """Helper to write big-endian instruction words into memory."""
    data = []
    for word in words:
        data += [(word >> 8) & 0xFF, word & 0xFF]
    return setup_sprite_in_memory(state, address, data)


def pixel(state, x, y):
    """Read one pixel of the packed framebuffer."""
    return display.pixel(state.display, x, y)
