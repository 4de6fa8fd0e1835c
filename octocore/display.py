"""CHIP-8 framebuffer utilities for hosts."""

import jax.numpy as jnp

from octocore.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SCREEN_ROW_BYTES


def framebuffer_pixels(display: jnp.ndarray) -> jnp.ndarray:
    """Unpack the 1-bit packed framebuffer into a (32, 64) boolean array.

    Row-major, bit 7 of each byte is the left-most pixel.
    """
    rows = jnp.reshape(jnp.asarray(display, dtype=jnp.uint8), (SCREEN_HEIGHT, SCREEN_ROW_BYTES))
    return jnp.unpackbits(rows, axis=1, bitorder="big").astype(jnp.bool_)


def pixel(display: jnp.ndarray, x: int, y: int) -> bool:
    """Read a single pixel, coordinates wrap around the screen."""
    x %= SCREEN_WIDTH
    y %= SCREEN_HEIGHT
    byte = int(display[y * SCREEN_ROW_BYTES + x // 8])
    return bool((byte >> (7 - x % 8)) & 1)
