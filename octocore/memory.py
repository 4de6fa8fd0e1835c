"""Access to CHIP-8 memory.

The gather/scatter helpers are traceable and never fail: reads past the end
of memory yield 0 and writes past it are dropped. Bounds are enforced by the
instruction guards in `octocore.faults`.
"""

import jax.numpy as jnp

from octocore.constants import MEMORY_SIZE
from octocore.errors import InvalidAddress


def check_range(address: int, length: int = 1, reason: str = "memory access") -> None:
    """Raise InvalidAddress unless [address, address + length) lies in memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        bad = address if address < 0 or address >= MEMORY_SIZE else MEMORY_SIZE
        raise InvalidAddress(bad, reason)


def read_word(memory: jnp.ndarray, address) -> jnp.ndarray:
    """Read a big-endian 16-bit word."""
    high = memory.at[address].get(mode="fill", fill_value=0)
    low = memory.at[address + 1].get(mode="fill", fill_value=0)
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def read_bytes(memory: jnp.ndarray, address, size: int) -> jnp.ndarray:
    """Read `size` bytes starting at `address`."""
    return memory.at[address + jnp.arange(size)].get(mode="fill", fill_value=0)


def write_bytes(memory: jnp.ndarray, address, values: jnp.ndarray, count=None) -> jnp.ndarray:
    """Write `values` starting at `address`, keeping only the first `count` if given."""
    offsets = jnp.arange(values.shape[0])
    indices = address + offsets
    if count is not None:
        indices = jnp.where(offsets < count, indices, MEMORY_SIZE)
    return memory.at[indices].set(values.astype(memory.dtype), mode="drop")
