"""Fixed-width integer helpers."""

from __future__ import annotations

from typing import Final

MASK64: Final = 0xFFFFFFFFFFFFFFFF
MASK128: Final = (1 << 128) - 1


def rotr64(x: int, n: int) -> int:
    """Rotate the 64-bit word ``x`` right by ``n`` bits."""

    return ((x >> n) | (x << (64 - n))) & MASK64


def reverse_u64(x: int) -> int:
    """Reverse the byte order of a 64-bit unsigned integer.

    Writing ``reverse_u64(t)`` big-endian yields the little-endian encoding
    of ``t``.
    """

    if not 0 <= x <= MASK64:
        raise ValueError("value does not fit in 64 bits")

    x = ((x & 0x00FF00FF00FF00FF) << 8) | ((x >> 8) & 0x00FF00FF00FF00FF)
    x = ((x & 0x0000FFFF0000FFFF) << 16) | ((x >> 16) & 0x0000FFFF0000FFFF)
    return ((x & 0x00000000FFFFFFFF) << 32) | (x >> 32)


def split_counter(t: int) -> tuple[int, int]:
    """Split a 128-bit byte counter into ``(low, high)`` 64-bit words."""

    t &= MASK128
    return t & MASK64, t >> 64
