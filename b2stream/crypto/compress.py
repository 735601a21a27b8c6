"""BLAKE2b compression function F (RFC 7693, section 3.2).

:func:`compress` is the reference software implementation. Anything that
satisfies :class:`Compressor` can replace it inside the engine, e.g. the
vectorized backend in :mod:`b2stream.crypto.accel`.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Final, Protocol, Sequence

from .bits import MASK64, reverse_u64, rotr64
from .errors import InvalidCompressInput
from .params import BLOCK_SIZE, IV

ROUNDS: Final = 12
FRAME_SIZE: Final = 213

SIGMA: Final[tuple[tuple[int, ...], ...]] = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
)

# Four columns, then four diagonals of the 4x4 working matrix.
MIX_TABLE: Final[tuple[tuple[int, int, int, int], ...]] = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


class Compressor(Protocol):
    """A compression backend.

    Implementations take the chained state ``h`` (8 words), a 128-byte
    ``block``, the counter words ``t0``/``t1`` and the final-block flag, and
    return the new chained state without mutating ``h``.
    """

    def __call__(
        self,
        h: Sequence[int],
        block: bytes,
        t0: int,
        t1: int,
        final: bool,
        rounds: int = ROUNDS,
    ) -> list[int]: ...


def _g(v: list[int], a: int, b: int, c: int, d: int, x: int, y: int) -> None:
    va = (v[a] + v[b] + x) & MASK64
    vd = rotr64(v[d] ^ va, 32)
    vc = (v[c] + vd) & MASK64
    vb = rotr64(v[b] ^ vc, 24)
    va = (va + vb + y) & MASK64
    vd = rotr64(vd ^ va, 16)
    vc = (vc + vd) & MASK64
    vb = rotr64(vb ^ vc, 63)
    v[a], v[b], v[c], v[d] = va, vb, vc, vd


def compress(
    h: Sequence[int],
    block: bytes,
    t0: int,
    t1: int,
    final: bool,
    rounds: int = ROUNDS,
) -> list[int]:
    """Run F over one message block.

    Args:
        h: Chained state, eight 64-bit words.
        block: 128-byte message block.
        t0, t1: Low and high words of the byte counter.
        final: Whether this is the last block.
        rounds: Round count; BLAKE2b uses 12.

    Returns:
        The updated chained state.
    """

    if len(block) != BLOCK_SIZE:
        raise ValueError("message block must be 128 bytes")

    m = struct.unpack("<16Q", block)
    v = [*h, *IV]
    v[12] ^= t0
    v[13] ^= t1
    if final:
        v[14] ^= MASK64

    for r in range(rounds):
        # beyond ten rounds the schedule wraps around
        s = SIGMA[r % 10]
        for i, (a, b, c, d) in enumerate(MIX_TABLE):
            _g(v, a, b, c, d, m[s[2 * i]], m[s[2 * i + 1]])

    return [h[i] ^ v[i] ^ v[i + 8] for i in range(8)]


class SoftwareCompressor:
    """Pure Python backend wrapping :func:`compress`."""

    name = "software"

    def __call__(
        self,
        h: Sequence[int],
        block: bytes,
        t0: int,
        t1: int,
        final: bool,
        rounds: int = ROUNDS,
    ) -> list[int]:
        return compress(h, block, t0, t1, final, rounds)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass(frozen=True, slots=True)
class CompressInput:
    """The flat 213-byte compression frame with named fields.

    Layout: ``rounds`` (4 bytes, big endian) || ``h`` (8 little-endian
    words) || ``m`` (128 bytes) || ``t0`` || ``t1`` (little endian) ||
    ``final`` (one byte, 0 or 1).
    """

    rounds: int
    h: tuple[int, ...]
    m: bytes
    t0: int
    t1: int
    final: bool

    def to_bytes(self) -> bytes:
        """Serialize to the 213-byte frame."""

        return b"".join(
            (
                struct.pack(">I", self.rounds),
                struct.pack("<8Q", *self.h),
                self.m,
                struct.pack(">QQ", reverse_u64(self.t0), reverse_u64(self.t1)),
                b"\x01" if self.final else b"\x00",
            )
        )

    @classmethod
    def from_bytes(cls, blob: bytes) -> "CompressInput":
        """Parse a frame produced by :meth:`to_bytes`."""

        if len(blob) != FRAME_SIZE:
            raise InvalidCompressInput(f"compression frame must be {FRAME_SIZE} bytes, got {len(blob)}")
        flag = blob[212]
        if flag not in (0, 1):
            raise InvalidCompressInput(f"final flag must be 0 or 1, got {flag}")

        (rounds,) = struct.unpack(">I", blob[:4])
        h = struct.unpack("<8Q", blob[4:68])
        t0, t1 = struct.unpack("<QQ", blob[196:212])
        return cls(rounds=rounds, h=h, m=bytes(blob[68:196]), t0=t0, t1=t1, final=bool(flag))


def blake2f(data: bytes, compressor: Compressor | None = None) -> bytes:
    """Apply F to a serialized :class:`CompressInput` frame.

    Returns:
        The 64-byte little-endian encoding of the new chained state.
    """

    frame = CompressInput.from_bytes(data)
    fn = compressor if compressor is not None else compress
    state = fn(frame.h, frame.m, frame.t0, frame.t1, frame.final, frame.rounds)
    return struct.pack("<8Q", *state)
