"""Incremental BLAKE2b engine.

Data flows ``initialize`` -> ``update``* -> ``finalize``. The compression
backend is injected per context, so a faster implementation of F can be
swapped in without touching the buffering logic here.

Example::

    ctx = initialize(32, key=b"secret")
    update(ctx, b"hello ")
    update(ctx, b"world")
    tag = finalize(ctx)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from cryptography.hazmat.primitives import constant_time

from .bits import MASK128, split_counter
from .compress import Compressor
from .errors import ContextAlreadyFinalized, DigestMismatch
from .params import BLOCK_SIZE, ParameterBlock


@dataclass(slots=True)
class HashContext:
    """Running state of one hash computation.

    A context is single owner and must not be shared between threads.
    ``counter`` counts compressed bytes only; the ``buffer_used`` bytes
    still staged in ``buffer`` are not included.
    """

    state: list[int]
    digest_size: int
    compressor: Compressor
    counter: int = 0
    buffer: bytearray = field(default_factory=lambda: bytearray(BLOCK_SIZE))
    buffer_used: int = 0
    finalized: bool = False

    def copy(self) -> "HashContext":
        """Return an independent clone of an unfinalized context."""

        self._ensure_open()
        return HashContext(
            state=list(self.state),
            digest_size=self.digest_size,
            compressor=self.compressor,
            counter=self.counter,
            buffer=bytearray(self.buffer),
            buffer_used=self.buffer_used,
        )

    def _ensure_open(self) -> None:
        if self.finalized:
            raise ContextAlreadyFinalized("hash context has already been finalized")

    def _compress(self, final: bool) -> None:
        t0, t1 = split_counter(self.counter)
        self.state = self.compressor(self.state, bytes(self.buffer), t0, t1, final)


def initialize(
    digest_size: int | None = None,
    key: bytes = b"",
    salt: bytes = b"",
    person: bytes = b"",
    *,
    compressor: Compressor | None = None,
) -> HashContext:
    """Start a new hash computation.

    Args:
        digest_size: Output size (1..64). If omitted, the configured default
            from :mod:`b2stream.config` is used.
        key: Optional key (at most 64 bytes) for keyed hashing.
        salt: Optional salt (at most 16 bytes).
        person: Optional personalization (at most 16 bytes).
        compressor: Compression backend. If omitted, the configured backend
            is used.

    Returns:
        A fresh :class:`HashContext`.

    Raises:
        InvalidDigestLength, KeyTooLong, SaltOrPersonalizationTooLong:
            on invalid arguments.
    """

    if digest_size is None or compressor is None:
        from ..config import get_config, resolve_compressor

        if digest_size is None:
            digest_size = get_config().digest_size
        if compressor is None:
            compressor = resolve_compressor()

    params = ParameterBlock.create(digest_size, key, salt, person)

    ctx = HashContext(state=params.initial_state(), digest_size=digest_size, compressor=compressor)
    if key:
        # The key block is staged like message data and flushed lazily.
        ctx.buffer[: len(key)] = key
        ctx.buffer_used = BLOCK_SIZE
    return ctx


def update(ctx: HashContext, data: bytes) -> None:
    """Feed ``data`` into ``ctx``.

    A full buffer is compressed only once another byte has to be staged,
    because the last block must be compressed by :func:`finalize` with the
    final flag set.
    """

    ctx._ensure_open()

    view = memoryview(data).cast("B")
    offset = 0
    remaining = len(view)
    while remaining:
        if ctx.buffer_used == BLOCK_SIZE:
            ctx.counter = (ctx.counter + BLOCK_SIZE) & MASK128
            ctx._compress(final=False)
            ctx.buffer_used = 0

        take = min(BLOCK_SIZE - ctx.buffer_used, remaining)
        ctx.buffer[ctx.buffer_used : ctx.buffer_used + take] = view[offset : offset + take]
        ctx.buffer_used += take
        offset += take
        remaining -= take


def finalize(ctx: HashContext) -> bytes:
    """Compress the terminal block and return the digest.

    The context is consumed: later :func:`update` or :func:`finalize` calls
    raise :class:`ContextAlreadyFinalized`.
    """

    ctx._ensure_open()

    ctx.buffer[ctx.buffer_used :] = bytes(BLOCK_SIZE - ctx.buffer_used)
    ctx.counter = (ctx.counter + ctx.buffer_used) & MASK128
    ctx._compress(final=True)

    digest = struct.pack("<8Q", *ctx.state)[: ctx.digest_size]

    ctx.finalized = True
    ctx.buffer[:] = bytes(BLOCK_SIZE)
    ctx.buffer_used = 0
    return digest


def hash(
    data: bytes,
    key: bytes = b"",
    salt: bytes = b"",
    person: bytes = b"",
    digest_size: int | None = None,
    *,
    compressor: Compressor | None = None,
) -> bytes:
    """One-shot BLAKE2b of ``data``."""

    ctx = initialize(digest_size, key, salt, person, compressor=compressor)
    update(ctx, data)
    return finalize(ctx)


class Blake2b:
    """A :mod:`hashlib`-style wrapper over a :class:`HashContext`.

    Unlike the bare engine functions, :meth:`digest` finalizes a copy, so the
    object keeps accepting data afterwards.
    """

    name = "blake2b"
    block_size = BLOCK_SIZE

    def __init__(
        self,
        data: bytes = b"",
        *,
        digest_size: int | None = None,
        key: bytes = b"",
        salt: bytes = b"",
        person: bytes = b"",
        compressor: Compressor | None = None,
    ) -> None:
        self._ctx = initialize(digest_size, key, salt, person, compressor=compressor)
        if data:
            update(self._ctx, data)

    @property
    def digest_size(self) -> int:
        return self._ctx.digest_size

    def update(self, data: bytes) -> None:
        update(self._ctx, data)

    def digest(self) -> bytes:
        return finalize(self._ctx.copy())

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> "Blake2b":
        clone = object.__new__(type(self))
        clone._ctx = self._ctx.copy()
        return clone

    def verify(self, expected: bytes) -> None:
        """Compare the digest with ``expected`` in constant time.

        Raises:
            DigestMismatch: If the digests differ.
        """

        if not constant_time.bytes_eq(self.digest(), bytes(expected)):
            raise DigestMismatch("digest does not match the expected value")
