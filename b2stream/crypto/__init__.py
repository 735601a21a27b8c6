"""BLAKE2b hashing primitives.

The incremental engine (:func:`initialize`, :func:`update`, :func:`finalize`)
is the main entry point; :func:`hash` and :class:`Blake2b` are conveniences
built on top of it.
"""

from __future__ import annotations

from .bits import reverse_u64, rotr64, split_counter
from .compress import (
    CompressInput,
    Compressor,
    SoftwareCompressor,
    blake2f,
    compress,
)
from .engine import Blake2b, HashContext, finalize, hash, initialize, update
from .errors import (
    ContextAlreadyFinalized,
    CryptoError,
    DigestMismatch,
    InvalidCompressInput,
    InvalidDigestLength,
    KeyTooLong,
    SaltOrPersonalizationTooLong,
)
from .params import IV, ParameterBlock

__all__ = [
    "Blake2b",
    "CompressInput",
    "Compressor",
    "ContextAlreadyFinalized",
    "CryptoError",
    "DigestMismatch",
    "HashContext",
    "IV",
    "InvalidCompressInput",
    "InvalidDigestLength",
    "KeyTooLong",
    "ParameterBlock",
    "SaltOrPersonalizationTooLong",
    "SoftwareCompressor",
    "blake2f",
    "compress",
    "finalize",
    "hash",
    "initialize",
    "reverse_u64",
    "rotr64",
    "split_counter",
    "update",
]
