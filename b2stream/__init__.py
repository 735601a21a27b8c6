"""b2stream: incremental BLAKE2b (RFC 7693) hashing."""

import logging

__version__ = "0.1.0"

from .crypto import (
    Blake2b,
    ContextAlreadyFinalized,
    CryptoError,
    HashContext,
    InvalidDigestLength,
    KeyTooLong,
    SaltOrPersonalizationTooLong,
    finalize,
    hash,
    initialize,
    update,
)
from .config import Backend, EngineConfig

# Library use: no handlers by default.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Backend",
    "Blake2b",
    "ContextAlreadyFinalized",
    "CryptoError",
    "EngineConfig",
    "HashContext",
    "InvalidDigestLength",
    "KeyTooLong",
    "SaltOrPersonalizationTooLong",
    "finalize",
    "hash",
    "initialize",
    "update",
]
