"""Shared exceptions for :mod:`b2stream.crypto`.

Every precondition violation surfaces as one of these kinds. Range errors
also derive from :class:`ValueError` so callers used to :mod:`hashlib` can
keep catching that.
"""

from __future__ import annotations


class CryptoError(Exception):
    """Base error for hashing operations."""


class InvalidDigestLength(CryptoError, ValueError):
    """Raised when the requested digest length is outside 1..64."""


class KeyTooLong(CryptoError, ValueError):
    """Raised when a key exceeds 64 bytes."""


class SaltOrPersonalizationTooLong(CryptoError, ValueError):
    """Raised when a salt or personalization string exceeds 16 bytes."""


class ContextAlreadyFinalized(CryptoError):
    """Raised when a consumed hash context is updated or finalized again."""


class InvalidCompressInput(CryptoError, ValueError):
    """Raised for a malformed 213-byte compression frame."""


class DigestMismatch(CryptoError):
    """Raised when a computed digest does not match the expected value."""
