"""Configuration management for b2stream."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .crypto.compress import Compressor, SoftwareCompressor

logger = logging.getLogger(__name__)

BACKEND_ENV = "B2STREAM_BACKEND"
DIGEST_SIZE_ENV = "B2STREAM_DIGEST_SIZE"


class Backend(Enum):
    """Compression backends."""
    SOFTWARE = "software"
    NUMPY = "numpy"


@dataclass
class EngineConfig:
    """Engine-wide defaults."""

    backend: Backend = Backend.SOFTWARE
    digest_size: int = 64

    @classmethod
    def from_environment(cls) -> EngineConfig:
        """
        Build a configuration from environment variables.

        Unparseable values are ignored with a warning and the default is kept.
        """
        config = cls()

        backend = os.getenv(BACKEND_ENV)
        if backend is not None:
            try:
                config.backend = Backend(backend.strip().lower())
            except ValueError:
                logger.warning("ignoring %s=%r: unknown backend", BACKEND_ENV, backend)

        digest_size = os.getenv(DIGEST_SIZE_ENV)
        if digest_size is not None:
            try:
                size = int(digest_size)
            except ValueError:
                logger.warning("ignoring %s=%r: not an integer", DIGEST_SIZE_ENV, digest_size)
            else:
                if 1 <= size <= 64:
                    config.digest_size = size
                else:
                    logger.warning("ignoring %s=%r: out of range 1..64", DIGEST_SIZE_ENV, digest_size)

        return config

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors. Empty if valid.
        """
        errors = []

        if not isinstance(self.backend, Backend):
            errors.append(f"backend must be one of {[b.value for b in Backend]}")

        if not (1 <= self.digest_size <= 64):
            errors.append("digest_size must be in range 1..64")

        return errors


_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Return the process default, reading the environment on first use."""
    global _config
    if _config is None:
        _config = EngineConfig.from_environment()
    return _config


def set_config(config: Optional[EngineConfig]) -> None:
    """
    Replace the process default.

    Passing ``None`` makes the next :func:`get_config` re-read the environment.

    Raises:
        ValueError: If ``config`` fails validation.
    """
    global _config
    if config is not None:
        errors = config.validate()
        if errors:
            raise ValueError("; ".join(errors))
    _config = config


def resolve_compressor(backend: Optional[Backend] = None) -> Compressor:
    """
    Map a backend to a compressor instance.

    Args:
        backend: Backend to use. If None, uses the configured default.
    """
    backend = backend or get_config().backend
    if backend is Backend.NUMPY:
        from .crypto.accel import NumpyCompressor

        compressor: Compressor = NumpyCompressor()
    else:
        compressor = SoftwareCompressor()
    logger.debug("using %s compression backend", backend.value)
    return compressor
