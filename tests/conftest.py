"""Test configuration for b2stream package."""

from pathlib import Path

import pytest

from b2stream.config import set_config
from b2stream.crypto import SoftwareCompressor
from b2stream.crypto.accel import NumpyCompressor

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(params=[SoftwareCompressor(), NumpyCompressor()], ids=["software", "numpy"])
def compressor(request):
    """Each compression backend in turn."""
    return request.param


@pytest.fixture
def kat_path() -> Path:
    """Path to the bundled known-answer vectors."""
    return FIXTURES / "blake2b-kat.json"


@pytest.fixture
def sequential_key() -> bytes:
    """The 64-byte key used by the reference KAT files."""
    return bytes(range(64))


@pytest.fixture(autouse=True)
def reset_default_config():
    """Make every test start from a fresh process default."""
    set_config(None)
    yield
    set_config(None)
