from __future__ import annotations

import hashlib

import pytest
from hypothesis import given, settings, strategies as st

from b2stream.crypto import finalize, hash, initialize, update

pytestmark = pytest.mark.property


@given(data=st.binary(max_size=600), cut=st.integers(min_value=0, max_value=600))
@settings(max_examples=75, deadline=None)
def test_two_part_update_matches_one_shot(data: bytes, cut: int) -> None:
    cut = min(cut, len(data))
    ctx = initialize()
    update(ctx, data[:cut])
    update(ctx, data[cut:])
    assert finalize(ctx) == hash(data)


@given(chunks=st.lists(st.binary(max_size=200), max_size=8), key=st.binary(max_size=64))
@settings(max_examples=50, deadline=None)
def test_arbitrary_chunking_keyed(chunks: list[bytes], key: bytes) -> None:
    ctx = initialize(32, key=key)
    for chunk in chunks:
        update(ctx, chunk)
    assert finalize(ctx) == hashlib.blake2b(b"".join(chunks), digest_size=32, key=key).digest()


@given(
    data=st.binary(max_size=300),
    digest_size=st.integers(min_value=1, max_value=64),
    salt=st.binary(max_size=16),
    person=st.binary(max_size=16),
)
@settings(max_examples=50, deadline=None)
def test_matches_hashlib(data: bytes, digest_size: int, salt: bytes, person: bytes) -> None:
    expected = hashlib.blake2b(data, digest_size=digest_size, salt=salt, person=person).digest()
    out = hash(data, salt=salt, person=person, digest_size=digest_size)
    assert len(out) == digest_size
    assert out == expected
