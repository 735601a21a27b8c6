"""Unit tests for b2stream.crypto.params."""

import struct

import pytest

from b2stream.crypto import (
    IV,
    InvalidDigestLength,
    KeyTooLong,
    ParameterBlock,
    SaltOrPersonalizationTooLong,
)


class TestParameterBlockLayout:
    """Test the 64-byte parameter block encoding."""

    def test_size(self):
        assert len(ParameterBlock.create(64).to_bytes()) == 64

    def test_header_bytes(self):
        block = ParameterBlock.create(32, key=b"k" * 10).to_bytes()
        assert block[:4] == bytes([32, 10, 1, 1])
        assert block[4:32] == bytes(28)

    def test_salt_and_personalization_offsets(self):
        salt = bytes(range(1, 17))
        person = bytes(range(101, 117))
        block = ParameterBlock.create(64, salt=salt, person=person).to_bytes()
        assert block[32:48] == salt
        assert block[48:64] == person

    def test_short_fields_are_zero_padded(self):
        block = ParameterBlock.create(64, salt=b"ab", person=b"xyz").to_bytes()
        assert block[32:48] == b"ab" + bytes(14)
        assert block[48:64] == b"xyz" + bytes(13)


class TestInitialState:
    """Test IV XOR parameter block."""

    def test_unkeyed_512(self):
        state = ParameterBlock.create(64).initial_state()
        assert state[0] == IV[0] ^ 0x01010040
        assert state[1:] == list(IV[1:])

    def test_key_length_lands_in_first_word(self):
        state = ParameterBlock.create(20, key=b"\x00" * 64).initial_state()
        assert state[0] == IV[0] ^ 0x01014014

    def test_salt_and_personalization_words(self):
        salt = bytes(range(16))
        person = bytes(range(16, 32))
        state = ParameterBlock.create(64, salt=salt, person=person).initial_state()
        words = struct.unpack("<4Q", salt + person)
        assert state[4:8] == [IV[4 + i] ^ words[i] for i in range(4)]
        assert state[1:4] == list(IV[1:4])


class TestValidation:
    """Test argument validation."""

    @pytest.mark.parametrize("digest_size", [0, 65, -1])
    def test_invalid_digest_length(self, digest_size):
        with pytest.raises(InvalidDigestLength):
            ParameterBlock.create(digest_size)

    @pytest.mark.parametrize("digest_size", [32.0, True, "32", None])
    def test_non_integer_digest_length(self, digest_size):
        with pytest.raises(InvalidDigestLength):
            ParameterBlock.create(digest_size)

    def test_key_too_long(self):
        with pytest.raises(KeyTooLong):
            ParameterBlock.create(64, key=b"\x00" * 65)

    def test_maximum_key_is_accepted(self):
        assert ParameterBlock.create(64, key=b"\x00" * 64).key_size == 64

    def test_salt_too_long(self):
        with pytest.raises(SaltOrPersonalizationTooLong):
            ParameterBlock.create(64, salt=b"\x00" * 17)

    def test_personalization_too_long(self):
        with pytest.raises(SaltOrPersonalizationTooLong):
            ParameterBlock.create(64, person=b"\x00" * 17)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            ParameterBlock.create(0)
