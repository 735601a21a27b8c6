"""BLAKE2b parameter block (RFC 7693, section 2.5)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Final

from .errors import InvalidDigestLength, KeyTooLong, SaltOrPersonalizationTooLong

BLOCK_SIZE: Final = 128
MAX_DIGEST_SIZE: Final = 64
MAX_KEY_SIZE: Final = 64
SALT_SIZE: Final = 16
PERSON_SIZE: Final = 16

IV: Final[tuple[int, ...]] = (
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
)

# digest_length, key_length, fanout, depth, leaf_length, node_offset,
# node_depth + inner_length + reserved (16 zero bytes), salt, person
_PARAM_FORMAT: Final = "<BBBBIQ16x16s16s"


@dataclass(frozen=True, slots=True)
class ParameterBlock:
    """Sequential-mode BLAKE2b parameters.

    Only digest length, key length, salt and personalization vary; fan-out
    and depth are fixed at 1 and every tree field is zero.
    """

    digest_size: int
    key_size: int = 0
    salt: bytes = bytes(SALT_SIZE)
    person: bytes = bytes(PERSON_SIZE)
    fanout: int = 1
    depth: int = 1

    @classmethod
    def create(
        cls,
        digest_size: int,
        key: bytes = b"",
        salt: bytes = b"",
        person: bytes = b"",
    ) -> "ParameterBlock":
        """Validate caller arguments and build a block.

        Short salts and personalization strings are zero padded to 16 bytes.

        Raises:
            InvalidDigestLength: ``digest_size`` is not an integer in 1..64.
            KeyTooLong: ``key`` longer than 64 bytes.
            SaltOrPersonalizationTooLong: ``salt`` or ``person`` longer than
                16 bytes.
        """

        if isinstance(digest_size, bool) or not isinstance(digest_size, int):
            raise InvalidDigestLength(f"digest length must be an integer, got {type(digest_size).__name__}")
        if not (1 <= digest_size <= MAX_DIGEST_SIZE):
            raise InvalidDigestLength(f"digest length must be in range 1..64, got {digest_size}")
        if len(key) > MAX_KEY_SIZE:
            raise KeyTooLong(f"key length must be at most 64 bytes, got {len(key)}")
        if len(salt) > SALT_SIZE:
            raise SaltOrPersonalizationTooLong(f"salt must be at most 16 bytes, got {len(salt)}")
        if len(person) > PERSON_SIZE:
            raise SaltOrPersonalizationTooLong(
                f"personalization must be at most 16 bytes, got {len(person)}"
            )

        return cls(
            digest_size=digest_size,
            key_size=len(key),
            salt=bytes(salt).ljust(SALT_SIZE, b"\x00"),
            person=bytes(person).ljust(PERSON_SIZE, b"\x00"),
        )

    def to_bytes(self) -> bytes:
        """Serialize as the 64-byte parameter block."""

        return struct.pack(
            _PARAM_FORMAT,
            self.digest_size,
            self.key_size,
            self.fanout,
            self.depth,
            0,
            0,
            self.salt,
            self.person,
        )

    def initial_state(self) -> list[int]:
        """Return the chained state ``IV XOR parameter block``."""

        words = struct.unpack("<8Q", self.to_bytes())
        return [iv ^ w for iv, w in zip(IV, words, strict=True)]
