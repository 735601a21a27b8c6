"""Known-answer test vectors.

Records use the BLAKE2 reference / libsodium layout, every byte string hex
encoded::

    {"input": "", "key": "", "salt": "", "personal": "", "out": "786a...", "outlen": 64}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .crypto.compress import Compressor
from .crypto.engine import hash as blake2b_hash


@dataclass(frozen=True, slots=True)
class KnownAnswer:
    """One ``{input, key, salt, personal, out, outlen}`` record."""

    input: bytes
    out: bytes
    key: bytes = b""
    salt: bytes = b""
    personal: bytes = b""
    outlen: int = 64

    @classmethod
    def from_mapping(cls, blob: Mapping[str, Any]) -> "KnownAnswer":
        """Parse a hex-encoded record."""

        out = bytes.fromhex(str(blob["out"]))
        return cls(
            input=bytes.fromhex(str(blob.get("input", ""))),
            out=out,
            key=bytes.fromhex(str(blob.get("key", ""))),
            salt=bytes.fromhex(str(blob.get("salt", ""))),
            personal=bytes.fromhex(str(blob.get("personal", ""))),
            outlen=int(blob.get("outlen", len(out))),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "input": self.input.hex(),
            "key": self.key.hex(),
            "salt": self.salt.hex(),
            "personal": self.personal.hex(),
            "out": self.out.hex(),
            "outlen": self.outlen,
        }

    def compute(self, compressor: Compressor | None = None) -> bytes:
        return blake2b_hash(
            self.input,
            key=self.key,
            salt=self.salt,
            person=self.personal,
            digest_size=self.outlen,
            compressor=compressor,
        )

    def check(self, compressor: Compressor | None = None) -> bool:
        """Return whether the engine reproduces ``out``."""

        return self.compute(compressor) == self.out


def load_vectors(path: str | Path) -> list[KnownAnswer]:
    """Load a JSON array of records from ``path``."""

    with open(path, "r", encoding="utf-8") as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise ValueError("test vector file must contain a JSON array")
    return [KnownAnswer.from_mapping(r) for r in records]
