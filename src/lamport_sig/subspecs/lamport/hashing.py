"""
Defines the hash functions the Lamport scheme can be instantiated with.

### A Stateless Interface

Hash objects from `hashlib` and `pycryptodome` are stateful: bytes are fed
with `update()` and the result read with `digest()`. Sharing one object
across calls would mix inputs from unrelated calls unless it is reset before
every use, and sharing it across threads would need a lock.

The scheme avoids the hazard entirely. It only ever sees a `HashFunction`,
whose `digest(data)` takes all of the input at once and returns the digest.
`Hasher` implements it by building a fresh hash object on every call.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Protocol, runtime_checkable

from Crypto.Hash import keccak
from pydantic import model_validator
from typing_extensions import Final

from lamport_sig.types import StrictBaseModel

from .constants import (
    KECCAK_CONFIG,
    PROD_CONFIG,
    SHA3_CONFIG,
    SHA512_CONFIG,
    TEST_CONFIG,
    LamportConfig,
)


@runtime_checkable
class HashFunction(Protocol):
    """A fixed-width hash function with no state retained between calls."""

    @property
    def digest_size(self) -> int:
        """The output size in bytes."""
        ...

    def digest(self, data: bytes) -> bytes:
        """Return the digest of `data`."""
        ...


def _keccak256() -> keccak.Keccak_Hash:
    return keccak.new(digest_bits=256)


def _blake2s_64() -> hashlib.blake2s:
    return hashlib.blake2s(digest_size=8)


HASH_FACTORIES: Final[dict[str, Callable[[], object]]] = {
    "sha256": hashlib.sha256,
    "sha3_256": hashlib.sha3_256,
    "sha512": hashlib.sha512,
    "keccak256": _keccak256,
    "blake2s": _blake2s_64,
}
"""
Constructors for every supported algorithm, keyed by `LamportConfig.HASH_NAME`.

Each call returns a new hash object exposing `update()` and `digest()`.
"""


class Hasher(StrictBaseModel):
    """An instance of the message and block hash for a given config."""

    config: LamportConfig
    """Configuration parameters for the hasher."""

    @model_validator(mode="after")
    def enforce_strict_types(self) -> "Hasher":
        """Reject subclasses to prevent type confusion attacks."""
        if type(self.config) is not LamportConfig:
            raise TypeError("config must be exactly LamportConfig, not a subclass")
        if self.config.HASH_NAME not in HASH_FACTORIES:
            raise ValueError(f"Unsupported hash algorithm: '{self.config.HASH_NAME}'")
        return self

    @property
    def digest_size(self) -> int:
        """The output size in bytes, `W / 8`."""
        return self.config.BLOCK_LENGTH

    def digest(self, data: bytes) -> bytes:
        """
        Hash `data` with a freshly initialized hash object.

        Args:
            data: The bytes to hash.

        Returns:
            The digest, exactly `digest_size` bytes long.
        """
        h = HASH_FACTORIES[self.config.HASH_NAME]()
        h.update(data)  # type: ignore[attr-defined]
        out: bytes = h.digest()  # type: ignore[attr-defined]

        # A mismatch means the preset names an algorithm of a different width.
        if len(out) != self.digest_size:
            raise RuntimeError(
                f"{self.config.HASH_NAME} produced {len(out)} bytes, "
                f"expected {self.digest_size}"
            )
        return out


PROD_HASHER: Final = Hasher(config=PROD_CONFIG)
"""SHA-256 hasher for the reference construction."""

SHA3_HASHER: Final = Hasher(config=SHA3_CONFIG)
"""SHA3-256 hasher."""

KECCAK_HASHER: Final = Hasher(config=KECCAK_CONFIG)
"""Keccak-256 hasher."""

SHA512_HASHER: Final = Hasher(config=SHA512_CONFIG)
"""SHA-512 hasher."""

TEST_HASHER: Final = Hasher(config=TEST_CONFIG)
"""A lightweight hasher for test environments."""
