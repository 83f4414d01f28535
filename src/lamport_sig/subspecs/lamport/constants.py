"""
Defines the configuration presets for the Lamport one-time signature scheme.

A preset fixes the underlying hash function and its digest width `W`. Every
other size in the scheme is derived from `W`:

- a block is one digest: `W / 8` bytes,
- a private or public key is `2 * W` blocks (two branches of `W` blocks),
- a signature is `W` blocks, one per bit of the message digest.

The reference construction uses SHA-256 (`W = 256`). The test preset uses a
64-bit BLAKE2s digest so end-to-end tests stay fast; it has no meaningful
security and must not be used outside tests.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Final

from lamport_sig.config import LAMPORT_ENV


class LamportConfig(BaseModel):
    """A model holding the configuration constants for a Lamport preset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    DIGEST_BITS: int = Field(gt=0)
    """The output width `W` of the hash function, in bits."""

    HASH_NAME: str
    """The name of the hash algorithm, resolved by `Hasher`."""

    @model_validator(mode="after")
    def check_byte_aligned(self) -> "LamportConfig":
        """Digests are handled as whole bytes."""
        if self.DIGEST_BITS % 8 != 0:
            raise ValueError(f"DIGEST_BITS must be a multiple of 8, got {self.DIGEST_BITS}")
        return self

    @property
    def BLOCK_LENGTH(self) -> int:  # noqa: N802
        """The size of one key or signature block in bytes, `W / 8`."""
        return self.DIGEST_BITS // 8

    @property
    def PRIVATE_KEY_LEN_BYTES(self) -> int:  # noqa: N802
        """Total size of a private key in the raw layout, `2 * W * (W / 8)`."""
        return 2 * self.DIGEST_BITS * self.BLOCK_LENGTH

    @property
    def PUBLIC_KEY_LEN_BYTES(self) -> int:  # noqa: N802
        """Total size of a public key in the raw layout, `2 * W * (W / 8)`."""
        return 2 * self.DIGEST_BITS * self.BLOCK_LENGTH

    @property
    def SIGNATURE_LEN_BYTES(self) -> int:  # noqa: N802
        """Total size of a signature in the raw layout, `W * (W / 8)`."""
        return self.DIGEST_BITS * self.BLOCK_LENGTH


PROD_CONFIG: Final = LamportConfig(DIGEST_BITS=256, HASH_NAME="sha256")
"""The reference construction: SHA-256, 256 blocks per branch."""

SHA3_CONFIG: Final = LamportConfig(DIGEST_BITS=256, HASH_NAME="sha3_256")
"""SHA3-256 instantiation."""

KECCAK_CONFIG: Final = LamportConfig(DIGEST_BITS=256, HASH_NAME="keccak256")
"""Keccak-256 (pre-standard SHA-3 padding) instantiation."""

SHA512_CONFIG: Final = LamportConfig(DIGEST_BITS=512, HASH_NAME="sha512")
"""SHA-512 instantiation, with 512 blocks of 64 bytes per branch."""

TEST_CONFIG: Final = LamportConfig(DIGEST_BITS=64, HASH_NAME="blake2s")
"""A lightweight preset for tests: BLAKE2s truncated to 8 bytes."""

TARGET_CONFIG: Final = TEST_CONFIG if LAMPORT_ENV == "test" else PROD_CONFIG
"""The preset selected by the `LAMPORT_ENV` environment flag."""
