"""Secure random source for Lamport private key blocks."""

from __future__ import annotations

import logging
import secrets

from pydantic import model_validator
from typing_extensions import Final

from lamport_sig.types import RandomSourceError, StrictBaseModel

from .constants import (
    KECCAK_CONFIG,
    PROD_CONFIG,
    SHA3_CONFIG,
    SHA512_CONFIG,
    TEST_CONFIG,
    LamportConfig,
)

logger = logging.getLogger(__name__)


class Rand(StrictBaseModel):
    """An instance of the random block generator for a given config."""

    config: LamportConfig
    """Configuration parameters for the random generator."""

    @model_validator(mode="after")
    def enforce_strict_types(self) -> "Rand":
        """Reject subclasses to prevent type confusion attacks."""
        if type(self.config) is not LamportConfig:
            raise TypeError("config must be exactly LamportConfig, not a subclass")
        return self

    def random_bytes(self, length: int) -> bytes:
        """
        Draw `length` bytes from the operating system's CSPRNG.

        The source is never substituted: if it fails, the failure is surfaced.

        Raises:
            RandomSourceError: If the source is unavailable or returns short.
        """
        try:
            data = secrets.token_bytes(length)
        except (OSError, NotImplementedError) as exc:
            logger.error("Secure random source failed for %d bytes: %s", length, exc)
            raise RandomSourceError(length, detail=str(exc)) from exc

        if len(data) != length:
            raise RandomSourceError(length, detail=f"received only {len(data)} bytes")
        return data

    def block(self) -> bytes:
        """Generates one uniformly random block of `W / 8` bytes."""
        return self.random_bytes(self.config.BLOCK_LENGTH)

    def branch(self) -> tuple[bytes, ...]:
        """Generates `W` independent random blocks, one full key branch."""
        return tuple(self.block() for _ in range(self.config.DIGEST_BITS))


PROD_RAND: Final = Rand(config=PROD_CONFIG)
"""An instance configured for the reference construction."""

SHA3_RAND: Final = Rand(config=SHA3_CONFIG)
"""An instance configured for SHA3-256 keys."""

KECCAK_RAND: Final = Rand(config=KECCAK_CONFIG)
"""An instance configured for Keccak-256 keys."""

SHA512_RAND: Final = Rand(config=SHA512_CONFIG)
"""An instance configured for SHA-512 keys."""

TEST_RAND: Final = Rand(config=TEST_CONFIG)
"""A lightweight instance for test environments."""
