"""
Defines the core interface for the Lamport one-time signature scheme.

Specification for the high-level functions (`key_gen`, `sign`, `verify`).

This constitutes the public API of the signature scheme.
"""

from __future__ import annotations

import hmac
import logging

from typing_extensions import Final

from lamport_sig.config import LAMPORT_ENV
from lamport_sig.types import MalformedKeyError, coerce_to_bytes

from .constants import (
    KECCAK_CONFIG,
    PROD_CONFIG,
    SHA3_CONFIG,
    SHA512_CONFIG,
    TEST_CONFIG,
    LamportConfig,
)
from .containers import KeyPair, PrivateKey, PublicKey, Signature
from .hashing import (
    KECCAK_HASHER,
    PROD_HASHER,
    SHA3_HASHER,
    SHA512_HASHER,
    TEST_HASHER,
    HashFunction,
)
from .rand import KECCAK_RAND, PROD_RAND, SHA3_RAND, SHA512_RAND, TEST_RAND, Rand

logger = logging.getLogger(__name__)


def select_bit(digest: int, index: int) -> int:
    """
    Return bit `index` of `digest`, counting from the least significant bit.

    The digest integer is never mutated: every position shifts the original
    value by its own index.
    """
    return (digest >> index) & 1


class LamportScheme:
    """Instance of the Lamport signature scheme for a given config."""

    def __init__(self, config: LamportConfig, hasher: HashFunction, rand: Rand):
        """
        Initializes the scheme with a specific parameter set.

        Raises:
            ValueError: If the hasher or random source disagree with the config's width.
        """
        if hasher.digest_size != config.BLOCK_LENGTH:
            raise ValueError(
                f"Hash function outputs {hasher.digest_size} bytes, "
                f"config expects {config.BLOCK_LENGTH}"
            )
        if rand.config != config:
            raise ValueError("Random source was built for a different config")
        self.config = config
        self.hasher = hasher
        self.rand = rand

    def message_digest(self, message: bytes) -> int:
        """
        Hash `message` once and read the digest as an unsigned integer.

        The digest is read big-endian: its first byte is the most significant.
        """
        return int.from_bytes(self.hasher.digest(coerce_to_bytes(message)), "big")

    def message_bits(self, message: bytes) -> list[int]:
        """
        Return the `W` branch selectors for `message`.

        Entry `i` is bit `i` of the message digest, bit 0 being the least
        significant. Signing and verification both go through this method,
        so they cannot disagree on the convention.
        """
        digest = self.message_digest(message)
        return [select_bit(digest, i) for i in range(self.config.DIGEST_BITS)]

    def key_gen(self) -> KeyPair:
        """
        Generates a new one-time key pair.

        This is a **randomized** algorithm.

        ### Key Generation Algorithm

        1.  **Private Key**: Draw `2 * W` independent blocks of `W / 8` random
            bytes, `W` for each branch.
        2.  **Public Key**: Hash every private block. Public block `(b, i)` is
            `Hash(private block (b, i))`.

        Returns:
            A `KeyPair` holding the `PrivateKey` and the `PublicKey`.

        Raises:
            RandomSourceError: If the secure random source fails. Nothing is returned.
        """
        # All random draws happen before any hashing.
        zero_branch = self.rand.branch()
        one_branch = self.rand.branch()

        sk = PrivateKey(zero_branch=zero_branch, one_branch=one_branch)
        pk = PublicKey(
            zero_branch=tuple(self.hasher.digest(block) for block in zero_branch),
            one_branch=tuple(self.hasher.digest(block) for block in one_branch),
        )

        logger.debug("Generated Lamport key pair with W=%d", self.config.DIGEST_BITS)
        return KeyPair(private_key=sk, public_key=pk)

    def sign(self, message: bytes, sk: PrivateKey) -> Signature:
        """
        Produces a signature for `message` with a one-time private key.

        This is a **deterministic** algorithm: the same message and key always
        give the same signature.

        **CRITICAL SECURITY WARNING**: A private key must **NEVER** sign two
        different messages. Each signature reveals half of the private key;
        two signatures over different digests reveal both blocks at every
        position where the digests differ, which lets an attacker forge.
        The scheme does not track usage. Discard `sk` after this call, or
        sign through `OneTimeSigner`, which enforces it.

        ### Signing Algorithm

        1.  **Digest**: Hash the message once to a `W`-bit digest.
        2.  **Selective Disclosure**: For each position `i` from 0 to `W - 1`,
            take bit `i` of the digest and reveal the private block of that
            branch at position `i`.

        Args:
            message: The message to be signed.
            sk: The private key to use for signing.

        Returns:
            The resulting `Signature`, with `W` blocks in index order.

        Raises:
            MalformedKeyError: If the key's shape does not match this scheme.
        """
        if not isinstance(sk, PrivateKey):
            raise MalformedKeyError(
                "PrivateKey", f"expected a PrivateKey, got {type(sk).__name__}"
            )
        if not sk.matches(self.config):
            raise MalformedKeyError(
                "PrivateKey",
                "block count per branch does not match the scheme",
                expected=self.config.DIGEST_BITS,
                actual=sk.digest_bits,
            )

        bits = self.message_bits(message)
        blocks = tuple(sk.block(bit, i) for i, bit in enumerate(bits))

        logger.debug("Signed %d-byte message", len(message))
        return Signature(blocks=blocks)

    def verify(self, message: bytes, sig: Signature, pk: PublicKey) -> bool:
        """
        Verifies a signature against a public key and message.

        This is a **deterministic** algorithm. It never raises on bad input:
        malformed, forged and wrong-key inputs all yield `False`.

        ### Verification Algorithm

        1.  **Shape**: The signature must hold `W` blocks and the public key
            `2 * W` blocks, all of `W / 8` bytes. Otherwise return `False`.
        2.  **Digest**: Recompute the message digest and its `W` bits exactly as
            in `sign`.
        3.  **Check**: For each position `i`, hash signature block `i` and
            compare it to public block `(bit_i, i)`. Stop at the first mismatch.

        Args:
            message: The message that was supposedly signed.
            sig: The signature to be verified.
            pk: The public key to verify against.

        Returns:
            `True` if the signature is valid, `False` otherwise.
        """
        if not isinstance(sig, Signature) or not isinstance(pk, PublicKey):
            return False
        if not sig.matches(self.config) or not pk.matches(self.config):
            return False

        try:
            bits = self.message_bits(message)
        except (TypeError, ValueError):
            return False

        for i, bit in enumerate(bits):
            # Constant-time comparison per block.
            if not hmac.compare_digest(self.hasher.digest(sig.blocks[i]), pk.block(bit, i)):
                logger.debug("Lamport signature rejected")
                return False

        return True

    def private_key_from_bytes(self, data: bytes) -> PrivateKey:
        """Decode a private key from the raw layout of this scheme."""
        return PrivateKey.decode_bytes(data, self.config)

    def public_key_from_bytes(self, data: bytes) -> PublicKey:
        """Decode a public key from the raw layout of this scheme."""
        return PublicKey.decode_bytes(data, self.config)

    def signature_from_bytes(self, data: bytes) -> Signature:
        """Decode a signature from the raw layout of this scheme."""
        return Signature.decode_bytes(data, self.config)

    def verify_bytes(self, message: bytes, sig_bytes: bytes, pk_bytes: bytes) -> bool:
        """
        Verify raw-layout signature and public key buffers.

        A buffer of the wrong length verifies as `False`, like any other
        malformed input.
        """
        try:
            sig = self.signature_from_bytes(sig_bytes)
            pk = self.public_key_from_bytes(pk_bytes)
        except (MalformedKeyError, TypeError, ValueError):
            return False
        return self.verify(message, sig, pk)


PROD_SIGNATURE_SCHEME: Final = LamportScheme(PROD_CONFIG, PROD_HASHER, PROD_RAND)
"""The reference construction: SHA-256 with `W = 256`."""

SHA3_SIGNATURE_SCHEME: Final = LamportScheme(SHA3_CONFIG, SHA3_HASHER, SHA3_RAND)
"""SHA3-256 with `W = 256`."""

KECCAK_SIGNATURE_SCHEME: Final = LamportScheme(KECCAK_CONFIG, KECCAK_HASHER, KECCAK_RAND)
"""Keccak-256 with `W = 256`."""

SHA512_SIGNATURE_SCHEME: Final = LamportScheme(SHA512_CONFIG, SHA512_HASHER, SHA512_RAND)
"""SHA-512 with `W = 512`."""

TEST_SIGNATURE_SCHEME: Final = LamportScheme(TEST_CONFIG, TEST_HASHER, TEST_RAND)
"""A lightweight instance for test environments."""

LAMPORT_ENV_TO_SCHEMES: Final = {
    "test": TEST_SIGNATURE_SCHEME,
    "prod": PROD_SIGNATURE_SCHEME,
}
"""Mapping from `LAMPORT_ENV` values to scheme instances."""

DEFAULT_SIGNATURE_SCHEME: Final = LAMPORT_ENV_TO_SCHEMES[LAMPORT_ENV]
"""The default signature scheme to use."""
