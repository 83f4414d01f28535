"""
A consuming wrapper that enforces the one-signature rule.

`LamportScheme.sign` is a pure function and cannot know whether a key has
signed before. `OneTimeSigner` holds the private key itself, in a mutable
buffer, and destroys it as part of the first signature.
"""

from __future__ import annotations

import logging

from lamport_sig.types import KeyReuseError

from .containers import PrivateKey, PublicKey, Signature
from .interface import LamportScheme

logger = logging.getLogger(__name__)


class OneTimeSigner:
    """
    A private key that can sign exactly once.

    The key is kept as a `bytearray` in the raw layout. After one call to
    `sign` (or to `destroy`) the buffer is overwritten with zeros and every
    further signing attempt raises `KeyReuseError`.

    Examples:
        >>> signer = OneTimeSigner.generate(TEST_SIGNATURE_SCHEME)
        >>> sig = signer.sign(b"lamport")
        >>> TEST_SIGNATURE_SCHEME.verify(b"lamport", sig, signer.public_key)
        True
    """

    def __init__(
        self,
        scheme: LamportScheme,
        private_key: PrivateKey,
        public_key: PublicKey | None = None,
    ) -> None:
        """
        Take ownership of `private_key`.

        The caller should drop its own reference to `private_key`: the
        immutable copy it holds cannot be wiped.

        Raises:
            MalformedKeyError: If the key does not fit `scheme`.
        """
        # Round-trip through the scheme's decoder to validate the shape.
        raw = private_key.encode_bytes()
        scheme.private_key_from_bytes(raw)

        self.scheme = scheme
        self.public_key = public_key
        self._key: bytearray | None = bytearray(raw)

    @classmethod
    def generate(cls, scheme: LamportScheme) -> OneTimeSigner:
        """Generate a fresh key pair and wrap its private half."""
        sk, pk = scheme.key_gen()
        return cls(scheme, sk, pk)

    @property
    def consumed(self) -> bool:
        """Whether the key has already signed or been destroyed."""
        return self._key is None

    def sign(self, message: bytes) -> Signature:
        """
        Sign `message` and destroy the private key.

        The key is destroyed even if signing fails.

        Raises:
            KeyReuseError: If the key was already used or destroyed.
        """
        if self._key is None:
            logger.warning("Refusing to sign with a consumed one-time key")
            raise KeyReuseError()

        try:
            sk = self.scheme.private_key_from_bytes(bytes(self._key))
            return self.scheme.sign(message, sk)
        finally:
            self.destroy()

    def destroy(self) -> None:
        """Overwrite the key material with zeros and mark the key consumed."""
        if self._key is None:
            return
        self._key[:] = bytes(len(self._key))
        self._key = None

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else "ready"
        return f"OneTimeSigner(digest_bits={self.scheme.config.DIGEST_BITS}, {state})"
