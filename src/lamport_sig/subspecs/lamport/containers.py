"""
Data containers for the Lamport one-time signature scheme.

This module defines the key and signature containers: PrivateKey, PublicKey,
Signature and the KeyPair returned by key generation.

### Logical Layout

Both keys are a grid of blocks indexed by `(branch, index)`:

    branch 0:  block[0][0], block[0][1], ..., block[0][W-1]
    branch 1:  block[1][0], block[1][1], ..., block[1][W-1]

Bit `i` of the message digest picks the branch for position `i`.

### Raw Byte Layout

For interchange, keys serialize as `2 * W` concatenated blocks, branch-major
then index (all of branch 0, then all of branch 1). Signatures serialize as
`W` concatenated blocks in index order. There is no header or length prefix:
the digest width `W` of the decoding config fixes every boundary.
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import model_validator
from typing_extensions import Self

from lamport_sig.types import MalformedKeyError, StrictBaseModel, coerce_to_bytes

from .constants import LamportConfig


def _check_blocks(type_name: str, blocks: tuple[bytes, ...], digest_bits: int) -> None:
    """
    Check that every block is one digest wide for a `digest_bits`-bit hash.

    Raises:
        MalformedKeyError: If the width is not byte aligned or a block has the wrong size.
    """
    if digest_bits == 0 or digest_bits % 8 != 0:
        raise MalformedKeyError(
            type_name, "block count must be a positive multiple of 8", actual=digest_bits
        )
    block_length = digest_bits // 8
    for block in blocks:
        if len(block) != block_length:
            raise MalformedKeyError(
                type_name,
                "block has the wrong size in bytes",
                expected=block_length,
                actual=len(block),
            )


def _split_blocks(
    type_name: str, data: bytes, block_length: int, count: int
) -> tuple[bytes, ...]:
    """
    Slice `data` into `count` consecutive blocks of `block_length` bytes.

    Raises:
        MalformedKeyError: If `data` is not exactly `count * block_length` bytes.
    """
    expected = count * block_length
    if len(data) != expected:
        raise MalformedKeyError(
            type_name, f"invalid {type_name} length in bytes", expected=expected, actual=len(data)
        )
    return tuple(data[i : i + block_length] for i in range(0, expected, block_length))


class _BranchedKey(StrictBaseModel):
    """
    A grid of `2 * W` blocks split into a zero-branch and a one-branch.

    Shared structure of `PrivateKey` and `PublicKey`.
    """

    zero_branch: tuple[bytes, ...]
    """The `W` blocks selected when a digest bit is 0."""

    one_branch: tuple[bytes, ...]
    """The `W` blocks selected when a digest bit is 1."""

    @model_validator(mode="after")
    def check_shape(self) -> Self:
        """Both branches hold `W` blocks of `W / 8` bytes each."""
        type_name = type(self).__name__
        if len(self.zero_branch) != len(self.one_branch):
            raise MalformedKeyError(
                type_name,
                "branches differ in block count",
                expected=len(self.zero_branch),
                actual=len(self.one_branch),
            )
        _check_blocks(type_name, self.zero_branch + self.one_branch, len(self.zero_branch))
        return self

    @property
    def digest_bits(self) -> int:
        """The digest width `W` this key was built for."""
        return len(self.zero_branch)

    @property
    def block_length(self) -> int:
        """The size of one block in bytes."""
        return self.digest_bits // 8

    def block(self, branch: int, index: int) -> bytes:
        """
        Return the block at `(branch, index)`.

        Args:
            branch: 0 for the zero-branch, 1 for the one-branch.
            index: Position in `[0, W)`.
        """
        if branch == 0:
            return self.zero_branch[index]
        if branch == 1:
            return self.one_branch[index]
        raise IndexError(f"branch must be 0 or 1, got {branch}")

    def matches(self, config: LamportConfig) -> bool:
        """Whether this key has the shape required by `config`."""
        return self.digest_bits == config.DIGEST_BITS

    def encode_bytes(self) -> bytes:
        """Serialize to the raw layout: branch 0 blocks, then branch 1 blocks."""
        return b"".join(self.zero_branch) + b"".join(self.one_branch)

    def __bytes__(self) -> bytes:
        """Return the raw layout, see `encode_bytes`."""
        return self.encode_bytes()

    @classmethod
    def decode_bytes(cls, data: bytes, config: LamportConfig) -> Self:
        """
        Parse a key from the raw layout.

        Args:
            data: Exactly `2 * W * (W / 8)` bytes.
            config: The preset fixing `W`.

        Raises:
            MalformedKeyError: If the length does not match the config.
        """
        width = config.DIGEST_BITS
        blocks = _split_blocks(cls.__name__, coerce_to_bytes(data), config.BLOCK_LENGTH, 2 * width)
        return cls(zero_branch=blocks[:width], one_branch=blocks[width:])


class PrivateKey(_BranchedKey):
    """
    The private component of a key pair. **MUST BE KEPT CONFIDENTIAL.**

    Every block is independent and uniformly random. A signature reveals one
    block per position, so the key must sign **exactly one** message: two
    signatures over different messages expose enough of both branches for an
    attacker to forge signatures on new messages.

    Python cannot wipe the immutable `bytes` held here. Callers wanting the key
    material overwritten after use should sign through `OneTimeSigner`.
    """

    def __repr__(self) -> str:
        """Never print key material."""
        return f"PrivateKey(digest_bits={self.digest_bits}, <redacted>)"

    def __str__(self) -> str:
        return repr(self)


class PublicKey(_BranchedKey):
    """
    The public component of a key pair.

    Block `(b, i)` is the hash of the private block `(b, i)`. It is safe to
    publish and verifies the single signature made with the matching private key.
    """


class Signature(StrictBaseModel):
    """
    A signature produced by the `sign` function.

    Block `i` is a verbatim copy of private block `(bit_i, i)`, where `bit_i`
    is bit `i` of the message digest.
    """

    blocks: tuple[bytes, ...]
    """The `W` revealed private key blocks, in index order."""

    @model_validator(mode="after")
    def check_shape(self) -> Self:
        """The signature holds `W` blocks of `W / 8` bytes each."""
        _check_blocks(type(self).__name__, self.blocks, len(self.blocks))
        return self

    @property
    def digest_bits(self) -> int:
        """The digest width `W` this signature was made with."""
        return len(self.blocks)

    def matches(self, config: LamportConfig) -> bool:
        """Whether this signature has the shape required by `config`."""
        return self.digest_bits == config.DIGEST_BITS

    def encode_bytes(self) -> bytes:
        """Serialize to the raw layout: `W` blocks in index order."""
        return b"".join(self.blocks)

    def __bytes__(self) -> bytes:
        """Return the raw layout, see `encode_bytes`."""
        return self.encode_bytes()

    @classmethod
    def decode_bytes(cls, data: bytes, config: LamportConfig) -> Self:
        """
        Parse a signature from the raw layout.

        Args:
            data: Exactly `W * (W / 8)` bytes.
            config: The preset fixing `W`.

        Raises:
            MalformedKeyError: If the length does not match the config.
        """
        blocks = _split_blocks(
            cls.__name__, coerce_to_bytes(data), config.BLOCK_LENGTH, config.DIGEST_BITS
        )
        return cls(blocks=blocks)


class KeyPair(NamedTuple):
    """A freshly generated key pair, unpacked as `sk, pk = scheme.key_gen()`."""

    private_key: PrivateKey
    """The secret half. Sign one message with it, then discard it."""

    public_key: PublicKey
    """The public half."""
