"""
Tests for Lamport container validation and the raw byte layout.
"""

import pytest
from pydantic import ValidationError

from lamport_sig.subspecs.lamport.constants import PROD_CONFIG, TEST_CONFIG
from lamport_sig.subspecs.lamport.containers import PrivateKey, PublicKey, Signature
from lamport_sig.types import MalformedKeyError


def _branch(width: int, fill: int) -> tuple[bytes, ...]:
    """`width` distinct blocks of `width // 8` bytes, tagged with `fill`."""
    block_length = width // 8
    return tuple(bytes([fill, i]) + bytes(block_length - 2) for i in range(width))


class TestPublicKey:
    """Tests for PublicKey structure and serialization."""

    def test_bytes_protocol(self) -> None:
        """PublicKey implements Python's bytes protocol."""
        pk = PublicKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1))

        data = bytes(pk)
        assert isinstance(data, bytes)
        assert len(data) == TEST_CONFIG.PUBLIC_KEY_LEN_BYTES
        assert data == pk.encode_bytes()

    def test_layout_is_branch_major(self) -> None:
        """All zero-branch blocks come first, then all one-branch blocks."""
        zero, one = _branch(64, 0), _branch(64, 1)
        data = bytes(PublicKey(zero_branch=zero, one_branch=one))

        half = len(data) // 2
        assert data[:half] == b"".join(zero)
        assert data[half:] == b"".join(one)
        assert data[8:16] == zero[1]
        assert data[half + 8 * 63 :] == one[63]

    def test_roundtrip_test_config(self) -> None:
        original = PublicKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1))
        recovered = PublicKey.decode_bytes(bytes(original), TEST_CONFIG)
        assert recovered == original

    def test_roundtrip_prod_config(self) -> None:
        original = PublicKey(zero_branch=_branch(256, 0), one_branch=_branch(256, 1))
        recovered = PublicKey.decode_bytes(bytes(original), PROD_CONFIG)

        assert recovered == original
        assert recovered.digest_bits == 256
        assert recovered.block_length == 32

    def test_decode_invalid_length(self) -> None:
        with pytest.raises(MalformedKeyError, match="invalid PublicKey length") as excinfo:
            PublicKey.decode_bytes(b"\x00" * 10, TEST_CONFIG)

        assert excinfo.value.expected == TEST_CONFIG.PUBLIC_KEY_LEN_BYTES
        assert excinfo.value.actual == 10

    def test_decode_accepts_bytearray(self) -> None:
        original = PublicKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1))
        assert PublicKey.decode_bytes(bytearray(bytes(original)), TEST_CONFIG) == original

    def test_decode_rejects_other_config(self) -> None:
        data = bytes(PublicKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1)))
        with pytest.raises(MalformedKeyError):
            PublicKey.decode_bytes(data, PROD_CONFIG)

    def test_block_accessor(self) -> None:
        zero, one = _branch(64, 0), _branch(64, 1)
        pk = PublicKey(zero_branch=zero, one_branch=one)

        assert pk.block(0, 5) == zero[5]
        assert pk.block(1, 63) == one[63]
        with pytest.raises(IndexError):
            pk.block(2, 0)

    def test_matches(self) -> None:
        pk = PublicKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1))
        assert pk.matches(TEST_CONFIG)
        assert not pk.matches(PROD_CONFIG)


class TestKeyShapeValidation:
    """Containers reject structurally invalid key material on construction."""

    def test_branch_length_mismatch(self) -> None:
        with pytest.raises(MalformedKeyError, match="branches differ in block count"):
            PrivateKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1)[:-1])

    def test_block_width_mismatch(self) -> None:
        one = _branch(64, 1)[:-1] + (b"\x00" * 9,)
        with pytest.raises(MalformedKeyError, match="wrong size in bytes"):
            PrivateKey(zero_branch=_branch(64, 0), one_branch=one)

    def test_block_count_must_match_block_width(self) -> None:
        """W blocks per branch require blocks of W / 8 bytes."""
        zero = tuple(b"\x00" * 32 for _ in range(64))
        with pytest.raises(MalformedKeyError, match="wrong size in bytes"):
            PublicKey(zero_branch=zero, one_branch=zero)

    def test_block_count_must_be_byte_aligned(self) -> None:
        zero = tuple(b"\x00" for _ in range(12))
        with pytest.raises(MalformedKeyError, match="positive multiple of 8"):
            PublicKey(zero_branch=zero, one_branch=zero)

    def test_empty_key(self) -> None:
        with pytest.raises(MalformedKeyError):
            PublicKey(zero_branch=(), one_branch=())

    def test_lists_are_rejected_in_strict_mode(self) -> None:
        with pytest.raises(ValidationError):
            PublicKey(zero_branch=list(_branch(64, 0)), one_branch=_branch(64, 1))  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        pk = PublicKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1))
        with pytest.raises(ValidationError):
            pk.zero_branch = _branch(64, 2)  # type: ignore[misc]


class TestPrivateKey:
    """Tests specific to the private key container."""

    def test_repr_hides_key_material(self) -> None:
        zero = _branch(64, 0xAB)
        sk = PrivateKey(zero_branch=zero, one_branch=_branch(64, 0xCD))

        for text in (repr(sk), str(sk)):
            assert "redacted" in text
            assert "digest_bits=64" in text
            assert zero[0].hex() not in text
            assert "\\xab" not in text

    def test_roundtrip(self) -> None:
        original = PrivateKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1))
        recovered = PrivateKey.decode_bytes(bytes(original), TEST_CONFIG)

        assert isinstance(recovered, PrivateKey)
        assert recovered == original

    def test_private_and_public_key_are_distinct_types(self) -> None:
        data = bytes(PrivateKey(zero_branch=_branch(64, 0), one_branch=_branch(64, 1)))
        pk = PublicKey.decode_bytes(data, TEST_CONFIG)
        assert not isinstance(pk, PrivateKey)


class TestSignature:
    """Tests for Signature structure and serialization."""

    def test_bytes_protocol(self) -> None:
        signature = Signature(blocks=_branch(64, 7))

        assert len(bytes(signature)) == TEST_CONFIG.SIGNATURE_LEN_BYTES
        assert bytes(signature) == b"".join(signature.blocks)

    def test_roundtrip(self) -> None:
        original = Signature(blocks=_branch(256, 7))
        recovered = Signature.decode_bytes(bytes(original), PROD_CONFIG)

        assert recovered == original
        assert recovered.digest_bits == 256

    def test_decode_invalid_length(self) -> None:
        with pytest.raises(MalformedKeyError, match="invalid Signature length"):
            Signature.decode_bytes(b"\x00" * (TEST_CONFIG.SIGNATURE_LEN_BYTES - 1), TEST_CONFIG)

    def test_block_width_mismatch(self) -> None:
        blocks = _branch(64, 0)[:-1] + (b"\x00" * 7,)
        with pytest.raises(MalformedKeyError, match="wrong size in bytes"):
            Signature(blocks=blocks)

    def test_decode_rejects_strings(self) -> None:
        with pytest.raises(TypeError, match="encode the text first"):
            Signature.decode_bytes("00" * TEST_CONFIG.SIGNATURE_LEN_BYTES, TEST_CONFIG)  # type: ignore[arg-type]
