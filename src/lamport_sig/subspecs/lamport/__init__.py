"""
This package provides a Python implementation of the Lamport one-time
hash-based signature scheme.

It exposes the core data structures and the main interface functions.
"""

from .constants import (
    KECCAK_CONFIG,
    PROD_CONFIG,
    SHA3_CONFIG,
    SHA512_CONFIG,
    TARGET_CONFIG,
    TEST_CONFIG,
    LamportConfig,
)
from .containers import KeyPair, PrivateKey, PublicKey, Signature
from .hashing import HashFunction, Hasher
from .interface import (
    DEFAULT_SIGNATURE_SCHEME,
    PROD_SIGNATURE_SCHEME,
    TEST_SIGNATURE_SCHEME,
    LamportScheme,
)
from .rand import Rand
from .single_use import OneTimeSigner

__all__ = [
    "LamportScheme",
    "OneTimeSigner",
    "LamportConfig",
    "HashFunction",
    "Hasher",
    "Rand",
    "KeyPair",
    "PrivateKey",
    "PublicKey",
    "Signature",
    "PROD_CONFIG",
    "SHA3_CONFIG",
    "KECCAK_CONFIG",
    "SHA512_CONFIG",
    "TEST_CONFIG",
    "TARGET_CONFIG",
    "PROD_SIGNATURE_SCHEME",
    "TEST_SIGNATURE_SCHEME",
    "DEFAULT_SIGNATURE_SCHEME",
]
