"""
Shared pytest fixtures for the Lamport scheme tests.

Key generation is cheap for the test preset, so fixtures are function scoped
and every test gets fresh, independent key material.
"""

from __future__ import annotations

import pytest

from lamport_sig.subspecs.lamport.containers import KeyPair
from lamport_sig.subspecs.lamport.interface import TEST_SIGNATURE_SCHEME, LamportScheme


@pytest.fixture
def scheme() -> LamportScheme:
    """The lightweight 64-bit scheme."""
    return TEST_SIGNATURE_SCHEME


@pytest.fixture
def key_pair(scheme: LamportScheme) -> KeyPair:
    """A fresh key pair for the test scheme."""
    return scheme.key_gen()
