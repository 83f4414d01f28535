"""Subspecifications for the Lamport signature package."""

from .lamport import LamportScheme, OneTimeSigner

__all__ = [
    "LamportScheme",
    "OneTimeSigner",
]
