"""Reusable type definitions for the Lamport signature package."""

from .base import StrictBaseModel
from .byte_arrays import coerce_to_bytes
from .exceptions import (
    KeyReuseError,
    LamportError,
    MalformedKeyError,
    RandomSourceError,
)

__all__ = [
    # Core types
    "StrictBaseModel",
    "coerce_to_bytes",
    # Exceptions
    "LamportError",
    "RandomSourceError",
    "MalformedKeyError",
    "KeyReuseError",
]
