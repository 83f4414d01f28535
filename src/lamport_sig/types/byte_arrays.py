"""Helpers for raw byte material."""

from __future__ import annotations

from typing import Any, Iterable


def coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a bytes-like input to raw, immutable bytes.

    Accepts:
      - `bytes` / `bytearray` / `memoryview` (returned as immutable `bytes`)
      - Iterables of integers in [0, 255]

    Strings are rejected: messages and key material are raw bytes, and
    silently encoding text would hide the caller's choice of encoding.

    Raises:
      TypeError if the value is a string or not bytes-like.
      ValueError if an integer element is out of range.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        raise TypeError("Expected bytes, got str; encode the text first")
    if isinstance(value, Iterable):
        # bytes(bytearray(iterable)) enforces each element is an int in 0..255
        return bytes(bytearray(value))
    raise TypeError(f"Expected bytes-like value, got {type(value).__name__}")
