"""Exception hierarchy for the Lamport signature scheme."""

from __future__ import annotations


class LamportError(Exception):
    """
    Base exception for all errors raised by the scheme.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class RandomSourceError(LamportError):
    """
    Raised when the secure random source cannot supply the requested bytes.

    Key generation aborts on this error. No partial key pair is ever returned.

    Attributes:
        requested: Number of bytes that were requested.
        detail: Additional context about the failure.
    """

    def __init__(self, requested: int, *, detail: str | None = None) -> None:
        self.requested = requested
        self.detail = detail

        msg = f"Secure random source failed to supply {requested} bytes"
        if detail:
            msg = f"{msg}: {detail}"

        super().__init__(msg)


class MalformedKeyError(LamportError):
    """
    Raised when key or signature material has the wrong shape.

    Attributes:
        type_name: The container being validated.
        detail: Description of the violated structural constraint.
        expected: The expected size (blocks or bytes, see `detail`).
        actual: The size that was received.
    """

    def __init__(
        self,
        type_name: str,
        detail: str,
        *,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        self.type_name = type_name
        self.detail = detail
        self.expected = expected
        self.actual = actual

        msg = f"Malformed {type_name}: {detail}"
        if expected is not None and actual is not None:
            msg = f"{msg} (expected {expected}, got {actual})"

        super().__init__(msg)


class KeyReuseError(LamportError):
    """Raised when a one-time signing key is asked to produce a second signature."""

    def __init__(self) -> None:
        super().__init__("One-time private key has already been used or destroyed")
