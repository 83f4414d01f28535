"""Strict, immutable pydantic base model shared by the scheme's components."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    - Frozen: fields cannot be reassigned once validated.
    - Strict: no implicit coercion, so a `list` is not a `tuple` and a
      `bytearray` is not `bytes`.
    - Extra fields are rejected.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
        arbitrary_types_allowed=True,
    )
