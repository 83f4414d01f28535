"""
Global configuration for the Lamport signature package.

This module contains environment-specific settings that apply across all subspecs.
"""

import os

_SUPPORTED_LAMPORT_ENVS: list[str] = ["prod", "test"]

LAMPORT_ENV = os.environ.get("LAMPORT_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if LAMPORT_ENV not in _SUPPORTED_LAMPORT_ENVS:
    raise ValueError(
        f"Invalid LAMPORT_ENV environment variable: '{LAMPORT_ENV}'. "
        f"Supported values: {_SUPPORTED_LAMPORT_ENVS}"
    )
