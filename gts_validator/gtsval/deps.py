"""Shared FastAPI dependencies."""

from __future__ import annotations

from gtsval.validator.models import ValidationConfig

_validation_config: ValidationConfig | None = None


def get_validation_config() -> ValidationConfig:
    """FastAPI dependency: return the server-wide default ValidationConfig."""
    assert _validation_config is not None, "ValidationConfig not initialised"
    return _validation_config
