"""Structural validation of raw rows."""

from .schema import EXPECTED_COLUMNS, SchemaValidator, build_candidate

__all__ = [
    "EXPECTED_COLUMNS",
    "SchemaValidator",
    "build_candidate",
]
