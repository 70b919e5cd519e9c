from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

"""Violation model shared by schema validation and business rules.

A Violation is one reason a row or candidate record was rejected. `source`
names the offending column (schema stage) or the rule (rule stage) so the
rendered text can be read without further context.
"""

__all__ = [
    "Violation",
    "join_violations",
]


@dataclass(frozen=True)
class Violation:
    """Single failed check.

    Attributes:
        source: Column name (e.g. "Product Name") or rule name
        message: Human readable description of the failure
    """
    source: str
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


def join_violations(violations: Iterable[Violation]) -> str:
    """Render violations as newline separated error text (order preserved)."""
    return "\n".join(str(v) for v in violations)
