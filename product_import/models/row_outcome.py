from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""RowOutcome model and status/stage enums.

Each raw row ends the run with exactly one RowOutcome. The outcome is a value
object held by the ResultAggregator, keyed by row position; it is never
written back into the raw row.

State transitions of a row (RowProcessor):
    received -> schema checked -> rule checked -> persist attempted -> outcome
Any failing stage jumps straight to a SKIPPED outcome.
"""

__all__ = [
    "RowStatus",
    "ErrorStage",
    "RowOutcome",
]


class RowStatus(Enum):
    """Terminal status of a processed row."""
    SUCCESSFUL = "successful"
    SKIPPED = "skipped"


class ErrorStage(Enum):
    """Pipeline stage that caused a row to be skipped."""
    SCHEMA_VIOLATION = "SCHEMA_VIOLATION"
    RULE_VIOLATION = "RULE_VIOLATION"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


@dataclass(frozen=True)
class RowOutcome:
    """Immutable per-row result.

    Attributes:
        status: SUCCESSFUL or SKIPPED
        error: Error text when skipped (violations joined by newline, or
            the persistence error message)
        stage: Stage that failed, None when successful
        code: Product Code of the source row if the column was present
    """
    status: RowStatus
    error: str | None = None
    stage: ErrorStage | None = None
    code: str | None = None

    @staticmethod
    def successful(code: str | None = None) -> RowOutcome:
        return RowOutcome(status=RowStatus.SUCCESSFUL, code=code)

    @staticmethod
    def skipped(stage: ErrorStage, error: str | None, code: str | None = None) -> RowOutcome:
        return RowOutcome(status=RowStatus.SKIPPED, error=error, stage=stage, code=code)

    @property
    def is_successful(self) -> bool:
        return self.status is RowStatus.SUCCESSFUL
