"""Domain models for the CSV -> PostgreSQL product importer.

This package contains the value objects passed between the reader, the
validation pipeline, the persistence layer and the report renderer.
"""

from .candidate_record import CandidateRecord
from .error_record import ErrorRecord
from .import_result import ImportResult, SkippedRow
from .row_outcome import ErrorStage, RowOutcome, RowStatus
from .violation import Violation, join_violations

__all__ = [
    # Pipeline models
    "CandidateRecord",
    "Violation",
    "join_violations",
    "RowOutcome",
    "RowStatus",
    "ErrorStage",
    # Reporting models
    "ErrorRecord",
    "ImportResult",
    "SkippedRow",
]
