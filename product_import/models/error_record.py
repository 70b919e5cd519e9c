from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the skipped-row error log.

One ErrorRecord is produced for every skipped row. Records are serialized as
JSON Lines with a fixed key set (no extra keys) so the log can be consumed
by other tooling.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Input file name being imported
        line: Source line number (header is line 1, first data row is line 2)
        code: Product Code of the row, "Unknown" when the column was absent
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error text shown in the console report
    """
    timestamp: str  # ISO8601 UTC
    file: str
    line: int
    code: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, line: int, code: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            line=line,
            code=code,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
