from __future__ import annotations

from collections.abc import Iterator

from ..models.import_result import SkippedRow
from ..models.row_outcome import RowOutcome, RowStatus

"""Result aggregation for processed rows.

Outcomes are kept by row position (0-based index into the data rows) and
never mutated once recorded. The skipped-row listing converts the index to
the source line number: +1 for the header line, +1 for 1-based display.
"""

__all__ = [
    "ResultAggregator",
    "UNKNOWN_CODE",
    "NO_ERROR_TEXT",
    "LINE_OFFSET",
]

UNKNOWN_CODE = "Unknown"
NO_ERROR_TEXT = "-"
LINE_OFFSET = 2


class ResultAggregator:
    """Accumulates RowOutcome values and derives summary counts."""

    def __init__(self) -> None:
        self._outcomes: dict[int, RowOutcome] = {}

    def record(self, row_index: int, outcome: RowOutcome) -> None:
        """Record the terminal outcome of a row.

        Raises:
            ValueError: If the row already has an outcome
        """
        if row_index < 0:
            raise ValueError(f"row index must be >= 0: {row_index}")
        if row_index in self._outcomes:
            raise ValueError(f"row {row_index} already has an outcome")
        self._outcomes[row_index] = outcome

    def get(self, row_index: int) -> RowOutcome | None:
        return self._outcomes.get(row_index)

    def outcomes(self) -> Iterator[tuple[int, RowOutcome]]:
        """Yield (index, outcome) in original row order."""
        for idx in sorted(self._outcomes):
            yield idx, self._outcomes[idx]

    def count_by_status(self, status: RowStatus) -> int:
        return sum(1 for o in self._outcomes.values() if o.status is status)

    @property
    def total(self) -> int:
        return len(self._outcomes)

    @property
    def successful_count(self) -> int:
        return self.count_by_status(RowStatus.SUCCESSFUL)

    @property
    def skipped_count(self) -> int:
        return self.count_by_status(RowStatus.SKIPPED)

    def skipped_rows(self) -> list[SkippedRow]:
        """Skipped rows in original order with display line number, code and error."""
        rows: list[SkippedRow] = []
        for idx, outcome in self.outcomes():
            if outcome.status is not RowStatus.SKIPPED:
                continue
            rows.append(
                SkippedRow(
                    line_number=idx + LINE_OFFSET,
                    code=outcome.code if outcome.code is not None else UNKNOWN_CODE,
                    error=outcome.error if outcome.error is not None else NO_ERROR_TEXT,
                )
            )
        return rows
