from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

"""Run-level result model for the product importer.

Carries the counters used by the SUMMARY output together with the skipped
row listing produced by the ResultAggregator.
"""

__all__ = [
    "SkippedRow",
    "ImportResult",
]


@dataclass(frozen=True)
class SkippedRow:
    """One entry of the skipped-rows report."""
    line_number: int  # index + 2 (header 行 + 1-based)
    code: str  # Product Code, 欠落時 "Unknown"
    error: str  # エラー文, 欠落時 "-"


@dataclass(frozen=True)
class ImportResult:
    """Aggregated results of one import run.

    `total_rows` always equals `successful_rows + skipped_count` since every
    row reaches exactly one outcome.
    """
    file_name: str
    total_rows: int
    successful_rows: int
    dry_run: bool
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    skipped_rows: list[SkippedRow] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_rows)
