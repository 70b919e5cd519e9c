from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime

from ..db.product_writer import ProductWriter
from ..models.row_outcome import ErrorStage, RowOutcome
from ..models.violation import join_violations
from ..rules.engine import RuleEngine
from ..validation.schema import COL_CODE, SchemaValidator, build_candidate
from .aggregator import ResultAggregator

"""Per-row processing pipeline.

Each row goes through, in order:

    received -> schema checked -> rule checked -> persist attempted -> outcome

- schema violations: SKIPPED, the rule engine is not invoked
- rule violations: SKIPPED, persistence is not attempted
- persistence error: SKIPPED with the error message; later rows unaffected
- dry run: persistence skipped, row counts as SUCCESSFUL

There is no state that halts the batch; every row gets exactly one outcome.
"""

__all__ = [
    "RowProcessor",
    "RowCallback",
]

logger = logging.getLogger(__name__)

RowCallback = Callable[[int, RowOutcome], None]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RowProcessor:
    """Validates, classifies and (unless dry run) persists rows one at a time.

    Args:
        schema_validator: Structural validator for raw rows
        rule_engine: Business rule engine, built once per run
        writer: Storage writer; may be None only in dry-run mode
        dry_run: Skip persistence but keep every other behavior
        clock: Returns the processing moment (used for added/discontinued dates)
    """

    def __init__(
        self,
        schema_validator: SchemaValidator,
        rule_engine: RuleEngine,
        writer: ProductWriter | None = None,
        *,
        dry_run: bool = False,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if writer is None and not dry_run:
            raise ValueError("writer is required unless dry_run is set")
        self.schema_validator = schema_validator
        self.rule_engine = rule_engine
        self.writer = writer
        self.dry_run = dry_run
        self.clock = clock

    def process(self, index: int, row: Mapping[str, str]) -> RowOutcome:
        """Run a single row through the pipeline and return its outcome."""
        code = row.get(COL_CODE)

        schema_violations = self.schema_validator.validate(row)
        if schema_violations:
            logger.debug("row=%d schema violations=%d", index, len(schema_violations))
            return RowOutcome.skipped(ErrorStage.SCHEMA_VIOLATION, join_violations(schema_violations), code)

        candidate = build_candidate(row, self.clock())

        rule_violations = self.rule_engine.validate(candidate)
        if rule_violations:
            logger.debug("row=%d code=%s rule violations=%d", index, candidate.code, len(rule_violations))
            return RowOutcome.skipped(ErrorStage.RULE_VIOLATION, join_violations(rule_violations), code)

        if self.dry_run:
            return RowOutcome.successful(code)

        try:
            self.writer.save(candidate)  # type: ignore[union-attr]
        except Exception as e:
            # 行単位で閉じる: 後続行の処理は継続
            logger.debug("row=%d code=%s persistence failed: %s", index, candidate.code, e)
            return RowOutcome.skipped(ErrorStage.PERSISTENCE_ERROR, str(e), code)
        return RowOutcome.successful(code)

    def process_all(
        self,
        rows: Sequence[Mapping[str, str]],
        aggregator: ResultAggregator,
        on_row: RowCallback | None = None,
    ) -> ResultAggregator:
        """Process rows in source order and record every outcome."""
        for index, row in enumerate(rows):
            outcome = self.process(index, row)
            aggregator.record(index, outcome)
            if on_row is not None:
                on_row(index, outcome)
        return aggregator
