from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from ..config.loader import ImportConfig
from ..db.product_writer import ProductWriter
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.import_result import ImportResult
from ..reader.csv_reader import ProductFile, read_product_file
from ..rules.engine import RuleEngine, default_rule_engine
from ..validation.schema import SchemaValidator
from .aggregator import LINE_OFFSET, UNKNOWN_CODE, ResultAggregator
from .progress import RowProgress
from .row_processor import RowProcessor

"""Service orchestration for one product import run.

read file -> process every row (RowProcessor) -> aggregate -> error log
flush -> ImportResult. Reading the file is the only fatal step; it happens
before any row is processed (InputFileError propagates to the caller).
"""

__all__ = [
    "load_product_file",
    "import_rows",
    "run_import",
]

logger = logging.getLogger(__name__)


def load_product_file(path: Path, config: ImportConfig) -> ProductFile:
    """Read the input file using the configured delimiter/encoding.

    Raises:
        InputFileError: If the file cannot be read or decoded
    """
    return read_product_file(path, delimiter=config.delimiter, encoding=config.encoding)


def import_rows(
    product_file: ProductFile,
    config: ImportConfig,
    *,
    writer: ProductWriter | None = None,
    dry_run: bool = False,
    rule_engine: RuleEngine | None = None,
    clock: Callable[[], datetime] | None = None,
    progress_stream: TextIO | None = None,
) -> ImportResult:
    """Process all rows of an already loaded file.

    Args:
        product_file: Rows read from the input file
        config: Import configuration
        writer: Storage writer (required unless dry_run)
        dry_run: Validate and classify only, never persist
        rule_engine: Override the default rule set (built once per run)
        clock: Processing clock (default: current UTC time)
        progress_stream: Stream for progress markers (default: stdout)

    Returns:
        ImportResult with counters and the skipped-row listing
    """
    start_time = datetime.now(UTC)
    rows = product_file.rows
    logger.info(f"Processing {len(rows)} row(s):")

    processor_kwargs = {"clock": clock} if clock is not None else {}
    processor = RowProcessor(
        SchemaValidator(allow_extra_columns=config.allow_extra_columns),
        rule_engine if rule_engine is not None else default_rule_engine(),
        writer,
        dry_run=dry_run,
        **processor_kwargs,
    )
    aggregator = ResultAggregator()

    with RowProgress(len(rows), stream=progress_stream) as progress:
        processor.process_all(rows, aggregator, on_row=progress.advance)

    _write_error_log(product_file.name, aggregator, Path(config.error_log_directory))

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = aggregator.total / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ImportResult(
        file_name=product_file.name,
        total_rows=aggregator.total,
        successful_rows=aggregator.successful_count,
        dry_run=dry_run,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        skipped_rows=aggregator.skipped_rows(),
    )


def run_import(
    path: Path,
    config: ImportConfig,
    *,
    writer: ProductWriter | None = None,
    dry_run: bool = False,
    clock: Callable[[], datetime] | None = None,
    progress_stream: TextIO | None = None,
) -> ImportResult:
    """Read `path` and import its rows (convenience wrapper)."""
    product_file = load_product_file(path, config)
    return import_rows(
        product_file,
        config,
        writer=writer,
        dry_run=dry_run,
        clock=clock,
        progress_stream=progress_stream,
    )


def _write_error_log(file_name: str, aggregator: ResultAggregator, directory: Path) -> None:
    error_log = ErrorLogBuffer(directory)
    for idx, outcome in aggregator.outcomes():
        if outcome.is_successful:
            continue
        error_log.append(
            ErrorRecord.create(
                file=file_name,
                line=idx + LINE_OFFSET,
                code=outcome.code if outcome.code is not None else UNKNOWN_CODE,
                error_type=outcome.stage.value if outcome.stage is not None else "UNKNOWN_ERROR",
                message=outcome.error or "",
            )
        )
    try:
        path = error_log.flush()
    except OSError as e:
        # エラーログ書き込み失敗で run 全体を失敗させない
        logger.warning(f"failed to write error log: {e}")
        return
    if path is not None:
        logger.debug(f"error log written: {path}")
