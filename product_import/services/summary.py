from __future__ import annotations

from ..models.import_result import ImportResult

"""Report rendering for the product importer.

Two outputs are produced from an ImportResult, both logged at SUMMARY level
by the CLI (the logger adds the `SUMMARY ` label):

1. human readable report block::

       Processed 5 row(s)
       Successfully 3 row(s)
       ==========================
       Skipped 2 row(s):
       Line 3 with the code 'P0002': CostLessOrEqual1000Rule: Cost 1200 is greater than 1000
       Line 6 with the code 'Unknown': Product Code: This field is missing.
       ==========================

2. machine readable metrics line::

       rows=5 success=3 skipped=2 mode=dry-run elapsed_sec=0.012 throughput_rps=416.67
"""

__all__ = [
    "SEPARATOR",
    "render_report_lines",
    "render_summary_line",
]

SEPARATOR = "=========================="


def render_report_lines(result: ImportResult) -> list[str]:
    """Render the report block; the skipped listing only when rows were skipped."""
    lines = [
        f"Processed {result.total_rows} row(s)",
        f"Successfully {result.successful_rows} row(s)",
        SEPARATOR,
    ]
    if result.skipped_count > 0:
        lines.append(f"Skipped {result.skipped_count} row(s):")
        for row in result.skipped_rows:
            lines.append(f"Line {row.line_number} with the code '{row.code}': {row.error}")
        lines.append(SEPARATOR)
    return lines


def _format_number(value: float) -> str:
    # 整数値は小数点なし、極小値は指数表記を避ける
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ImportResult) -> str:
    """Render the metrics line.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ImportResult(
        ...     file_name="products.csv", total_rows=10, successful_rows=10, dry_run=True,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0, throughput_rows_per_sec=5.0,
        ... )
        >>> render_summary_line(result)
        'rows=10 success=10 skipped=0 mode=dry-run elapsed_sec=2 throughput_rps=5'
    """
    mode = "dry-run" if result.dry_run else "live"
    return (
        f"rows={result.total_rows} "
        f"success={result.successful_rows} "
        f"skipped={result.skipped_count} "
        f"mode={mode} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
