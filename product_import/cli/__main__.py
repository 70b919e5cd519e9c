from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from product_import.config.loader import ConfigError, load_config
from product_import.db.connection import DatabaseConnectionError, db_cursor
from product_import.db.product_writer import PostgresProductWriter
from product_import.logging.init import log_summary, setup_logging
from product_import.reader.csv_reader import InputFileError
from product_import.services.importer import import_rows, load_product_file
from product_import.services.summary import render_report_lines, render_summary_line

"""CLI entrypoint: import products from a CSV file.

Flow:
- Load .env (override) and config
- Read the input file (fatal on failure)
- Process rows (dry run: no DB connection, nothing persisted)
- Print report block + metrics line at SUMMARY level

Skipped rows never change the exit code; only setup failures do.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv.

    override=True により .env の値で既存環境変数を上書きし、PostgreSQL 接続情報を最優先化。
    """
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="product-import",
        description="Import products from a CSV file into PostgreSQL",
    )
    p.add_argument("filename", type=Path, help="The filename of the import CSV file")
    p.add_argument(
        "--test",
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Test mode: validate and report without saving data",
    )
    p.add_argument("--config", type=Path, default=None, help="Config file (default: config/import.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    # NOTE: None のときのみ sys.argv を読む (テストで main([...]) を直接呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    # .env を最優先で読み込む (DB 接続パラメータ優先順位保証)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.dry_run:
        logger.warning("Warning: this command is in test mode!")

    try:
        product_file = load_product_file(args.filename, cfg)
    except InputFileError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    if args.dry_run:
        result = import_rows(product_file, cfg, dry_run=True)
    else:
        try:
            with db_cursor(cfg.database) as cur:
                writer = PostgresProductWriter(cur, table=cfg.table_name)
                result = import_rows(product_file, cfg, writer=writer)
        except DatabaseConnectionError as e:
            logger.error(f"database: {e}")
            return EXIT_FATAL

    for line in render_report_lines(result):
        log_summary(line)
    log_summary(render_summary_line(result))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
