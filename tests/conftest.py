# Shared pytest fixtures
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from product_import.config.loader import ImportConfig
from product_import.logging.init import LOGGER_NAME, reset_logging

HEADER = "Product Name,Product Description,Product Code,Stock,Cost in GBP,Discontinued"

FIXED_NOW = datetime(2024, 3, 1, 12, 30, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    # 実 DB / .env の影響を受けないよう接続系環境変数を除去
    for key in ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """table_name: product_data
delimiter: ","
encoding: utf-8
allow_extra_columns: false
error_log_directory: ./logs
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def import_config(tmp_path: Path) -> ImportConfig:
    return ImportConfig(error_log_directory=str(tmp_path / "logs"))


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write a product CSV (header + given data lines) and return its path."""

    def _write(lines: list[str], name: str = "products.csv", header: str | None = HEADER) -> Path:
        path = tmp_path / "data" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        content = [header] if header is not None else []
        content.extend(lines)
        path.write_text("\n".join(content) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW
