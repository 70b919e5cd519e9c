from __future__ import annotations

import json
from pathlib import Path

from product_import.logging.error_log import ErrorLogBuffer, ErrorRecord

KEYS = {"timestamp", "file", "line", "code", "error_type", "message"}


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(
        file="products.csv",
        line=3,
        code="P0002",
        error_type="RULE_VIOLATION",
        message="CostLessOrEqual1000Rule: Cost 1200 is greater than 1000",
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "products.csv"
    assert data["line"] == 3
    assert data["code"] == "P0002"
    assert data["error_type"] == "RULE_VIOLATION"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == KEYS


def test_non_ascii_kept_in_json_line():
    rec = ErrorRecord.create("products.csv", 2, "P1", "SCHEMA_VIOLATION", "32” Tv")
    assert "32” Tv" in rec.to_json_line()


def test_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    buf.append(ErrorRecord.create("f.csv", 2, "P1", "SCHEMA_VIOLATION", "Product Name: This value should not be blank."))
    buf.append(ErrorRecord.create("f.csv", 4, "Unknown", "SCHEMA_VIOLATION", "a\nb"))
    path = buf.flush()

    assert path is not None and path.exists()
    assert path.parent == tmp_path / "logs"
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2  # 改行を含むメッセージも 1 行に収まる
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    assert len(buf) == 0


def test_flush_without_records_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_multiple_flushes_append_to_same_file(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("f.csv", 2, "P1", "RULE_VIOLATION", "x"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("f.csv", 3, "P2", "RULE_VIOLATION", "y"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1
