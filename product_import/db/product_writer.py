from __future__ import annotations

import re
from typing import Any, Protocol

import psycopg2
from psycopg2 import sql

from ..models.candidate_record import CandidateRecord

"""Durable storage writer for accepted product records.

Each save() is one atomic operation: BEGIN -> INSERT -> COMMIT, or ROLLBACK
and PersistenceError on failure. A failed row therefore leaves the
connection usable for the next row.

Expected table layout (see sql/product_data.sql):
    product_name, product_desc, product_code, stock, price,
    added_at, discontinued_at
"""

__all__ = [
    "PersistenceError",
    "ProductWriter",
    "PostgresProductWriter",
    "INSERT_COLUMNS",
]

INSERT_COLUMNS: tuple[str, ...] = (
    "product_name",
    "product_desc",
    "product_code",
    "stock",
    "price",
    "added_at",
    "discontinued_at",
)

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class PersistenceError(Exception):
    """Raised when a single record could not be committed."""


class ProductWriter(Protocol):
    def save(self, record: CandidateRecord) -> None: ...


class PostgresProductWriter:
    """Insert product records one row per transaction through a psycopg2 cursor."""

    def __init__(self, cursor: Any, table: str = "product_data") -> None:
        # テーブル名は英数字とアンダースコアのみ許可
        if not _TABLE_NAME_RE.match(table):
            raise ValueError(f"invalid table name: {table!r}")
        self.cursor = cursor
        self.table = table
        self._insert_sql = sql.SQL("INSERT INTO {table} ({cols}) VALUES ({vals})").format(
            table=sql.Identifier(table),
            cols=sql.SQL(", ").join(sql.Identifier(c) for c in INSERT_COLUMNS),
            vals=sql.SQL(", ").join(sql.Placeholder() * len(INSERT_COLUMNS)),
        )

    @staticmethod
    def to_params(record: CandidateRecord) -> tuple[Any, ...]:
        return (
            record.name,
            record.description,
            record.code,
            record.stock,
            record.price,
            record.added_at,
            record.discontinued_at,
        )

    def save(self, record: CandidateRecord) -> None:
        try:
            self.cursor.execute("BEGIN")
            self.cursor.execute(self._insert_sql, self.to_params(record))
            self.cursor.execute("COMMIT")
        except psycopg2.Error as e:
            self._rollback()
            raise PersistenceError(_error_message(e)) from e
        except Exception:
            # BEGIN 済みのトランザクションを次の行に持ち越さない
            self._rollback()
            raise

    def _rollback(self) -> None:
        try:
            self.cursor.execute("ROLLBACK")
        except psycopg2.Error:  # pragma: no cover - connection already broken
            pass


def _error_message(e: psycopg2.Error) -> str:
    # psycopg2 のメッセージは DETAIL 行を含むので 1 行目のみ
    text = str(e).strip()
    return text.splitlines()[0] if text else type(e).__name__
