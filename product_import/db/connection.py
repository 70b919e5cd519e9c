from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2

from ..config.loader import DatabaseConfig

"""PostgreSQL connection helpers.

接続情報の解決優先順位 (.env は CLI 起動時に override=True で読み込み済み):
    1. DATABASE_URL / PGDSN 環境変数 (DSN 全体)
    2. config の database.dsn
    3. 個別 PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    4. config の database セクション (不足分のフォールバック)
"""

__all__ = [
    "DatabaseConnectionError",
    "resolve_dsn",
    "db_cursor",
]


class DatabaseConnectionError(Exception):
    """Raised when a connection to PostgreSQL cannot be established."""


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def db_cursor(db_cfg: DatabaseConfig) -> Iterator[Any]:
    """Yield a psycopg2 cursor for the duration of an import run.

    The connection runs in autocommit mode; the writer opens an explicit
    BEGIN/COMMIT per row so that no transaction spans multiple rows.
    """
    try:
        conn = psycopg2.connect(resolve_dsn(db_cfg))
    except psycopg2.Error as e:
        raise DatabaseConnectionError(str(e).strip()) from e

    try:
        conn.autocommit = True
        with conn.cursor() as cur:
            yield cur
    finally:
        conn.close()
