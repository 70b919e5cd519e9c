from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

"""CSV reader: turns the product import file into ordered raw rows.

- 1行目をヘッダ行として扱い、2行目以降をデータ行とする。
- All cells are read as strings (dtype=str, keep_default_na=False) so that
  blanks stay "" and values such as "NA" or "null" are not converted.
- Cells missing from short lines are dropped from the row mapping (absent).
- Fields beyond the header on long lines never shift the other columns.
  Blank ones (trailing delimiters) are ignored; non-blank ones are kept under
  overflow_column(position) so that schema validation rejects the row.

The file is scanned twice: csv.reader records the field count of each line,
then pandas reads the cell grid with the same tokenizer (engine="python").

Any failure to read or decode the file raises InputFileError; this is the
only condition that aborts an import run.
"""

__all__ = [
    "InputFileError",
    "ProductFile",
    "read_product_file",
    "overflow_column",
    "is_overflow_column",
]

_OVERFLOW_PREFIX = "<field "


class InputFileError(Exception):
    """Raised when the input file cannot be read or decoded."""


@dataclass
class ProductFile:
    path: Path
    columns: list[str]
    rows: list[dict[str, str]]  # 列名 -> 文字列値 (ファイル順)

    @property
    def name(self) -> str:
        return self.path.name


def overflow_column(position: int) -> str:
    """Row key for a field past the last header column (1-based position)."""
    return f"{_OVERFLOW_PREFIX}{position}>"


def is_overflow_column(name: str) -> bool:
    return name.startswith(_OVERFLOW_PREFIX) and name.endswith(">")


def _is_data_record(record: list[str]) -> bool:
    # pandas (skip_blank_lines=True) と同じ判定で空行を除外する
    return len(record) > 1 or (len(record) == 1 and record[0].strip() != "")


def _scan_field_counts(path: Path, delimiter: str, encoding: str) -> list[int]:
    with path.open("r", encoding=encoding, newline="") as f:
        reader = csv.reader(f, delimiter=delimiter, strict=True)
        return [len(record) for record in reader if _is_data_record(record)]


def _to_row(columns: list[str], values: tuple[str, ...]) -> dict[str, str]:
    row = dict(zip(columns, values))  # 短い行: 足りない列はキー無し
    for position in range(len(columns), len(values)):
        if values[position].strip():
            row[overflow_column(position + 1)] = values[position]
    return row


def read_product_file(path: Path, delimiter: str = ",", encoding: str = "utf-8") -> ProductFile:
    """Read a delimited product file.

    Parameters
    ----------
    path: 入力 CSV ファイルパス
    delimiter: 区切り文字
    encoding: ファイルエンコーディング
    """
    if not path.exists():
        raise InputFileError(f"file not found: {path}")
    if not path.is_file():
        raise InputFileError(f"not a file: {path}")

    try:
        counts = _scan_field_counts(path, delimiter, encoding)
        if not counts:
            # 0 バイト / 空行のみ: 処理対象行なし
            return ProductFile(path=path, columns=[], rows=[])
        df = pd.read_csv(
            path,
            sep=delimiter,
            header=None,
            names=list(range(max(counts))),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            encoding=encoding,
            engine="python",
            skip_blank_lines=True,
        )
    except UnicodeDecodeError as e:
        raise InputFileError(f"cannot decode {path.name} as {encoding}: {e}") from e
    except (csv.Error, pd.errors.ParserError) as e:
        raise InputFileError(f"cannot parse {path.name}: {e}") from e
    except OSError as e:
        raise InputFileError(f"cannot read {path.name}: {e}") from e

    if len(df) != len(counts):
        raise InputFileError(
            f"cannot parse {path.name}: {len(counts)} record(s) scanned but {len(df)} read"
        )

    records = df.itertuples(index=False, name=None)
    header = next(records)[: counts[0]]
    columns = [str(c).lstrip("\ufeff").strip() for c in header]
    while columns and columns[-1] == "":
        columns.pop()  # ヘッダ末尾の区切り文字

    rows = [_to_row(columns, values[:count]) for values, count in zip(records, counts[1:], strict=True)]
    return ProductFile(path=path, columns=columns, rows=rows)
