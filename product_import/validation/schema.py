from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal, InvalidOperation

from ..models.candidate_record import CandidateRecord
from ..models.violation import Violation
from ..reader.csv_reader import is_overflow_column

"""Structural (schema) validation of raw product rows and typed coercion.

Column rules:
- Product Name / Product Description / Product Code: required, not blank
- Stock: absent or blank (-> 0), otherwise a non-negative integer
- Cost in GBP: absent or blank (-> NULL), otherwise a non-negative number
- Discontinued: absent or blank (-> not discontinued), otherwise exactly "yes"
- any other column is rejected unless allow_extra_columns is set; fields past
  the end of the header (long lines) are always rejected

build_candidate() must only be called for rows that produced no violations.
"""

__all__ = [
    "COL_NAME",
    "COL_DESCRIPTION",
    "COL_CODE",
    "COL_STOCK",
    "COL_COST",
    "COL_DISCONTINUED",
    "EXPECTED_COLUMNS",
    "DISCONTINUED_MARKER",
    "SchemaValidator",
    "build_candidate",
    "parse_stock",
    "parse_price",
    "parse_discontinued",
]

COL_NAME = "Product Name"
COL_DESCRIPTION = "Product Description"
COL_CODE = "Product Code"
COL_STOCK = "Stock"
COL_COST = "Cost in GBP"
COL_DISCONTINUED = "Discontinued"

# 列順 = エラー出力順
EXPECTED_COLUMNS: tuple[str, ...] = (
    COL_NAME,
    COL_DESCRIPTION,
    COL_CODE,
    COL_STOCK,
    COL_COST,
    COL_DISCONTINUED,
)
REQUIRED_COLUMNS: tuple[str, ...] = (COL_NAME, COL_DESCRIPTION, COL_CODE)

DISCONTINUED_MARKER = "yes"

MSG_MISSING = "This field is missing."
MSG_BLANK = "This value should not be blank."
MSG_NOT_INTEGER = "This value should be a non-negative integer."
MSG_NOT_NUMBER = "This value should be either blank or a non-negative number."
MSG_NOT_CHOICE = f'This value should be either blank or "{DISCONTINUED_MARKER}".'
MSG_UNEXPECTED = "This field was not expected."

_INTEGER_RE = re.compile(r"^\d+$", re.ASCII)


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _to_decimal(value: str) -> Decimal | None:
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


class SchemaValidator:
    """Checks required fields and primitive shape of a raw row.

    Stateless apart from its configuration; one instance serves the whole run.
    """

    def __init__(self, *, allow_extra_columns: bool = False) -> None:
        self.allow_extra_columns = allow_extra_columns

    def validate(self, row: Mapping[str, str]) -> list[Violation]:
        """Return schema violations in column order (empty list = valid)."""
        violations: list[Violation] = []

        for col in REQUIRED_COLUMNS:
            if col not in row:
                violations.append(Violation(col, MSG_MISSING))
            elif _is_blank(row[col]):
                violations.append(Violation(col, MSG_BLANK))

        stock = row.get(COL_STOCK)
        if not _is_blank(stock) and not _INTEGER_RE.match(stock.strip()):  # type: ignore[union-attr]
            violations.append(Violation(COL_STOCK, MSG_NOT_INTEGER))

        cost = row.get(COL_COST)
        if not _is_blank(cost):
            number = _to_decimal(cost)  # type: ignore[arg-type]
            if number is None or number < 0:
                violations.append(Violation(COL_COST, MSG_NOT_NUMBER))

        discontinued = row.get(COL_DISCONTINUED)
        if not _is_blank(discontinued) and discontinued != DISCONTINUED_MARKER:
            violations.append(Violation(COL_DISCONTINUED, MSG_NOT_CHOICE))

        for col in row:
            if col in EXPECTED_COLUMNS:
                continue
            if is_overflow_column(col) or not self.allow_extra_columns:
                violations.append(Violation(col, MSG_UNEXPECTED))

        return violations


def parse_stock(value: str | None) -> int:
    """Absent / blank -> 0, otherwise the integer value."""
    if _is_blank(value):
        return 0
    return int(value.strip())  # type: ignore[union-attr]


def parse_price(value: str | None) -> Decimal | None:
    """Absent / blank -> None, otherwise the decimal value."""
    if _is_blank(value):
        return None
    return Decimal(value.strip())  # type: ignore[union-attr]


def parse_discontinued(value: str | None) -> bool:
    return value == DISCONTINUED_MARKER


def build_candidate(row: Mapping[str, str], now: datetime) -> CandidateRecord:
    """Project a schema-valid raw row into a CandidateRecord.

    `now` is the processing moment. It becomes added_at, and also
    discontinued_at when the row is marked discontinued. No date is ever
    read from the input.
    """
    discontinued = parse_discontinued(row.get(COL_DISCONTINUED))
    return CandidateRecord(
        name=row[COL_NAME].strip(),
        description=row[COL_DESCRIPTION].strip(),
        code=row[COL_CODE].strip(),
        stock=parse_stock(row.get(COL_STOCK)),
        price=parse_price(row.get(COL_COST)),
        discontinued=discontinued,
        discontinued_at=now if discontinued else None,
        added_at=now,
    )
