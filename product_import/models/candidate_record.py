from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

"""CandidateRecord model: typed product built from a structurally valid row.

Only constructed after SchemaValidator accepted the raw row, so the coercion
helpers in validation.schema can assume well-formed input here.
"""

__all__ = [
    "CandidateRecord",
]


@dataclass(frozen=True)
class CandidateRecord:
    """In-memory product representation evaluated by the rule engine.

    Timestamps come from the processing clock, never from the input file.
    """
    name: str  # Product Name
    description: str  # Product Description
    code: str  # Product Code (display identifier)
    stock: int = 0  # 未指定/空欄 -> 0
    price: Decimal | None = None  # 空欄 -> None (NULL)
    discontinued: bool = False  # Discontinued == "yes"
    discontinued_at: datetime | None = None  # discontinued の場合のみ処理時刻
    added_at: datetime | None = None  # 処理時刻
