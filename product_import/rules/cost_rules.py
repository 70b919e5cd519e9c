from __future__ import annotations

from decimal import Decimal

from ..models.candidate_record import CandidateRecord
from ..models.violation import Violation
from .base import Rule

"""Cost / stock business rules applied to every imported product.

Bounds are inclusive on the accepting side:
- a product is imported only when it costs at least 5 GBP or has at least
  10 items in stock
- a product costing more than 1000 GBP is never imported
"""

__all__ = [
    "MIN_COST",
    "MIN_STOCK",
    "MAX_COST",
    "CostFrom5OrStockFrom10Rule",
    "CostLessOrEqual1000Rule",
]

MIN_COST = Decimal("5")
MIN_STOCK = 10
MAX_COST = Decimal("1000")


class CostFrom5OrStockFrom10Rule(Rule):
    """Passes when price >= 5 or stock >= 10.

    A product without a price fails the cost side and can only pass on stock.
    """

    name = "CostFrom5OrStockFrom10Rule"

    def evaluate(self, candidate: CandidateRecord) -> list[Violation]:
        price = candidate.price
        if price is not None and price >= MIN_COST:
            return []
        if candidate.stock >= MIN_STOCK:
            return []
        cost_str = "not set" if price is None else str(price)
        return [
            self.violation(
                f"Cost is less than {MIN_COST} (cost: {cost_str}) "
                f"and stock is less than {MIN_STOCK} (stock: {candidate.stock})"
            )
        ]


class CostLessOrEqual1000Rule(Rule):
    """Passes when price is not set or price <= 1000."""

    name = "CostLessOrEqual1000Rule"

    def evaluate(self, candidate: CandidateRecord) -> list[Violation]:
        price = candidate.price
        if price is None or price <= MAX_COST:
            return []
        return [self.violation(f"Cost {price} is greater than {MAX_COST}")]
