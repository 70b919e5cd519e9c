from __future__ import annotations

from ..models.candidate_record import CandidateRecord
from ..models.violation import Violation
from .base import Rule
from .cost_rules import CostFrom5OrStockFrom10Rule, CostLessOrEqual1000Rule

"""Rule engine: ordered collection of business rules.

The rule set is built once per run (see default_rule_engine) and evaluated
for every candidate record. Violations are concatenated in registration
order so that identical input always produces identical error text.
"""

__all__ = [
    "RuleEngine",
    "default_rule_engine",
]


class RuleEngine:
    """Evaluates a candidate against every registered rule."""

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    def add_rule(self, rule: Rule) -> RuleEngine:
        """Register a rule and return self for chained registration."""
        self._rules.append(rule)
        return self

    @property
    def rules(self) -> tuple[Rule, ...]:
        return tuple(self._rules)

    def validate(self, candidate: CandidateRecord) -> list[Violation]:
        """Return all violations of all rules (empty list = candidate accepted)."""
        violations: list[Violation] = []
        for rule in self._rules:
            violations.extend(rule.evaluate(candidate))
        return violations

    def __len__(self) -> int:
        return len(self._rules)


def default_rule_engine() -> RuleEngine:
    """Build the engine with the product import rules in their fixed order."""
    return (
        RuleEngine()
        .add_rule(CostFrom5OrStockFrom10Rule())
        .add_rule(CostLessOrEqual1000Rule())
    )
