"""Business import rules and the rule engine."""

from .base import Rule
from .cost_rules import CostFrom5OrStockFrom10Rule, CostLessOrEqual1000Rule
from .engine import RuleEngine, default_rule_engine

__all__ = [
    "Rule",
    "RuleEngine",
    "default_rule_engine",
    "CostFrom5OrStockFrom10Rule",
    "CostLessOrEqual1000Rule",
]
