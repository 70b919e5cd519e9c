from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.candidate_record import CandidateRecord
from ..models.violation import Violation

"""Abstract base class for business import rules."""

__all__ = [
    "Rule",
]


class Rule(ABC):
    """Business predicate over a CandidateRecord.

    Implementations must be pure: no hidden state and no side effects, so
    that only the union of violations matters and evaluation order inside
    the engine does not change the outcome.
    """

    #: Rule identifier used as Violation.source
    name: str = "Rule"

    @abstractmethod
    def evaluate(self, candidate: CandidateRecord) -> list[Violation]:
        """Return violations for the candidate (empty list = passed)."""

    def violation(self, message: str) -> Violation:
        return Violation(source=self.name, message=message)

    def __repr__(self) -> str:  # pragma: no cover (trivial)
        return f"{type(self).__name__}()"
