"""Row count constraint."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class NumberOfRowsConstraint(Constraint):
    """The row count satisfies ``expected``.

    ``expected`` is an expression over the single variable ``count``, e.g.
    ``"count == 10"`` or ``"count > 0"``.
    """

    expected: str


@dataclass(frozen=True)
class NumberOfRowsConstraintResult(ConstraintResult):
    actual: int

    count_fields = ("actual",)

    @property
    def message(self) -> str:
        expected = self.constraint.expected
        if self.succeeded:
            return f"The number of rows satisfies {expected}."
        return f"The actual number of rows {self.actual} does not satisfy {expected}."
