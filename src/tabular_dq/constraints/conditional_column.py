"""Conditional (implication) constraint.

Rows matching ``statement`` must also match ``implication``; rows not matching
the statement are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class ConditionalColumnConstraint(Constraint):
    statement: str
    implication: str


@dataclass(frozen=True)
class ConditionalColumnConstraintResult(ConstraintResult):
    """Fails iff some row satisfies the statement but not the implication."""

    violating_rows: int

    count_fields = ("violating_rows",)

    @property
    def message(self) -> str:
        rule = f"{self.constraint.statement} -> {self.constraint.implication}"
        if self.succeeded:
            return f"Constraint {rule} is satisfied."
        return f"{self.violating_rows} rows did not satisfy constraint {rule}."
