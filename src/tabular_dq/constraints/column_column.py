"""Row-wise column comparison constraint (e.g. ``start <= end``)."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class ColumnColumnConstraint(Constraint):
    """Every row satisfies a boolean expression over two or more columns.

    ``expression`` is a pandas expression string such as ``"start <= end"``.
    """

    expression: str


@dataclass(frozen=True)
class ColumnColumnConstraintResult(ConstraintResult):
    violating_rows: int

    count_fields = ("violating_rows",)

    @property
    def message(self) -> str:
        expression = self.constraint.expression
        if self.succeeded:
            return f"Constraint {expression} is satisfied."
        return f"{self.violating_rows} rows did not satisfy constraint {expression}."
