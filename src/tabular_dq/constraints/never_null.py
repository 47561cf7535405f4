"""Never-null constraint."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class NeverNullConstraint(Constraint):
    """Column ``column`` contains no nulls."""

    column: str


@dataclass(frozen=True)
class NeverNullConstraintResult(ConstraintResult):
    """Fails iff ``null_rows > 0``."""

    null_rows: int

    count_fields = ("null_rows",)

    @property
    def message(self) -> str:
        column = self.constraint.column
        if self.succeeded:
            return f"Column {column} is never null."
        return (
            f"Column {column} contains {self.null_rows} rows that are null "
            f"(should never be null)."
        )
