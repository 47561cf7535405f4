"""Always-null constraint.

A column that must hold no values at all, e.g. a deprecated field that should
have been blanked out.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class AlwaysNullConstraint(Constraint):
    """Column ``column`` contains only nulls."""

    column: str


@dataclass(frozen=True)
class AlwaysNullConstraintResult(ConstraintResult):
    """Fails iff ``non_null_rows > 0``."""

    non_null_rows: int

    count_fields = ("non_null_rows",)

    @property
    def message(self) -> str:
        column = self.constraint.column
        if self.succeeded:
            return f"Column {column} is always null."
        return (
            f"Column {column} contains {self.non_null_rows} non-null rows "
            f"(should always be null)."
        )
