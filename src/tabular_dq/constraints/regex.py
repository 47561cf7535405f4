"""Regular expression constraint."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class RegexConstraint(Constraint):
    """Non-null values of ``column`` contain a match for ``regex``."""

    column: str
    regex: str


@dataclass(frozen=True)
class RegexConstraintResult(ConstraintResult):
    failed_rows: int

    count_fields = ("failed_rows",)

    @property
    def message(self) -> str:
        column = self.constraint.column
        regex = self.constraint.regex
        if self.succeeded:
            return f"Column {column} matches {regex}."
        return f"Column {column} contains {self.failed_rows} rows that do not match {regex}."
