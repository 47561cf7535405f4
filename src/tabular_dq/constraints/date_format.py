"""Date format constraint."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class DateFormatConstraint(Constraint):
    """Non-null values of ``column`` parse with the strftime pattern ``date_format``."""

    column: str
    date_format: str


@dataclass(frozen=True)
class DateFormatConstraintResult(ConstraintResult):
    failed_rows: int

    count_fields = ("failed_rows",)

    @property
    def message(self) -> str:
        column = self.constraint.column
        date_format = self.constraint.date_format
        if self.succeeded:
            return f"Column {column} is formatted by {date_format}."
        return (
            f"Column {column} contains {self.failed_rows} rows that are not "
            f"formatted by {date_format}."
        )
