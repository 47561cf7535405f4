"""Type conversion constraint.

Checks that a column could be cast to another dtype without losing values,
e.g. that a text column only holds numbers.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class TypeConversionConstraint(Constraint):
    """Non-null values of ``column`` convert to ``converted_type``.

    ``converted_type`` is a dtype name: ``"int64"``, ``"float64"``,
    ``"datetime64[ns]"``, ``"bool"`` or ``"string"``.
    """

    column: str
    converted_type: str


@dataclass(frozen=True)
class TypeConversionConstraintResult(ConstraintResult):
    """Outcome of a conversion attempt.

    Attributes:
        original_type: dtype name of the column before conversion.
        failed_rows: non-null values that could not be converted.
    """

    original_type: str
    failed_rows: int

    count_fields = ("failed_rows",)

    @property
    def message(self) -> str:
        column = self.constraint.column
        target = self.constraint.converted_type
        if self.succeeded:
            return f"Column {column} can be converted from {self.original_type} to {target}."
        return (
            f"Column {column} cannot be converted from {self.original_type} to {target}. "
            f"{self.failed_rows} rows could not be converted."
        )
