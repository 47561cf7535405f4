"""Free-form row predicate constraint."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Constraint, ConstraintResult


@dataclass(frozen=True)
class StringColumnConstraint(Constraint):
    """Every row satisfies ``constraint_string``.

    The predicate is a pandas expression string (``"age >= 0"``,
    ``"name.str.len() > 0"``); reports show it in the ``column`` field.
    """

    constraint_string: str


@dataclass(frozen=True)
class StringColumnConstraintResult(ConstraintResult):
    violating_rows: int

    count_fields = ("violating_rows",)

    @property
    def message(self) -> str:
        predicate = self.constraint.constraint_string
        if self.succeeded:
            return f"Constraint {predicate} is satisfied."
        return f"{self.violating_rows} rows did not satisfy constraint {predicate}."
