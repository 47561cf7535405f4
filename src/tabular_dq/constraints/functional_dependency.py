"""Functional dependency constraint.

The determinant columns fix the dependent columns: two rows that agree on the
determinant set must agree on the dependent set.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .base import Constraint, ConstraintResult, as_tuple, describe_columns, plural


@dataclass(frozen=True)
class FunctionalDependencyConstraint(Constraint):
    """``dependent_set`` is a function of ``determinant_set``.

    Both sets keep the order they were given in.
    """

    determinant_set: Tuple[str, ...]
    dependent_set: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "determinant_set", as_tuple(self.determinant_set))
        object.__setattr__(self, "dependent_set", as_tuple(self.dependent_set))
        if not self.determinant_set:
            raise ValueError("determinant_set must not be empty")
        if not self.dependent_set:
            raise ValueError("dependent_set must not be empty")


@dataclass(frozen=True)
class FunctionalDependencyConstraintResult(ConstraintResult):
    """Fails iff some determinant value maps to several dependent values.

    Attributes:
        failed_rows: Number of distinct determinant values that do.
    """

    failed_rows: int

    count_fields = ("failed_rows",)

    @property
    def message(self) -> str:
        dependent = self.constraint.dependent_set
        is_are = plural(len(dependent), "is", "are")
        described = (
            f"Column(s) {describe_columns(dependent)} {is_are}"
        )
        determinant = describe_columns(self.constraint.determinant_set)
        if self.succeeded:
            return f"{described} functionally dependent on {determinant}."
        return (
            f"{described} not functionally dependent on {determinant} "
            f"({self.failed_rows} violating determinant values)."
        )
