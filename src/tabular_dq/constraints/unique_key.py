"""Unique key constraint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .base import Constraint, ConstraintResult, as_tuple, describe_columns, plural


@dataclass(frozen=True)
class UniqueKeyConstraint(Constraint):
    """The combination of ``columns`` identifies each row."""

    columns: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", as_tuple(self.columns))
        if not self.columns:
            raise ValueError("columns must not be empty")


@dataclass(frozen=True)
class UniqueKeyConstraintResult(ConstraintResult):
    """Fails iff some key tuple occurs more than once.

    Attributes:
        num_non_unique_tuples: Number of distinct key tuples with duplicates.
    """

    num_non_unique_tuples: int

    count_fields = ("num_non_unique_tuples",)

    @property
    def message(self) -> str:
        columns = self.constraint.columns
        is_are = plural(len(columns), "is", "are")
        described = describe_columns(columns)
        if self.succeeded:
            return f"Column(s) {described} {is_are} a key."
        return (
            f"Column(s) {described} {is_are} not a key "
            f"({self.num_non_unique_tuples} non-unique tuples)."
        )
