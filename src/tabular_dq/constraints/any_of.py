"""Allowed-values constraint.

Every non-null value of a column must be one of a fixed set of scalars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from .base import Constraint, ConstraintResult, as_tuple


@dataclass(frozen=True)
class AnyOfConstraint(Constraint):
    """Column ``column`` only holds values from ``allowed``.

    ``allowed`` keeps the order in which values were given, so reports list
    them deterministically. Duplicates are dropped by type and value: ``1``,
    ``True`` and ``"1"`` all stay.
    """

    column: str
    allowed: Tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed", _distinct(as_tuple(self.allowed)))


def _distinct(values: Tuple[Any, ...]) -> Tuple[Any, ...]:
    # 1 == True == 1.0, so plain set membership would merge them
    seen = set()
    distinct = []
    for value in values:
        key = (type(value), value)
        if key not in seen:
            seen.add(key)
            distinct.append(value)
    return tuple(distinct)


@dataclass(frozen=True)
class AnyOfConstraintResult(ConstraintResult):
    """Fails iff ``failed_rows > 0``."""

    failed_rows: int

    count_fields = ("failed_rows",)

    @property
    def message(self) -> str:
        column = self.constraint.column
        allowed = ", ".join(str(value) for value in self.constraint.allowed)
        if self.succeeded:
            return f"Column {column} contains only values in {{{allowed}}}."
        return (
            f"Column {column} contains {self.failed_rows} rows that are not in "
            f"{{{allowed}}}."
        )
