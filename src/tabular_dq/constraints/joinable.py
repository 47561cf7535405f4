"""Joinability constraint.

Weaker than a foreign key: at least one base key must find a partner in the
reference dataset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple

from .base import Constraint, ConstraintResult, as_column_pairs, describe_column_pairs


@dataclass(frozen=True)
class JoinableConstraint(Constraint):
    """``columns`` can be used to join with ``reference``.

    Attributes:
        columns: Ordered (base column, reference column) pairs.
        reference: The dataset to join with, compared by identity.
    """

    columns: Tuple[Tuple[str, str], ...]
    reference: Any = field(compare=False)
    _reference_id: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", as_column_pairs(self.columns))
        object.__setattr__(self, "_reference_id", id(self.reference))
        if not self.columns:
            raise ValueError("columns must contain at least one column pair")


@dataclass(frozen=True)
class JoinableConstraintResult(ConstraintResult):
    """Succeeds iff ``matching_keys > 0``.

    Attributes:
        distinct_before: Distinct non-null base keys.
        matching_keys: How many of them occur in the reference.
    """

    distinct_before: int
    matching_keys: int

    count_fields = ("distinct_before", "matching_keys")

    @property
    def match_ratio(self) -> float:
        if self.distinct_before == 0:
            return 0.0
        return self.matching_keys / self.distinct_before

    @property
    def message(self) -> str:
        pairs = describe_column_pairs(self.constraint.columns)
        if not self.succeeded:
            return f"Key {pairs} cannot be used for joining (no result)."
        return (
            f"Key {pairs} can be used for joining. "
            f"Join columns cardinality in base table: {self.distinct_before}. "
            f"Join columns cardinality after joining: {self.matching_keys} "
            f"({self.match_ratio * 100:.2f}%)."
        )
