"""Foreign key constraint.

The base columns must reference a key of another dataset: the reference
columns have to be unique there, and every non-null base key has to appear
among them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from .base import Constraint, ConstraintResult, as_column_pairs, describe_column_pairs


@dataclass(frozen=True)
class ForeignKeyConstraint(Constraint):
    """``columns`` of the checked dataset point into ``reference``.

    Attributes:
        columns: Ordered (base column, reference column) pairs.
        reference: The referenced dataset. Compared by identity; its textual
            form is what reports show as ``referenceTable``.
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
class ForeignKeyConstraintResult(ConstraintResult):
    """Outcome of a foreign key check.

    Attributes:
        num_non_matching_refs: Distinct base keys without a match in the
            reference. None when it was not computed because the reference
            columns are not a key of the reference dataset (always a failure).
    """

    num_non_matching_refs: Optional[int] = None

    optional_count_fields = ("num_non_matching_refs",)

    @property
    def message(self) -> str:
        pairs = describe_column_pairs(self.constraint.columns)
        reference = self.constraint.reference
        if self.num_non_matching_refs is None:
            return f"Columns {pairs} cannot define a foreign key: the reference columns are not a key in {reference}."
        if self.succeeded:
            return f"Columns {pairs} define a foreign key pointing to the reference table {reference}."
        return (
            f"Columns {pairs} do not define a foreign key pointing to {reference}. "
            f"{self.num_non_matching_refs} keys do not match."
        )
