"""Base types for constraints and their results.

This module defines what every constraint variant shares:
- Constraint: immutable description of one validation rule
- ConstraintResult: outcome of evaluating one Constraint against one dataset

Variants are frozen dataclasses, so equality and hashing are structural and a
constraint used to build a `Check` can be used again to look up its result.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Tuple

from tabular_dq.core.enums import ConstraintStatus


@dataclass(frozen=True)
class Constraint:
    """Base class for all constraint variants.

    Constraints only describe a rule. Evaluating them is the job of an engine
    (see `tabular_dq.core.evaluation.Evaluator`).
    """

    @property
    def name(self) -> str:
        """Simple type name, as written to the ``constraint`` report field."""
        return type(self).__name__


@dataclass(frozen=True)
class ConstraintResult(ABC):
    """Outcome of evaluating one constraint.

    Attributes:
        constraint: The constraint that was evaluated.
        status: Success or Failure, as decided by the engine.

    Subclasses list their count fields in ``count_fields``; counts must be
    non-negative integers. Fields listed in ``optional_count_fields`` may also
    be None, meaning "not computed".
    """

    constraint: Constraint
    status: ConstraintStatus

    count_fields: ClassVar[Tuple[str, ...]] = ()
    optional_count_fields: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not isinstance(self.status, ConstraintStatus):
            raise ValueError(
                f"Invalid status: {self.status!r}. Must be a ConstraintStatus."
            )
        for field_name in self.count_fields + self.optional_count_fields:
            value = getattr(self, field_name)
            if value is None and field_name in self.optional_count_fields:
                continue
            object.__setattr__(self, field_name, _require_count(field_name, value))

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable summary of the outcome."""

    @property
    def succeeded(self) -> bool:
        return self.status is ConstraintStatus.SUCCESS


def _require_count(field_name: str, value: Any) -> int:
    # bool is an int subclass but never a count
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{field_name} must be an integer count, got {value!r}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    return int(value)


def as_tuple(values: Iterable[Any]) -> Tuple[Any, ...]:
    """Copy a caller-supplied sequence into a tuple.

    A bare string is treated as a single value rather than a sequence of
    characters.
    """
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def as_column_pairs(pairs: Iterable[Tuple[str, str]]) -> Tuple[Tuple[str, str], ...]:
    """Copy (base column, reference column) pairs, keeping their order."""
    normalized = []
    for pair in pairs:
        base_column, reference_column = pair
        normalized.append((base_column, reference_column))
    return tuple(normalized)


def describe_columns(columns: Iterable[str]) -> str:
    return ", ".join(columns)


def describe_column_pairs(pairs: Iterable[Tuple[str, str]]) -> str:
    return ", ".join(f"{base}->{reference}" for base, reference in pairs)


def plural(count: int, singular: str, plural_form: str) -> str:
    return singular if count == 1 else plural_form


__all__ = [
    "Constraint",
    "ConstraintResult",
    "as_tuple",
    "as_column_pairs",
    "describe_columns",
    "describe_column_pairs",
    "plural",
]
