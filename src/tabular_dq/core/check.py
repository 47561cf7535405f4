"""Checks and check results.

This module defines the aggregation layer:
- Check: a dataset reference plus an ordered collection of constraints
- CheckResult: the outcome of running one Check, one result per constraint
"""

from __future__ import annotations

import logging
import numbers
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from tabular_dq.constraints import (
    AlwaysNullConstraint,
    AnyOfConstraint,
    ColumnColumnConstraint,
    ConditionalColumnConstraint,
    Constraint,
    ConstraintResult,
    DateFormatConstraint,
    ForeignKeyConstraint,
    FunctionalDependencyConstraint,
    JoinableConstraint,
    NeverNullConstraint,
    NumberOfRowsConstraint,
    RegexConstraint,
    StringColumnConstraint,
    TypeConversionConstraint,
    UniqueKeyConstraint,
)
from .enums import CacheMethod
from .evaluation import Evaluator

logger = logging.getLogger(__name__)


def _generate_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, eq=False)
class Check:
    """A named, ordered bundle of constraints bound to one dataset.

    Attributes:
        data_frame: The dataset to check. Owned by the caller and never mutated.
        display_name: Optional human-readable name shown in reports.
        cache_method: Optional storage strategy the engine should use while the
            constraints are evaluated.
        constraints: Constraints in declaration order.
        id: Identifier of the check; a random UUID unless given.

    Checks are immutable. The builder methods return a new Check with one
    more constraint, so they can be chained:

    Examples:
        >>> check = (
        ...     Check(df, display_name="orders")
        ...     .is_never_null("order_id")
        ...     .has_unique_key("order_id")
        ...     .is_any_of("status", ["open", "closed"])
        ... )
        >>> result = check.run()
        >>> result.num_rows
        42
    """

    data_frame: Any
    display_name: Optional[str] = None
    cache_method: Optional[CacheMethod] = None
    constraints: Tuple[Constraint, ...] = ()
    id: str = field(default_factory=_generate_id)

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(self.constraints))
        for constraint in self.constraints:
            if not isinstance(constraint, Constraint):
                raise ValueError(f"Not a constraint: {constraint!r}")

    def add_constraint(self, constraint: Constraint) -> "Check":
        return replace(self, constraints=self.constraints + (constraint,))

    def is_always_null(self, column: str) -> "Check":
        return self.add_constraint(AlwaysNullConstraint(column))

    def is_never_null(self, column: str) -> "Check":
        return self.add_constraint(NeverNullConstraint(column))

    def is_any_of(self, column: str, allowed: Iterable[Any]) -> "Check":
        return self.add_constraint(AnyOfConstraint(column, tuple(allowed)))

    def satisfies(self, constraint_string: str) -> "Check":
        """Require every row to satisfy a pandas expression string."""
        return self.add_constraint(StringColumnConstraint(constraint_string))

    def satisfies_column_condition(self, expression: str) -> "Check":
        """Require a comparison between columns, e.g. ``"start <= end"``, on every row."""
        return self.add_constraint(ColumnColumnConstraint(expression))

    def satisfies_implication(self, statement: str, implication: str) -> "Check":
        """Require rows matching ``statement`` to also match ``implication``."""
        return self.add_constraint(ConditionalColumnConstraint(statement, implication))

    def is_formatted_as_date(self, column: str, date_format: str) -> "Check":
        return self.add_constraint(DateFormatConstraint(column, date_format))

    def has_foreign_key(self, reference: Any, *columns: Tuple[str, str]) -> "Check":
        """Require (base column, reference column) pairs to reference a key of ``reference``."""
        return self.add_constraint(ForeignKeyConstraint(columns, reference))

    def has_functional_dependency(
        self, determinant_set: Sequence[str], dependent_set: Sequence[str]
    ) -> "Check":
        return self.add_constraint(FunctionalDependencyConstraint(determinant_set, dependent_set))

    def is_joinable_with(self, reference: Any, *columns: Tuple[str, str]) -> "Check":
        return self.add_constraint(JoinableConstraint(columns, reference))

    def has_num_rows(self, expected: str) -> "Check":
        """Require the row count to satisfy an expression over ``count``."""
        return self.add_constraint(NumberOfRowsConstraint(expected))

    def is_matching_regex(self, column: str, regex: str) -> "Check":
        return self.add_constraint(RegexConstraint(column, regex))

    def is_convertible_to(self, column: str, converted_type: str) -> "Check":
        return self.add_constraint(TypeConversionConstraint(column, converted_type))

    def has_unique_key(self, column: str, *columns: str) -> "Check":
        return self.add_constraint(UniqueKeyConstraint((column,) + columns))

    def run(self, evaluator: Optional[Evaluator] = None) -> "CheckResult":
        """Evaluate every constraint against the dataset.

        The row count and all results come from the same dataset snapshot.
        Constraints that appear more than once are evaluated once.

        Args:
            evaluator: Engine to evaluate with. Defaults to the pandas engine.

        Returns:
            CheckResult with exactly one entry per distinct constraint.

        Raises:
            Whatever the evaluator raises; no partial result is returned.
        """
        if evaluator is None:
            from tabular_dq.engines.pandas_engine import PandasEvaluator

            evaluator = PandasEvaluator()

        logger.info(
            "Running check %s (%s) with %d constraints",
            self.id,
            self.display_name or "unnamed",
            len(self.constraints),
        )

        data = self.data_frame
        if self.cache_method is not None:
            data = evaluator.cache(data, self.cache_method)
        try:
            num_rows = evaluator.count_rows(data)
            results: Dict[Constraint, ConstraintResult] = {}
            for constraint in self.constraints:
                if constraint in results:
                    continue
                results[constraint] = evaluator.evaluate(constraint, data)
        finally:
            if self.cache_method is not None:
                evaluator.uncache(data)

        check_result = CheckResult(constraint_results=results, check=self, num_rows=num_rows)
        logger.info(
            "Check %s finished: %d of %d constraints failed",
            self.id,
            len(check_result.failed_results()),
            len(results),
        )
        return check_result


@dataclass(frozen=True, eq=False)
class CheckResult:
    """Evaluation record of one Check.

    Attributes:
        constraint_results: One result per constraint of ``check``, keyed by the
            constraint itself.
        check: The check that was run.
        num_rows: Total rows in the dataset when the check ran.
    """

    constraint_results: Dict[Constraint, ConstraintResult]
    check: Check
    num_rows: int

    def __post_init__(self) -> None:
        """Validate referential consistency between the check and its results."""
        object.__setattr__(self, "constraint_results", dict(self.constraint_results))
        if isinstance(self.num_rows, bool) or not isinstance(self.num_rows, numbers.Integral):
            raise ValueError(f"num_rows must be an integer, got {self.num_rows!r}")
        object.__setattr__(self, "num_rows", int(self.num_rows))
        if self.num_rows < 0:
            raise ValueError(f"num_rows must be non-negative, got {self.num_rows}")

        expected = set(self.check.constraints)
        actual = set(self.constraint_results)
        missing = expected - actual
        extra = actual - expected
        if missing or extra:
            raise ValueError(
                f"Results do not match the constraints of check {self.check.id}: "
                f"missing {sorted(map(repr, missing))}, unexpected {sorted(map(repr, extra))}"
            )
        for constraint, result in self.constraint_results.items():
            if result.constraint != constraint:
                raise ValueError(
                    f"Result for {constraint!r} belongs to {result.constraint!r}"
                )

    def failed_results(self) -> List[ConstraintResult]:
        return [r for r in self.constraint_results.values() if not r.succeeded]

    def has_failures(self) -> bool:
        return any(not r.succeeded for r in self.constraint_results.values())


__all__ = ["Check", "CheckResult"]
