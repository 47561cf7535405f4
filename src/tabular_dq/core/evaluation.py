"""Evaluation boundary.

The core never scans data itself. Anything implementing `Evaluator` can back
`Check.run`; `tabular_dq.engines.pandas_engine.PandasEvaluator` is the
bundled implementation.
"""

from __future__ import annotations

from typing import Any, Protocol

from tabular_dq.constraints.base import Constraint, ConstraintResult
from .enums import CacheMethod


class Evaluator(Protocol):
    """Protocol for dataset engines that evaluate constraints.

    Methods:
        count_rows: Total number of rows in the dataset.
        evaluate: Compute the result of one constraint.
        cache: Materialise the dataset ahead of repeated scans.
        uncache: Release what `cache` retained.
    """

    def count_rows(self, data: Any) -> int:
        ...

    def evaluate(self, constraint: Constraint, data: Any) -> ConstraintResult:
        """Evaluate one constraint against the dataset.

        Returns:
            A result whose ``constraint`` equals the given constraint and whose
            status and counts are final; the core trusts them verbatim.

        Raises:
            Whatever the engine raises when it cannot compute the result
            (e.g. a referenced column is missing).
        """
        ...

    def cache(self, data: Any, method: CacheMethod) -> Any:
        """Return the (possibly materialised) dataset to evaluate against."""
        ...

    def uncache(self, data: Any) -> None:
        ...


__all__ = ["Evaluator"]
