"""Run several checks and hand their results to reporters."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from tabular_dq.reporters import Reporter
from .check import Check, CheckResult
from .evaluation import Evaluator

logger = logging.getLogger(__name__)


def run_checks(
    checks: Iterable[Check],
    reporters: Iterable[Reporter] = (),
    evaluator: Optional[Evaluator] = None,
) -> Dict[Check, CheckResult]:
    """Run all checks, then report every result to every reporter.

    Args:
        checks: Checks to run, in order.
        reporters: Reporters that receive each CheckResult.
        evaluator: Engine shared by all checks. Defaults to the pandas engine.

    Returns:
        Mapping from each check to its result.

    Raises:
        Evaluation and reporter errors propagate unchanged; if a check fails
        to run, nothing is reported.

    Examples:
        >>> results = run_checks([orders_check, customers_check], [LogReporter()])
        >>> results[orders_check].has_failures()
        False
    """
    checks = list(checks)
    reporters = list(reporters)

    results: Dict[Check, CheckResult] = {}
    for check in checks:
        results[check] = check.run(evaluator)

    for reporter in reporters:
        for check in checks:
            reporter.report(results[check])

    logger.info(
        "Ran %d checks (%d with failures), reported to %d reporters",
        len(checks),
        sum(1 for r in results.values() if r.has_failures()),
        len(reporters),
    )
    return results


__all__ = ["run_checks"]
