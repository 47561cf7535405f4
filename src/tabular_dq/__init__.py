"""Tabular DQ: declarative data-quality constraints for tabular datasets.

A `Check` bundles a dataset reference with an ordered set of constraints.
Running it hands every constraint to an evaluation engine (pandas by default)
and collects the outcomes into a `CheckResult`, which reporters render; the
structured-log reporter writes one JSON line per constraint.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .core.check import Check, CheckResult
from .core.dataset import Dataset
from .core.enums import CacheMethod, ConstraintStatus
from .core.runner import run_checks
from .reporters.log_reporter import LogReporter

__all__ = [
    "__version__",
    "Check",
    "CheckResult",
    "Dataset",
    "CacheMethod",
    "ConstraintStatus",
    "run_checks",
    "LogReporter",
]
