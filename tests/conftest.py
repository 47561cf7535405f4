"""Shared pytest fixtures and helpers for tabular_dq tests."""

from dataclasses import dataclass
from datetime import datetime
from unittest.mock import MagicMock

import pandas as pd
import pytest

from tabular_dq.constraints.base import Constraint, ConstraintResult
from tabular_dq.core.check import Check, CheckResult
from tabular_dq.core.enums import ConstraintStatus


@dataclass(frozen=True)
class DummyConstraint(Constraint):
    """Constraint whose outcome is fixed up front."""

    dummy_message: str
    dummy_status: ConstraintStatus


@dataclass(frozen=True)
class DummyConstraintResult(ConstraintResult):
    """Result of a DummyConstraint; has no variant fields."""

    @property
    def message(self) -> str:
        return self.constraint.dummy_message


class DummyEvaluator:
    """Evaluator that returns each DummyConstraint's preset outcome."""

    def count_rows(self, data) -> int:
        return len(data)

    def evaluate(self, constraint, data):
        return DummyConstraintResult(constraint=constraint, status=constraint.dummy_status)

    def cache(self, data, method):
        return data

    def uncache(self, data) -> None:
        return None


def make_check_result(
    constraint_result: ConstraintResult,
    num_rows: int = 5,
    display_name="df",
    check_id: str = "check",
) -> CheckResult:
    """Wrap a single constraint result into a CheckResult."""
    constraint = constraint_result.constraint
    check = Check(
        data_frame=MagicMock(),
        display_name=display_name,
        cache_method=None,
        constraints=[constraint],
        id=check_id,
    )
    return CheckResult({constraint: constraint_result}, check, num_rows)


@pytest.fixture
def fixed_time():
    """A fixed report timestamp."""
    return datetime(2026, 10, 18, 12, 30, 45)


@pytest.fixture
def dummy_evaluator():
    """DummyEvaluator wrapped in a MagicMock to record calls."""
    return MagicMock(wraps=DummyEvaluator())


@pytest.fixture
def orders_df():
    """Small orders table used across engine and check tests."""
    return pd.DataFrame(
        {
            "id": [1, 2, 3, 4],
            "name": ["a", "b", None, "d"],
            "status": ["open", "closed", "open", "pending"],
            "amount": [10.0, 20.0, 30.0, 40.0],
            "start": [1, 2, 3, 4],
            "end": [2, 2, 5, 3],
            "day": ["2024-01-01", "2024-13-01", None, "2024-02-29"],
            "customer_id": [1, 2, 2, 5],
        }
    )


@pytest.fixture
def customers_df():
    """Reference table keyed by ``id``."""
    return pd.DataFrame({"id": [1, 2, 3], "segment": ["x", "y", "z"]})
