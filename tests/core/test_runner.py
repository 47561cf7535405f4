"""Tests for run_checks."""

from unittest.mock import MagicMock

import pytest

from conftest import DummyConstraint, DummyEvaluator
from tabular_dq.core.check import Check
from tabular_dq.core.enums import ConstraintStatus
from tabular_dq.core.runner import run_checks


@pytest.fixture
def checks():
    return [
        Check([1, 2], "first").add_constraint(DummyConstraint("a", ConstraintStatus.SUCCESS)),
        Check([1], "second").add_constraint(DummyConstraint("b", ConstraintStatus.FAILURE)),
    ]


def test_runs_every_check(checks, dummy_evaluator):  # pylint: disable=redefined-outer-name
    results = run_checks(checks, evaluator=dummy_evaluator)

    assert list(results) == checks
    assert results[checks[0]].num_rows == 2
    assert not results[checks[0]].has_failures()
    assert results[checks[1]].has_failures()


def test_every_reporter_gets_every_result(checks, dummy_evaluator):  # pylint: disable=redefined-outer-name
    reporters = [MagicMock(), MagicMock()]

    results = run_checks(checks, reporters, dummy_evaluator)

    for reporter in reporters:
        reported = [c.args[0] for c in reporter.report.call_args_list]
        assert reported == [results[checks[0]], results[checks[1]]]


def test_nothing_reported_when_a_check_fails_to_run(checks):  # pylint: disable=redefined-outer-name
    evaluator = MagicMock(wraps=DummyEvaluator())
    evaluator.count_rows.side_effect = [2, RuntimeError("broken")]
    reporter = MagicMock()

    with pytest.raises(RuntimeError, match="broken"):
        run_checks(checks, [reporter], evaluator)
    reporter.report.assert_not_called()


def test_reporter_error_propagates(checks, dummy_evaluator):  # pylint: disable=redefined-outer-name
    reporter = MagicMock()
    reporter.report.side_effect = OSError("sink closed")

    with pytest.raises(OSError, match="sink closed"):
        run_checks(checks, [reporter], dummy_evaluator)
