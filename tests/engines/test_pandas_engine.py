"""Tests for the pandas evaluation engine.

Each constraint variant is evaluated against the shared ``orders_df`` /
``customers_df`` fixtures, checking both the counts and the decided status.
"""

import logging

import pandas as pd
import pytest

from conftest import DummyConstraint
from tabular_dq.constraints import (
    ALL_CONSTRAINT_TYPES,
    AlwaysNullConstraint,
    AnyOfConstraint,
    ColumnColumnConstraint,
    ConditionalColumnConstraint,
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
from tabular_dq.core.dataset import Dataset
from tabular_dq.core.enums import CacheMethod, ConstraintStatus
from tabular_dq.core.exceptions import DataQualityError, UnsupportedConstraintError
from tabular_dq.engines import EVALUATION_FUNCTIONS, PandasEvaluator
from tabular_dq.engines.pandas_engine import convert_values

SUCCESS = ConstraintStatus.SUCCESS
FAILURE = ConstraintStatus.FAILURE


@pytest.fixture
def evaluator():
    return PandasEvaluator()


def test_every_constraint_type_is_registered():
    assert set(EVALUATION_FUNCTIONS) == set(ALL_CONSTRAINT_TYPES)


def test_count_rows_accepts_frames_and_datasets(evaluator, orders_df):  # pylint: disable=redefined-outer-name
    assert evaluator.count_rows(orders_df) == 4
    assert evaluator.count_rows(Dataset(orders_df, "orders")) == 4


class TestNullConstraints:
    """AlwaysNull / NeverNull counting."""

    def test_always_null_counts_non_null_rows(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(AlwaysNullConstraint("name"), orders_df)
        assert result.non_null_rows == 3
        assert result.status is FAILURE

    def test_always_null_succeeds_on_empty_column(self, evaluator):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"c": [None, None]})
        result = evaluator.evaluate(AlwaysNullConstraint("c"), df)
        assert result.non_null_rows == 0
        assert result.status is SUCCESS

    def test_never_null_counts_null_rows(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(NeverNullConstraint("name"), orders_df)
        assert result.null_rows == 1
        assert result.status is FAILURE

    def test_never_null_succeeds(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(NeverNullConstraint("id"), orders_df)
        assert result.null_rows == 0
        assert result.succeeded


class TestValueConstraints:
    """AnyOf, DateFormat, Regex and TypeConversion ignore null values."""

    def test_any_of(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(AnyOfConstraint("status", ["open", "closed"]), orders_df)
        assert result.failed_rows == 1
        assert result.status is FAILURE

    def test_any_of_ignores_nulls(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(AnyOfConstraint("name", ["a", "b", "d"]), orders_df)
        assert result.failed_rows == 0
        assert result.status is SUCCESS

    def test_date_format(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(DateFormatConstraint("day", "%Y-%m-%d"), orders_df)
        assert result.failed_rows == 1
        assert result.status is FAILURE

    def test_regex(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(RegexConstraint("status", "^(open|closed)$"), orders_df)
        assert result.failed_rows == 1
        assert result.status is FAILURE

    def test_regex_searches_anywhere(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(RegexConstraint("status", "e"), orders_df)
        assert result.failed_rows == 0

    @pytest.mark.parametrize(
        "converted_type,expected_failures",
        [
            ("int64", 2),
            ("float64", 1),
            ("string", 0),
        ],
    )
    def test_type_conversion(self, evaluator, converted_type, expected_failures):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"c": pd.Series(["1", "2", "x", "4.5", None], dtype=object)})
        result = evaluator.evaluate(TypeConversionConstraint("c", converted_type), df)
        assert result.failed_rows == expected_failures
        assert result.original_type == "object"
        assert result.succeeded == (expected_failures == 0)

    @pytest.mark.parametrize(
        "values,converted_type,expected_failures",
        [
            (["300", "1e30", "5"], "int8", 2),
            (["-129", "-128", "127", "128"], "int8", 2),
            (["-1", "0", "255", "256"], "uint8", 2),
            (["1e30", "5"], "int64", 1),
        ],
    )
    def test_type_conversion_out_of_range(self, evaluator, values, converted_type, expected_failures):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"c": pd.Series(values, dtype=object)})
        result = evaluator.evaluate(TypeConversionConstraint("c", converted_type), df)
        assert result.failed_rows == expected_failures
        assert result.status is FAILURE

    def test_original_type_is_column_dtype(self, evaluator):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"c": [1, 2]})
        result = evaluator.evaluate(TypeConversionConstraint("c", "float64"), df)
        assert result.original_type == str(df["c"].dtype)
        assert result.failed_rows == 0

    def test_convert_values_booleans(self):
        converted = convert_values(pd.Series(["true", "No", "maybe"]), "bool")
        assert converted.tolist() == [True, False, None]

    def test_convert_values_unknown_type(self):
        with pytest.raises(TypeError):
            convert_values(pd.Series(["1"]), "not_a_type")


class TestExpressionConstraints:
    """StringColumn, ColumnColumn, ConditionalColumn and NumberOfRows."""

    def test_column_column(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(ColumnColumnConstraint("start <= end"), orders_df)
        assert result.violating_rows == 1
        assert result.status is FAILURE

    def test_string_column(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(StringColumnConstraint("amount > 0"), orders_df)
        assert result.violating_rows == 0
        assert result.status is SUCCESS

    def test_conditional_column(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        constraint = ConditionalColumnConstraint("status == 'open'", "amount > 15")
        result = evaluator.evaluate(constraint, orders_df)
        assert result.violating_rows == 1
        assert result.status is FAILURE

    @pytest.mark.parametrize(
        "expected,status",
        [
            ("count == 4", SUCCESS),
            ("count > 10", FAILURE),
            ("count >= 1 and count <= 5", SUCCESS),
        ],
    )
    def test_number_of_rows(self, evaluator, orders_df, expected, status):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(NumberOfRowsConstraint(expected), orders_df)
        assert result.actual == 4
        assert result.status is status


class TestKeyConstraints:
    """UniqueKey, FunctionalDependency, ForeignKey and Joinable."""

    def test_unique_key(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(UniqueKeyConstraint(["status"]), orders_df)
        assert result.num_non_unique_tuples == 1
        assert result.status is FAILURE

    def test_unique_key_on_several_columns(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        result = evaluator.evaluate(UniqueKeyConstraint(["status", "id"]), orders_df)
        assert result.num_non_unique_tuples == 0
        assert result.status is SUCCESS

    def test_functional_dependency(self, evaluator):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"zip": [1, 1, 2, 2, 3], "city": ["A", "A", "B", "C", "D"]})
        result = evaluator.evaluate(FunctionalDependencyConstraint(["zip"], ["city"]), df)
        assert result.failed_rows == 1
        assert result.status is FAILURE

    def test_functional_dependency_holds(self, evaluator):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"zip": [1, 1, 2], "city": ["A", "A", "B"]})
        result = evaluator.evaluate(FunctionalDependencyConstraint(["zip"], ["city"]), df)
        assert result.failed_rows == 0
        assert result.status is SUCCESS

    def test_foreign_key(self, evaluator, orders_df, customers_df):  # pylint: disable=redefined-outer-name
        customers = Dataset(customers_df, "customers")
        constraint = ForeignKeyConstraint([("customer_id", "id")], customers)
        result = evaluator.evaluate(constraint, orders_df)
        assert result.num_non_matching_refs == 1
        assert result.status is FAILURE

    def test_foreign_key_accepts_plain_frame(self, evaluator, customers_df):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"customer_id": [1, 2, None]})
        constraint = ForeignKeyConstraint([("customer_id", "id")], customers_df)
        result = evaluator.evaluate(constraint, df)
        assert result.num_non_matching_refs == 0
        assert result.status is SUCCESS

    def test_foreign_key_duplicate_reference_is_not_computed(self, evaluator, orders_df):  # pylint: disable=redefined-outer-name
        reference = Dataset(pd.DataFrame({"id": [1, 1, 2]}), "dupes")
        constraint = ForeignKeyConstraint([("customer_id", "id")], reference)
        result = evaluator.evaluate(constraint, orders_df)
        assert result.num_non_matching_refs is None
        assert result.status is FAILURE

    def test_joinable(self, evaluator, orders_df, customers_df):  # pylint: disable=redefined-outer-name
        constraint = JoinableConstraint([("customer_id", "id")], Dataset(customers_df, "customers"))
        result = evaluator.evaluate(constraint, orders_df)
        assert result.distinct_before == 3
        assert result.matching_keys == 2
        assert result.status is SUCCESS

    def test_joinable_without_matches(self, evaluator, customers_df):  # pylint: disable=redefined-outer-name
        df = pd.DataFrame({"customer_id": [7, 8]})
        constraint = JoinableConstraint([("customer_id", "id")], customers_df)
        result = evaluator.evaluate(constraint, df)
        assert result.matching_keys == 0
        assert result.status is FAILURE


def test_missing_column_raises(evaluator, orders_df):  # pylint: disable=redefined-outer-name
    with pytest.raises(KeyError):
        evaluator.evaluate(NeverNullConstraint("missing"), orders_df)


def test_unsupported_constraint_raises(evaluator, orders_df):  # pylint: disable=redefined-outer-name
    constraint = DummyConstraint("1", SUCCESS)
    with pytest.raises(UnsupportedConstraintError, match="DummyConstraint") as exc_info:
        evaluator.evaluate(constraint, orders_df)
    assert isinstance(exc_info.value, DataQualityError)
    assert isinstance(exc_info.value, TypeError)


def test_evaluation_does_not_mutate_frame(evaluator, orders_df, customers_df):  # pylint: disable=redefined-outer-name
    snapshot = orders_df.copy()
    evaluator.evaluate(ForeignKeyConstraint([("customer_id", "id")], customers_df), orders_df)
    evaluator.evaluate(ColumnColumnConstraint("start <= end"), orders_df)
    pd.testing.assert_frame_equal(orders_df, snapshot)


def test_cache_returns_same_data(evaluator, orders_df, caplog):  # pylint: disable=redefined-outer-name
    caplog.set_level(logging.DEBUG, logger="tabular_dq.engines.pandas_engine")
    assert evaluator.cache(orders_df, CacheMethod.MEMORY_ONLY) is orders_df
    evaluator.uncache(orders_df)
    assert "MEMORY_ONLY" in caplog.text
