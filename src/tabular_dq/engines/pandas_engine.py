"""pandas evaluation engine.

Maps each constraint variant to a function ``(constraint, DataFrame) -> result``:
- EVALUATION_FUNCTIONS: registry keyed by constraint type
- PandasEvaluator: `Evaluator` implementation that dispatches through it

Expressions are evaluated with `DataFrame.eval`, so they use pandas
expression syntax (``"a > b"``, ``"name.str.len() > 0"``).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Sequence, Type

import numpy as np
import pandas as pd

from tabular_dq.constraints import (
    AlwaysNullConstraint,
    AlwaysNullConstraintResult,
    AnyOfConstraint,
    AnyOfConstraintResult,
    ColumnColumnConstraint,
    ColumnColumnConstraintResult,
    ConditionalColumnConstraint,
    ConditionalColumnConstraintResult,
    Constraint,
    ConstraintResult,
    DateFormatConstraint,
    DateFormatConstraintResult,
    ForeignKeyConstraint,
    ForeignKeyConstraintResult,
    FunctionalDependencyConstraint,
    FunctionalDependencyConstraintResult,
    JoinableConstraint,
    JoinableConstraintResult,
    NeverNullConstraint,
    NeverNullConstraintResult,
    NumberOfRowsConstraint,
    NumberOfRowsConstraintResult,
    RegexConstraint,
    RegexConstraintResult,
    StringColumnConstraint,
    StringColumnConstraintResult,
    TypeConversionConstraint,
    TypeConversionConstraintResult,
    UniqueKeyConstraint,
    UniqueKeyConstraintResult,
)
from tabular_dq.core.dataset import frame_of
from tabular_dq.core.enums import CacheMethod, ConstraintStatus
from tabular_dq.core.exceptions import UnsupportedConstraintError

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "t", "yes", "y", "1"}
_FALSE_STRINGS = {"false", "f", "no", "n", "0"}


def _status(success: bool) -> ConstraintStatus:
    return ConstraintStatus.from_success(success)


def _count(mask: pd.Series) -> int:
    return int(mask.sum())


def _eval_mask(df: pd.DataFrame, expression: str) -> pd.Series:
    """Evaluate a boolean row expression; nulls count as not satisfied."""
    mask = df.eval(expression)
    if not isinstance(mask, pd.Series):
        # scalar expressions (no column reference) apply to every row
        mask = pd.Series(bool(mask), index=df.index)
    return mask.fillna(False).astype(bool)


def _key_frame(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Select key columns and rename them positionally.

    Base and reference columns may share names in a different order, so joins
    run on ``key_0 .. key_n`` instead of the original names.
    """
    keys = df[list(columns)].copy()
    keys.columns = [f"key_{i}" for i in range(len(columns))]
    return keys


def _split_pairs(pairs: Sequence[Sequence[str]]) -> tuple[List[str], List[str]]:
    return [base for base, _ in pairs], [reference for _, reference in pairs]


def evaluate_always_null(
    constraint: AlwaysNullConstraint, df: pd.DataFrame
) -> AlwaysNullConstraintResult:
    non_null_rows = _count(df[constraint.column].notna())
    return AlwaysNullConstraintResult(
        constraint=constraint,
        status=_status(non_null_rows == 0),
        non_null_rows=non_null_rows,
    )


def evaluate_never_null(
    constraint: NeverNullConstraint, df: pd.DataFrame
) -> NeverNullConstraintResult:
    null_rows = _count(df[constraint.column].isna())
    return NeverNullConstraintResult(
        constraint=constraint,
        status=_status(null_rows == 0),
        null_rows=null_rows,
    )


def evaluate_any_of(constraint: AnyOfConstraint, df: pd.DataFrame) -> AnyOfConstraintResult:
    values = df[constraint.column].dropna()
    failed_rows = _count(~values.isin(list(constraint.allowed)))
    return AnyOfConstraintResult(
        constraint=constraint,
        status=_status(failed_rows == 0),
        failed_rows=failed_rows,
    )


def evaluate_column_column(
    constraint: ColumnColumnConstraint, df: pd.DataFrame
) -> ColumnColumnConstraintResult:
    violating_rows = _count(~_eval_mask(df, constraint.expression))
    return ColumnColumnConstraintResult(
        constraint=constraint,
        status=_status(violating_rows == 0),
        violating_rows=violating_rows,
    )


def evaluate_conditional_column(
    constraint: ConditionalColumnConstraint, df: pd.DataFrame
) -> ConditionalColumnConstraintResult:
    statement = _eval_mask(df, constraint.statement)
    implication = _eval_mask(df, constraint.implication)
    violating_rows = _count(statement & ~implication)
    return ConditionalColumnConstraintResult(
        constraint=constraint,
        status=_status(violating_rows == 0),
        violating_rows=violating_rows,
    )


def evaluate_date_format(
    constraint: DateFormatConstraint, df: pd.DataFrame
) -> DateFormatConstraintResult:
    values = df[constraint.column].dropna().astype(str)
    parsed = pd.to_datetime(values, format=constraint.date_format, errors="coerce")
    failed_rows = _count(parsed.isna())
    return DateFormatConstraintResult(
        constraint=constraint,
        status=_status(failed_rows == 0),
        failed_rows=failed_rows,
    )


def evaluate_foreign_key(
    constraint: ForeignKeyConstraint, df: pd.DataFrame
) -> ForeignKeyConstraintResult:
    base_columns, reference_columns = _split_pairs(constraint.columns)
    reference_keys = _key_frame(frame_of(constraint.reference), reference_columns)

    if reference_keys.duplicated().any():
        logger.debug(
            "Reference columns %s are not a key in %s", reference_columns, constraint.reference
        )
        return ForeignKeyConstraintResult(
            constraint=constraint,
            status=ConstraintStatus.FAILURE,
            num_non_matching_refs=None,
        )

    base_keys = _key_frame(df, base_columns).dropna().drop_duplicates()
    merged = base_keys.merge(
        reference_keys, how="left", on=list(base_keys.columns), indicator=True
    )
    non_matching = _count(merged["_merge"] == "left_only")
    return ForeignKeyConstraintResult(
        constraint=constraint,
        status=_status(non_matching == 0),
        num_non_matching_refs=non_matching,
    )


def evaluate_functional_dependency(
    constraint: FunctionalDependencyConstraint, df: pd.DataFrame
) -> FunctionalDependencyConstraintResult:
    determinant = list(constraint.determinant_set)
    relevant = list(dict.fromkeys(determinant + list(constraint.dependent_set)))
    distinct_rows = df[relevant].drop_duplicates()
    dependents_per_determinant = distinct_rows.groupby(determinant, dropna=False).size()
    failed_rows = _count(dependents_per_determinant > 1)
    return FunctionalDependencyConstraintResult(
        constraint=constraint,
        status=_status(failed_rows == 0),
        failed_rows=failed_rows,
    )


def evaluate_joinable(
    constraint: JoinableConstraint, df: pd.DataFrame
) -> JoinableConstraintResult:
    base_columns, reference_columns = _split_pairs(constraint.columns)
    base_keys = _key_frame(df, base_columns).dropna().drop_duplicates()
    reference_keys = (
        _key_frame(frame_of(constraint.reference), reference_columns).dropna().drop_duplicates()
    )
    matching_keys = len(base_keys.merge(reference_keys, how="inner", on=list(base_keys.columns)))
    return JoinableConstraintResult(
        constraint=constraint,
        status=_status(matching_keys > 0),
        distinct_before=len(base_keys),
        matching_keys=matching_keys,
    )


def evaluate_number_of_rows(
    constraint: NumberOfRowsConstraint, df: pd.DataFrame
) -> NumberOfRowsConstraintResult:
    actual = len(df)
    satisfied = pd.DataFrame({"count": [actual]}).eval(constraint.expected)
    if isinstance(satisfied, pd.Series):
        satisfied = satisfied.iloc[0]
    return NumberOfRowsConstraintResult(
        constraint=constraint,
        status=_status(bool(satisfied)),
        actual=actual,
    )


def evaluate_regex(constraint: RegexConstraint, df: pd.DataFrame) -> RegexConstraintResult:
    pattern = re.compile(constraint.regex)
    values = df[constraint.column].dropna().astype(str)
    failed_rows = sum(1 for value in values if pattern.search(value) is None)
    return RegexConstraintResult(
        constraint=constraint,
        status=_status(failed_rows == 0),
        failed_rows=failed_rows,
    )


def evaluate_string_column(
    constraint: StringColumnConstraint, df: pd.DataFrame
) -> StringColumnConstraintResult:
    violating_rows = _count(~_eval_mask(df, constraint.constraint_string))
    return StringColumnConstraintResult(
        constraint=constraint,
        status=_status(violating_rows == 0),
        violating_rows=violating_rows,
    )


def _to_bool(value: Any) -> Any:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    return None


def convert_values(values: pd.Series, converted_type: str) -> pd.Series:
    """Convert non-null values to ``converted_type``; unconvertible values become null.

    Raises:
        TypeError: If ``converted_type`` is not a dtype name numpy understands.
    """
    type_name = str(converted_type).strip().lower()
    if type_name in ("str", "string", "object"):
        return values.astype(str)
    if type_name.startswith(("datetime", "date", "timestamp")):
        return pd.to_datetime(values, errors="coerce")
    if type_name in ("bool", "boolean"):
        return values.map(_to_bool)

    target = np.dtype(type_name)
    numeric = pd.to_numeric(values, errors="coerce")
    if np.issubdtype(target, np.integer):
        # fractional values would be truncated and out-of-range values wrap around
        bounds = np.iinfo(target)
        storable = (np.mod(numeric, 1) == 0) & numeric.between(bounds.min, bounds.max)
        numeric = numeric.where(storable)
    return numeric


def evaluate_type_conversion(
    constraint: TypeConversionConstraint, df: pd.DataFrame
) -> TypeConversionConstraintResult:
    column = df[constraint.column]
    converted = convert_values(column.dropna(), constraint.converted_type)
    failed_rows = _count(converted.isna())
    return TypeConversionConstraintResult(
        constraint=constraint,
        status=_status(failed_rows == 0),
        original_type=str(column.dtype),
        failed_rows=failed_rows,
    )


def evaluate_unique_key(
    constraint: UniqueKeyConstraint, df: pd.DataFrame
) -> UniqueKeyConstraintResult:
    tuple_counts = df.groupby(list(constraint.columns), dropna=False).size()
    num_non_unique_tuples = _count(tuple_counts > 1)
    return UniqueKeyConstraintResult(
        constraint=constraint,
        status=_status(num_non_unique_tuples == 0),
        num_non_unique_tuples=num_non_unique_tuples,
    )


# Registry of evaluation functions, one per constraint variant
EVALUATION_FUNCTIONS: Dict[Type[Constraint], Callable[[Any, pd.DataFrame], ConstraintResult]] = {
    AlwaysNullConstraint: evaluate_always_null,
    AnyOfConstraint: evaluate_any_of,
    ColumnColumnConstraint: evaluate_column_column,
    ConditionalColumnConstraint: evaluate_conditional_column,
    DateFormatConstraint: evaluate_date_format,
    ForeignKeyConstraint: evaluate_foreign_key,
    FunctionalDependencyConstraint: evaluate_functional_dependency,
    JoinableConstraint: evaluate_joinable,
    NeverNullConstraint: evaluate_never_null,
    NumberOfRowsConstraint: evaluate_number_of_rows,
    RegexConstraint: evaluate_regex,
    StringColumnConstraint: evaluate_string_column,
    TypeConversionConstraint: evaluate_type_conversion,
    UniqueKeyConstraint: evaluate_unique_key,
}


class PandasEvaluator:
    """Evaluate constraints against pandas DataFrames (or `Dataset` wrappers)."""

    def count_rows(self, data: Any) -> int:
        return len(frame_of(data))

    def evaluate(self, constraint: Constraint, data: Any) -> ConstraintResult:
        """Run the registered evaluation function for the constraint's type.

        Raises:
            UnsupportedConstraintError: If no function is registered for the type.
            KeyError: If the constraint references a column the dataset lacks.
        """
        function = EVALUATION_FUNCTIONS.get(type(constraint))
        if function is None:
            raise UnsupportedConstraintError(type(constraint).__name__, "pandas evaluation")
        result = function(constraint, frame_of(data))
        logger.debug("%s: %s", constraint.name, result.message)
        return result

    def cache(self, data: Any, method: CacheMethod) -> Any:
        # pandas frames already live in memory, there is nothing to persist
        logger.debug("Cache requested (%s); pandas data is already materialized", method.value)
        return data

    def uncache(self, data: Any) -> None:
        logger.debug("Releasing cached data")


__all__ = ["EVALUATION_FUNCTIONS", "PandasEvaluator", "convert_values"]
