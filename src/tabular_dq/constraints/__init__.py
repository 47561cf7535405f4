"""Constraint taxonomy.

Each module in this package defines one variant: a `<Name>Constraint`
describing the rule and a `<Name>ConstraintResult` carrying what evaluating it
measured. Constraints are pure data; engines evaluate them and reporters
render their results.

To add a variant:

1. Create a module here with the constraint and result dataclasses
   (frozen, deriving from `Constraint` / `ConstraintResult`)
2. Export both below and add the constraint to ALL_CONSTRAINT_TYPES
3. Register an evaluation function in `tabular_dq.engines.pandas_engine`
4. Register the report fields in `tabular_dq.reporters.log_reporter`

Example:
    ```python
    from tabular_dq.constraints import NeverNullConstraint, NeverNullConstraintResult
    from tabular_dq.core.enums import ConstraintStatus

    constraint = NeverNullConstraint("customer_id")
    result = NeverNullConstraintResult(
        constraint=constraint, status=ConstraintStatus.FAILURE, null_rows=3
    )
    ```
"""

from __future__ import annotations

from .always_null import AlwaysNullConstraint, AlwaysNullConstraintResult
from .any_of import AnyOfConstraint, AnyOfConstraintResult
from .base import Constraint, ConstraintResult
from .column_column import ColumnColumnConstraint, ColumnColumnConstraintResult
from .conditional_column import ConditionalColumnConstraint, ConditionalColumnConstraintResult
from .date_format import DateFormatConstraint, DateFormatConstraintResult
from .foreign_key import ForeignKeyConstraint, ForeignKeyConstraintResult
from .functional_dependency import (
    FunctionalDependencyConstraint,
    FunctionalDependencyConstraintResult,
)
from .joinable import JoinableConstraint, JoinableConstraintResult
from .never_null import NeverNullConstraint, NeverNullConstraintResult
from .number_of_rows import NumberOfRowsConstraint, NumberOfRowsConstraintResult
from .regex import RegexConstraint, RegexConstraintResult
from .string_column import StringColumnConstraint, StringColumnConstraintResult
from .type_conversion import TypeConversionConstraint, TypeConversionConstraintResult
from .unique_key import UniqueKeyConstraint, UniqueKeyConstraintResult

ALL_CONSTRAINT_TYPES = (
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

__all__ = [
    "ALL_CONSTRAINT_TYPES",
    "Constraint",
    "ConstraintResult",
    "AlwaysNullConstraint",
    "AlwaysNullConstraintResult",
    "AnyOfConstraint",
    "AnyOfConstraintResult",
    "ColumnColumnConstraint",
    "ColumnColumnConstraintResult",
    "ConditionalColumnConstraint",
    "ConditionalColumnConstraintResult",
    "DateFormatConstraint",
    "DateFormatConstraintResult",
    "ForeignKeyConstraint",
    "ForeignKeyConstraintResult",
    "FunctionalDependencyConstraint",
    "FunctionalDependencyConstraintResult",
    "JoinableConstraint",
    "JoinableConstraintResult",
    "NeverNullConstraint",
    "NeverNullConstraintResult",
    "NumberOfRowsConstraint",
    "NumberOfRowsConstraintResult",
    "RegexConstraint",
    "RegexConstraintResult",
    "StringColumnConstraint",
    "StringColumnConstraintResult",
    "TypeConversionConstraint",
    "TypeConversionConstraintResult",
    "UniqueKeyConstraint",
    "UniqueKeyConstraintResult",
]
