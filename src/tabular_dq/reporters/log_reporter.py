"""Structured-log reporter.

Renders each constraint result of a CheckResult into a JSON document and
logs it as one line:

    {"check" : {"id" : ..., "time" : ..., "name" : ..., "rowsTotal" : ...},
     "constraint" : ..., "status" : ..., "message" : ..., <variant fields>}

Field keys are part of the output contract; log consumers match on them.
Variant fields come from EXTRA_FIELD_RULES, keyed by result type. A result type
without a rule is an error, never silently skipped.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from tabular_dq.config import ReporterConfig
from tabular_dq.constraints import (
    AlwaysNullConstraintResult,
    AnyOfConstraintResult,
    ColumnColumnConstraintResult,
    ConditionalColumnConstraintResult,
    ConstraintResult,
    DateFormatConstraintResult,
    ForeignKeyConstraintResult,
    FunctionalDependencyConstraintResult,
    JoinableConstraintResult,
    NeverNullConstraintResult,
    NumberOfRowsConstraintResult,
    RegexConstraintResult,
    StringColumnConstraintResult,
    TypeConversionConstraintResult,
    UniqueKeyConstraintResult,
)
from tabular_dq.core.check import CheckResult
from tabular_dq.core.exceptions import UnsupportedConstraintError

# ============================================================================
# FIELD KEYS
# ============================================================================

CHECK_KEY = "check"
CHECK_ID_KEY = "id"
CHECK_TIME_KEY = "time"
CHECK_NAME_KEY = "name"
CHECK_NUM_ROWS_KEY = "rowsTotal"

CONSTRAINT_TYPE_KEY = "constraint"
CONSTRAINT_STATUS_KEY = "status"
CONSTRAINT_MESSAGE_KEY = "message"

COLUMN_KEY = "column"
COLUMNS_KEY = "columns"
FAILED_INSTANCES_KEY = "failedInstances"
BASE_COLUMN_KEY = "baseColumn"
REFERENCE_COLUMN_KEY = "referenceColumn"
REFERENCE_TABLE_KEY = "referenceTable"

# json.dumps output with these separators: {"a" : 1, "b" : [1, 2]}
_SEPARATORS = (", ", " : ")


# ============================================================================
# VARIANT FIELDS
# ============================================================================


def _column_pairs(pairs) -> list:
    return [{BASE_COLUMN_KEY: base, REFERENCE_COLUMN_KEY: reference} for base, reference in pairs]


def _always_null_fields(result: AlwaysNullConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: result.constraint.column,
        FAILED_INSTANCES_KEY: result.non_null_rows,
    }


def _any_of_fields(result: AnyOfConstraintResult) -> Dict[str, Any]:
    # allowed values are always written as strings, whatever their type
    return {
        COLUMN_KEY: result.constraint.column,
        FAILED_INSTANCES_KEY: result.failed_rows,
        "allowed": [str(value) for value in result.constraint.allowed],
    }


def _column_column_fields(result: ColumnColumnConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: str(result.constraint.expression),
        FAILED_INSTANCES_KEY: result.violating_rows,
    }


def _conditional_column_fields(result: ConditionalColumnConstraintResult) -> Dict[str, Any]:
    return {
        "statement": str(result.constraint.statement),
        "implication": str(result.constraint.implication),
        FAILED_INSTANCES_KEY: result.violating_rows,
    }


def _date_format_fields(result: DateFormatConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: result.constraint.column,
        FAILED_INSTANCES_KEY: result.failed_rows,
        "dateFormat": result.constraint.date_format,
    }


def _foreign_key_fields(result: ForeignKeyConstraintResult) -> Dict[str, Any]:
    # None (not computed) becomes JSON null, which stays distinct from 0
    return {
        COLUMNS_KEY: _column_pairs(result.constraint.columns),
        REFERENCE_TABLE_KEY: str(result.constraint.reference),
        FAILED_INSTANCES_KEY: result.num_non_matching_refs,
    }


def _functional_dependency_fields(result: FunctionalDependencyConstraintResult) -> Dict[str, Any]:
    return {
        "determinantSet": list(result.constraint.determinant_set),
        "dependentSet": list(result.constraint.dependent_set),
        FAILED_INSTANCES_KEY: result.failed_rows,
    }


def _joinable_fields(result: JoinableConstraintResult) -> Dict[str, Any]:
    return {
        COLUMNS_KEY: _column_pairs(result.constraint.columns),
        REFERENCE_TABLE_KEY: str(result.constraint.reference),
        "distinctBefore": result.distinct_before,
        "matchingKeys": result.matching_keys,
    }


def _never_null_fields(result: NeverNullConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: result.constraint.column,
        FAILED_INSTANCES_KEY: result.null_rows,
    }


def _number_of_rows_fields(result: NumberOfRowsConstraintResult) -> Dict[str, Any]:
    return {
        "expected": str(result.constraint.expected),
        "actual": result.actual,
    }


def _regex_fields(result: RegexConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: result.constraint.column,
        FAILED_INSTANCES_KEY: result.failed_rows,
        "regex": result.constraint.regex,
    }


def _string_column_fields(result: StringColumnConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: result.constraint.constraint_string,
        FAILED_INSTANCES_KEY: result.violating_rows,
    }


def _type_conversion_fields(result: TypeConversionConstraintResult) -> Dict[str, Any]:
    return {
        COLUMN_KEY: result.constraint.column,
        FAILED_INSTANCES_KEY: result.failed_rows,
        "originalType": str(result.original_type),
        "convertedType": str(result.constraint.converted_type),
    }


def _unique_key_fields(result: UniqueKeyConstraintResult) -> Dict[str, Any]:
    return {
        COLUMNS_KEY: list(result.constraint.columns),
        FAILED_INSTANCES_KEY: result.num_non_unique_tuples,
    }


EXTRA_FIELD_RULES: Dict[type, Callable[[Any], Dict[str, Any]]] = {
    AlwaysNullConstraintResult: _always_null_fields,
    AnyOfConstraintResult: _any_of_fields,
    ColumnColumnConstraintResult: _column_column_fields,
    ConditionalColumnConstraintResult: _conditional_column_fields,
    DateFormatConstraintResult: _date_format_fields,
    ForeignKeyConstraintResult: _foreign_key_fields,
    FunctionalDependencyConstraintResult: _functional_dependency_fields,
    JoinableConstraintResult: _joinable_fields,
    NeverNullConstraintResult: _never_null_fields,
    NumberOfRowsConstraintResult: _number_of_rows_fields,
    RegexConstraintResult: _regex_fields,
    StringColumnConstraintResult: _string_column_fields,
    TypeConversionConstraintResult: _type_conversion_fields,
    UniqueKeyConstraintResult: _unique_key_fields,
}


def extra_fields(constraint_result: ConstraintResult) -> Dict[str, Any]:
    """Variant-specific fields of a result.

    Raises:
        UnsupportedConstraintError: If the result type has no rule.
    """
    rule = EXTRA_FIELD_RULES.get(type(constraint_result))
    if rule is None:
        raise UnsupportedConstraintError(type(constraint_result).__name__, "log reporter")
    return rule(constraint_result)


# ============================================================================
# DOCUMENTS
# ============================================================================


def constraint_result_to_json(
    check_result: CheckResult,
    constraint_result: ConstraintResult,
    check_time: datetime,
) -> Dict[str, Any]:
    """Build the report document for one constraint result.

    Args:
        check_result: The CheckResult the constraint result belongs to.
        constraint_result: The result to render.
        check_time: Timestamp written to ``check.time`` as ``str(check_time)``.

    Returns:
        Document dict in output key order; the ``name`` key is left out when
        the check has no display name.
    """
    check = check_result.check
    check_fields: Dict[str, Any] = {
        CHECK_ID_KEY: check.id,
        CHECK_TIME_KEY: str(check_time),
    }
    if check.display_name is not None:
        check_fields[CHECK_NAME_KEY] = check.display_name
    check_fields[CHECK_NUM_ROWS_KEY] = check_result.num_rows

    document: Dict[str, Any] = {
        CHECK_KEY: check_fields,
        CONSTRAINT_TYPE_KEY: constraint_result.constraint.name,
        CONSTRAINT_STATUS_KEY: constraint_result.status.value,
        CONSTRAINT_MESSAGE_KEY: constraint_result.message,
    }
    document.update(extra_fields(constraint_result))
    return document


def render_document(document: Dict[str, Any]) -> str:
    return json.dumps(document, separators=_SEPARATORS, ensure_ascii=False)


# ============================================================================
# REPORTER
# ============================================================================


class LogReporter:
    """Write one JSON line per constraint result to a logger.

    Two ways to build one, producing identical text:

        >>> LogReporter()  # default channel, INFO
        >>> LogReporter(logging.getLogger("dq.audit"), logging.WARNING)

    Args:
        logger: Channel to log to. Defaults to the package reporter logger.
        log_level: Level to log at. Defaults to INFO.
        clock: Source of the report timestamp.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        log_level: Optional[int] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        default = ReporterConfig.default()
        self.config = ReporterConfig(
            channel=logger if logger is not None else default.channel,
            severity=log_level if log_level is not None else default.severity,
        )
        self.clock = clock

    @classmethod
    def from_config(
        cls, config: ReporterConfig, *, clock: Callable[[], datetime] = datetime.now
    ) -> "LogReporter":
        return cls(config.channel, config.severity, clock=clock)

    @property
    def logger(self) -> logging.Logger:
        return self.config.channel

    @property
    def log_level(self) -> int:
        return self.config.severity

    def report(self, check_result: CheckResult) -> None:
        """Log every constraint result of ``check_result``.

        All documents are rendered before the first line is written, so an
        unsupported result type aborts the report without partial output.
        """
        check_time = self.clock()
        lines = [
            render_document(constraint_result_to_json(check_result, result, check_time))
            for result in check_result.constraint_results.values()
        ]
        for line in lines:
            self.logger.log(self.log_level, line)


__all__ = [
    "LogReporter",
    "EXTRA_FIELD_RULES",
    "extra_fields",
    "constraint_result_to_json",
    "render_document",
]
