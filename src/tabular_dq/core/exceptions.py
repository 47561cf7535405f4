"""Exception hierarchy for tabular_dq.

Exception Hierarchy:
    DataQualityError (base)
    └── UnsupportedConstraintError

Invariant violations on the data model raise plain ``ValueError``; failures of
the evaluation engine or of a logging sink propagate unchanged.
"""

from __future__ import annotations


class DataQualityError(Exception):
    """Base exception for all tabular_dq errors."""


class UnsupportedConstraintError(DataQualityError, TypeError):
    """A constraint or result type has no rule in a dispatch table.

    Raised when a reporter or an engine meets a variant it does not know about.
    This is a programming error (taxonomy and consumer out of sync), never a
    data error.

    Attributes:
        type_name: Name of the offending type.
        consumer: What was looking it up (e.g. "log reporter").
    """

    def __init__(self, type_name: str, consumer: str) -> None:
        super().__init__(f"No {consumer} rule for {type_name}")
        self.type_name = type_name
        self.consumer = consumer


__all__ = ["DataQualityError", "UnsupportedConstraintError"]
