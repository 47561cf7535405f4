"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ConstraintStatus(str, Enum):
    """Verdict of a single constraint evaluation.

    Values are the literal strings written to reports.
    """

    SUCCESS = "Success"
    FAILURE = "Failure"

    @classmethod
    def from_success(cls, success: bool) -> "ConstraintStatus":
        return cls.SUCCESS if success else cls.FAILURE


class CacheMethod(str, Enum):
    """Storage strategy requested from the evaluation engine before a check runs.

    Purely a performance hint; engines that keep data in memory may ignore it.
    """

    MEMORY_ONLY = "MEMORY_ONLY"
    MEMORY_AND_DISK = "MEMORY_AND_DISK"
    DISK_ONLY = "DISK_ONLY"


__all__ = ["ConstraintStatus", "CacheMethod"]
