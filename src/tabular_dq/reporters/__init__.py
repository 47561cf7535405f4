"""Reporters render CheckResults to an external sink.

A reporter is anything with a ``report(check_result)`` method; there is no
base class to inherit from.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tabular_dq.core.check import CheckResult


class Reporter(Protocol):
    """Protocol for reporters.

    Methods:
        report: Render one CheckResult. Errors raised by the sink propagate.
    """

    def report(self, check_result: "CheckResult") -> None:
        ...


__all__ = ["Reporter"]
