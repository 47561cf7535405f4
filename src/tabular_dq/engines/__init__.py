"""Evaluation engines.

Engines turn constraints into results by scanning a dataset. The pandas engine
is the one bundled with the package.
"""

from .pandas_engine import EVALUATION_FUNCTIONS, PandasEvaluator

__all__ = ["EVALUATION_FUNCTIONS", "PandasEvaluator"]
