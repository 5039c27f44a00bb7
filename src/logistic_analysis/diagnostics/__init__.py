"""
Model diagnostics for logistic regression assumptions.
"""

from logistic_analysis.diagnostics.monotonicity import (
    MonotonicDirection,
    MonotonicityCurve,
    compute_monotonicity_curve,
    monotonicity_curves,
    monotonicity_plots,
    numeric_predictors,
)

__all__ = [
    "MonotonicDirection",
    "MonotonicityCurve",
    "compute_monotonicity_curve",
    "monotonicity_curves",
    "monotonicity_plots",
    "numeric_predictors",
]
