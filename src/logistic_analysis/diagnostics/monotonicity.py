"""
Monotonicity diagnostics for numeric predictors.

The logit link assumes the log-odds of the response change monotonically
with each numeric predictor. A LOWESS smooth of the 0/1 response against
the predictor gives a quick visual and programmatic check.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd
from matplotlib.figure import Figure
from numpy.typing import ArrayLike, NDArray
from pandas.api.types import is_bool_dtype, is_numeric_dtype
from statsmodels.nonparametric.smoothers_lowess import (  # type: ignore[import-untyped]
    lowess,
)

from logistic_analysis.core.constants import (
    DEFAULT_JITTER_HEIGHT,
    DEFAULT_LOWESS_FRAC,
    DEFAULT_SEED,
)
from logistic_analysis.core.utils import get_rng
from logistic_analysis.exceptions import MissingColumnError
from logistic_analysis.modeling.response import normalize_response

logger = logging.getLogger(__name__)

# Smoothed changes smaller than this are treated as flat
MONOTONE_TOLERANCE = 1e-6

# 0/1 responses have no outliers to downweight
LOWESS_ROBUST_ITERATIONS = 0


class MonotonicDirection(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    CONSTANT = "constant"
    NON_MONOTONIC = "non_monotonic"


@dataclass(frozen=True)
class MonotonicityCurve:
    """
    LOWESS smooth of a 0/1 response against one predictor.

    Attributes:
        predictor: Name of the predictor column.
        x: Sorted predictor values.
        fitted: Smoothed response at each x.
        direction: Shape of the smoothed curve.
    """

    predictor: Hashable
    x: NDArray[np.float64]
    fitted: NDArray[np.float64]
    direction: MonotonicDirection

    @property
    def is_monotonic(self) -> bool:
        return self.direction != MonotonicDirection.NON_MONOTONIC


def classify_direction(
    fitted: ArrayLike, tolerance: float = MONOTONE_TOLERANCE
) -> MonotonicDirection:
    """Classify a curve, given in x order, by the signs of its steps."""
    values = np.asarray(fitted, dtype=np.float64)
    values = values[~np.isnan(values)]
    steps = np.diff(values)

    rises = bool(np.any(steps > tolerance))
    falls = bool(np.any(steps < -tolerance))

    if rises and falls:
        return MonotonicDirection.NON_MONOTONIC
    if rises:
        return MonotonicDirection.INCREASING
    if falls:
        return MonotonicDirection.DECREASING
    return MonotonicDirection.CONSTANT


def compute_lowess_fit(
    x: NDArray[np.float64],
    y: NDArray[np.float64],
    frac: float = DEFAULT_LOWESS_FRAC,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Compute LOWESS smoothed curve."""
    # Sort by x for proper plotting
    sorted_indices = np.argsort(x, kind="stable")
    x_sorted = x[sorted_indices]
    y_sorted = y[sorted_indices]

    smoothed = lowess(
        y_sorted,
        x_sorted,
        frac=frac,
        it=LOWESS_ROBUST_ITERATIONS,
        return_sorted=True,
    )
    return smoothed[:, 0], smoothed[:, 1]


def numeric_predictors(
    data: pd.DataFrame, response: Hashable
) -> list[Hashable]:
    """Numeric, non-boolean columns other than the response."""
    return [
        column
        for column in data.columns
        if column != response
        and is_numeric_dtype(data[column])
        and not is_bool_dtype(data[column])
    ]


def compute_monotonicity_curve(
    x: ArrayLike,
    y: ArrayLike,
    predictor: Hashable = "x",
    frac: float = DEFAULT_LOWESS_FRAC,
) -> MonotonicityCurve:
    """
    Smooth a 0/1 response against one predictor and classify its shape.

    Args:
        x: Predictor values.
        y: Response coded 0/1, same length as x.
        predictor: Name used to label the curve.
        frac: Fraction of points used for each local regression.

    Returns:
        MonotonicityCurve for the predictor.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)
    if x_arr.shape != y_arr.shape:
        raise ValueError(
            f"x and y must have the same shape, got {x_arr.shape} "
            f"and {y_arr.shape}"
        )

    x_sorted, fitted = compute_lowess_fit(x_arr, y_arr, frac=frac)
    return MonotonicityCurve(
        predictor=predictor,
        x=x_sorted,
        fitted=fitted,
        direction=classify_direction(fitted),
    )


def monotonicity_curves(
    data: pd.DataFrame,
    response: Hashable,
    baseline: Any = None,
    frac: float = DEFAULT_LOWESS_FRAC,
) -> list[MonotonicityCurve]:
    """
    Monotonicity curve of every numeric predictor against the response.

    Args:
        data: Table holding the response and predictors.
        response: Name of the response column.
        baseline: Optional response level to encode as 0.
        frac: LOWESS smoothing fraction.

    Returns:
        One MonotonicityCurve per numeric predictor, in column order.

    Raises:
        MissingColumnError: If the response column is absent.
    """
    _, curves = _encode_and_smooth(data, response, baseline, frac)
    return curves


def _encode_and_smooth(
    data: pd.DataFrame,
    response: Hashable,
    baseline: Any,
    frac: float,
) -> tuple[NDArray[np.int64], list[MonotonicityCurve]]:
    """The encoded response and the curve of every numeric predictor."""
    if response not in data.columns:
        columns = [str(c) for c in data.columns]
        raise MissingColumnError(str(response), columns)

    y = normalize_response(data[response], baseline)

    curves: list[MonotonicityCurve] = []
    for column in numeric_predictors(data, response):
        curve = compute_monotonicity_curve(
            data[column], y, predictor=column, frac=frac
        )
        logger.info(f"{column}: {curve.direction.value}")
        curves.append(curve)
    return y, curves


def plot_monotonicity_curve(
    curve: MonotonicityCurve,
    x: ArrayLike,
    y: ArrayLike,
    response: Hashable,
    rng: np.random.Generator,
    jitter_height: float = DEFAULT_JITTER_HEIGHT,
) -> Figure:
    """Jittered scatter of the 0/1 response with the LOWESS curve."""
    import matplotlib.pyplot as plt

    y_arr = np.asarray(y, dtype=np.float64)
    jitter = rng.uniform(-jitter_height, jitter_height, size=len(y_arr))

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(x, y_arr + jitter, alpha=0.2, s=20, color="steelblue")
    ax.plot(
        curve.x, curve.fitted, color="darkred", linewidth=2, label="LOWESS"
    )

    ax.set_xlabel(str(curve.predictor))
    ax.set_ylabel(str(response))
    ax.set_title(f"Monotonicity of {curve.predictor} vs {response}")
    ax.legend()
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def monotonicity_plots(
    data: pd.DataFrame,
    response: Hashable,
    baseline: Any = None,
    frac: float = DEFAULT_LOWESS_FRAC,
    seed: int = DEFAULT_SEED,
) -> dict[Hashable, Figure]:
    """
    Monotonicity plots for every numeric predictor.

    Args:
        data: Table holding the response and predictors.
        response: Name of the response column.
        baseline: Optional response level to encode as 0.
        frac: LOWESS smoothing fraction.
        seed: Seed for the vertical jitter of the scatter points.

    Returns:
        Mapping of predictor name to its Figure.
    """
    y, curves = _encode_and_smooth(data, response, baseline, frac)
    rng = get_rng(seed)

    return {
        curve.predictor: plot_monotonicity_curve(
            curve, data[curve.predictor], y, response, rng
        )
        for curve in curves
    }
