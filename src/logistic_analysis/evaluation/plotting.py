"""
Plotting utilities for ROC curves.
"""

from typing import Any

import pandas as pd
from matplotlib.figure import Figure

from logistic_analysis.core.constants import DEFAULT_FOLDS, DEFAULT_SEED
from logistic_analysis.evaluation.data_models import (
    EvaluationMode,
    RocAucResult,
)
from logistic_analysis.evaluation.runner import roc_auc
from logistic_analysis.modeling.formula import ModelFormula


def plot_roc_curve(result: RocAucResult) -> Figure:
    """Plot TPR against FPR with the chance diagonal for reference."""
    import matplotlib.pyplot as plt

    curve = result.curve
    title = (
        "Cross-Validated ROC Curve"
        if result.mode == EvaluationMode.CROSS_VALIDATED
        else "ROC Curve"
    )

    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(
        curve.false_positive_rate,
        curve.true_positive_rate,
        color="steelblue",
        linewidth=2,
        label=f"AUC = {curve.auc:.4f}",
    )
    ax.plot([0, 1], [0, 1], linestyle="--", color="black", linewidth=1)

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_xlabel("False Positive Rate")
    ax.set_ylabel("True Positive Rate")
    ax.set_title(title)
    ax.legend(loc="lower right")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def calculate_and_plot_roc_curve(
    formula: str | ModelFormula,
    data: pd.DataFrame,
    mode: str | EvaluationMode = EvaluationMode.IN_SAMPLE,
    folds: int = DEFAULT_FOLDS,
    baseline: Any = None,
    seed: int = DEFAULT_SEED,
) -> tuple[RocAucResult, Figure]:
    """
    Compute the ROC curve of a logistic model and plot it.

    Arguments are those of :func:`roc_auc`.

    Returns:
        Tuple of (RocAucResult, matplotlib Figure).
    """
    result = roc_auc(
        formula,
        data,
        mode=mode,
        folds=folds,
        baseline=baseline,
        seed=seed,
    )
    return result, plot_roc_curve(result)
