"""
Evaluation module for logistic model specifications.

This module provides tools for:
- Assigning rows to cross-validation folds
- Computing classification metrics at a probability cutoff
- Computing ROC curves and AUC
- Running in-sample and cross-validated evaluations
- Plotting ROC curves
"""

from logistic_analysis.evaluation.data_models import (
    ConfusionMatrix,
    EvaluationMode,
    FoldAssignment,
    FoldPrediction,
    MetricsRecord,
    RocAucResult,
    RocCurve,
)
from logistic_analysis.evaluation.folds import assign_folds
from logistic_analysis.evaluation.metrics import (
    average_metrics,
    compute_classification_metrics,
    compute_confusion_matrix,
)
from logistic_analysis.evaluation.plotting import (
    calculate_and_plot_roc_curve,
    plot_roc_curve,
)
from logistic_analysis.evaluation.roc import compute_auc, compute_roc_curve
from logistic_analysis.evaluation.runner import (
    cross_validated_predictions,
    evaluate,
    roc_auc,
)

__all__ = [
    # Data models
    "ConfusionMatrix",
    "EvaluationMode",
    "FoldAssignment",
    "FoldPrediction",
    "MetricsRecord",
    "RocAucResult",
    "RocCurve",
    # Folds
    "assign_folds",
    # Metrics
    "average_metrics",
    "compute_classification_metrics",
    "compute_confusion_matrix",
    # ROC
    "compute_auc",
    "compute_roc_curve",
    # Runner
    "cross_validated_predictions",
    "evaluate",
    "roc_auc",
    # Plotting
    "calculate_and_plot_roc_curve",
    "plot_roc_curve",
]
