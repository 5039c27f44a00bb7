"""
Cutoff classification metrics.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike

from logistic_analysis.evaluation.data_models import (
    ConfusionMatrix,
    MetricsRecord,
)

METRIC_FIELDS = ("accuracy", "precision", "recall", "f1")


def _validate_inputs(
    y_true: ArrayLike, y_prob: ArrayLike
) -> tuple[np.ndarray, np.ndarray]:
    labels = np.asarray(y_true)
    probs = np.asarray(y_prob, dtype=np.float64)
    if labels.shape != probs.shape or labels.ndim != 1:
        raise ValueError(
            "y_true and y_prob must be 1D arrays of equal length, got "
            f"shapes {labels.shape} and {probs.shape}"
        )
    return labels, probs


def compute_confusion_matrix(
    y_true: ArrayLike,
    y_prob: ArrayLike,
    cutoff: float,
) -> ConfusionMatrix:
    """Cross-tabulate 0/1 labels against ``y_prob >= cutoff``.

    Raises:
        ValueError: If the cutoff is outside [0, 1] or the inputs differ
            in length.
    """
    if not 0.0 <= cutoff <= 1.0:
        raise ValueError(f"cutoff must be in [0, 1], got {cutoff}")
    labels, probs = _validate_inputs(y_true, y_prob)

    actual = labels == 1
    predicted = probs >= cutoff

    return ConfusionMatrix(
        true_positives=int(np.sum(actual & predicted)),
        false_positives=int(np.sum(~actual & predicted)),
        true_negatives=int(np.sum(~actual & ~predicted)),
        false_negatives=int(np.sum(actual & ~predicted)),
    )


def compute_classification_metrics(
    y_true: ArrayLike,
    y_prob: ArrayLike,
    cutoff: float,
) -> MetricsRecord:
    """
    Accuracy, precision, recall and F1 at a probability cutoff.

    Probabilities exactly at the cutoff count as positive predictions.
    Undefined ratios are reported as None rather than raising.
    """
    return compute_confusion_matrix(y_true, y_prob, cutoff).to_metrics()


def average_metrics(records: Sequence[MetricsRecord]) -> MetricsRecord:
    """Field-wise mean of metrics records, skipping undefined entries.

    A field that is undefined in every record stays undefined.

    Raises:
        ValueError: If records is empty.
    """
    if not records:
        raise ValueError("Cannot average empty metrics")

    averaged: dict[str, float | None] = {}
    for name in METRIC_FIELDS:
        values = [
            value
            for value in (getattr(r, name) for r in records)
            if value is not None
        ]
        averaged[name] = float(np.mean(values)) if values else None

    return MetricsRecord(**averaged)
