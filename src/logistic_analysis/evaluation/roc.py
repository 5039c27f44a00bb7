"""
ROC curve and AUC computation.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from logistic_analysis.evaluation.data_models import RocCurve
from logistic_analysis.exceptions import DegenerateLabelSetError


def check_both_classes(y_true: ArrayLike) -> tuple[int, int]:
    """
    Count positives and negatives, requiring at least one of each.

    Returns:
        Tuple of (n_positive, n_negative).

    Raises:
        DegenerateLabelSetError: If only one class is present.
    """
    labels = np.asarray(y_true)
    n_positive = int(np.sum(labels == 1))
    n_negative = int(np.sum(labels == 0))
    if n_positive == 0 or n_negative == 0:
        raise DegenerateLabelSetError(n_positive, n_negative)
    return n_positive, n_negative


def _count_trapezoid_area(
    fp_counts: NDArray[np.int64], tp_counts: NDArray[np.int64]
) -> float:
    """Trapezoid area in count units, exact until the final division."""
    doubled = np.sum(np.diff(fp_counts) * (tp_counts[:-1] + tp_counts[1:]))
    return float(doubled) / 2


def compute_roc_curve(y_true: ArrayLike, y_prob: ArrayLike) -> RocCurve:
    """
    Compute the ROC curve and its AUC.

    Rows are ranked by predicted probability, highest first. Tied
    probabilities keep their input order, which shapes the staircase at
    ties. Every prefix of the ranking gives one (FPR, TPR) point, with
    (0, 0) prepended. The area is integrated over the distinct probability
    thresholds only, so a block of tied scores contributes a diagonal
    segment and the AUC does not depend on the order of ties.

    Args:
        y_true: 0/1 labels.
        y_prob: Predicted probabilities, same length as y_true.

    Returns:
        RocCurve with rates and AUC.

    Raises:
        DegenerateLabelSetError: If y_true contains only one class.
        ValueError: If the inputs differ in length.
    """
    labels = np.asarray(y_true)
    probs = np.asarray(y_prob, dtype=np.float64)
    if labels.shape != probs.shape or labels.ndim != 1:
        raise ValueError(
            "y_true and y_prob must be 1D arrays of equal length, got "
            f"shapes {labels.shape} and {probs.shape}"
        )

    n_positive, n_negative = check_both_classes(labels)

    order = np.argsort(-probs, kind="stable")
    ranked = labels[order]
    ranked_probs = probs[order]

    tp_counts = np.concatenate(([0], np.cumsum(ranked == 1)))
    fp_counts = np.concatenate(([0], np.cumsum(ranked == 0)))

    # Last position of each block of tied probabilities
    block_ends = np.append(
        np.flatnonzero(np.diff(ranked_probs)), len(probs) - 1
    )
    threshold_points = np.concatenate(([0], block_ends + 1))

    auc = _count_trapezoid_area(
        fp_counts[threshold_points], tp_counts[threshold_points]
    ) / (n_positive * n_negative)

    return RocCurve(
        false_positive_rate=fp_counts / n_negative,
        true_positive_rate=tp_counts / n_positive,
        auc=auc,
    )


def compute_auc(y_true: ArrayLike, y_prob: ArrayLike) -> float:
    """AUC of the ROC curve for 0/1 labels and predicted probabilities."""
    return compute_roc_curve(y_true, y_prob).auc
