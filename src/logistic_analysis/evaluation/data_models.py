"""
Data models for logistic model evaluation.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field


class EvaluationMode(str, Enum):
    IN_SAMPLE = "insample"
    CROSS_VALIDATED = "cv"


def parse_mode(mode: "str | EvaluationMode") -> EvaluationMode:
    """Resolve a mode string such as ``"cv"`` into an EvaluationMode."""
    try:
        return EvaluationMode(mode)
    except ValueError:
        valid = [m.value for m in EvaluationMode]
        raise ValueError(
            f"Unknown evaluation mode: {mode!r}. Valid modes: {valid}"
        ) from None


class MetricsRecord(BaseModel):
    """Classification metrics at a probability cutoff.

    A field is None when its ratio is undefined for the scored rows, e.g.
    precision when nothing was predicted positive.
    """

    accuracy: float | None = Field(default=None, ge=0.0, le=1.0)
    precision: float | None = Field(default=None, ge=0.0, le=1.0)
    recall: float | None = Field(default=None, ge=0.0, le=1.0)
    f1: float | None = Field(default=None, ge=0.0, le=1.0)
    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        """Whether every metric is defined."""
        return None not in (self.accuracy, self.precision, self.recall, self.f1)


@dataclass(frozen=True)
class ConfusionMatrix:
    """Confusion matrix for binary classification."""

    true_positives: int
    false_positives: int
    true_negatives: int
    false_negatives: int

    def __post_init__(self) -> None:
        if self.true_positives < 0:
            raise ValueError(
                f"true_positives must be >= 0, got {self.true_positives}"
            )
        if self.false_positives < 0:
            raise ValueError(
                f"false_positives must be >= 0, got {self.false_positives}"
            )
        if self.true_negatives < 0:
            raise ValueError(
                f"true_negatives must be >= 0, got {self.true_negatives}"
            )
        if self.false_negatives < 0:
            raise ValueError(
                f"false_negatives must be >= 0, got {self.false_negatives}"
            )

    @property
    def total(self) -> int:
        return (
            self.true_positives
            + self.false_positives
            + self.true_negatives
            + self.false_negatives
        )

    @property
    def accuracy(self) -> float | None:
        """Proportion of correct predictions. None for an empty matrix."""
        if self.total == 0:
            return None
        return (self.true_positives + self.true_negatives) / self.total

    @property
    def precision(self) -> float | None:
        """Positive predictive value. None with no predicted positives."""
        total = self.true_positives + self.false_positives
        return self.true_positives / total if total > 0 else None

    @property
    def recall(self) -> float | None:
        """True positive rate. None with no actual positives."""
        total = self.true_positives + self.false_negatives
        return self.true_positives / total if total > 0 else None

    @property
    def f1_score(self) -> float | None:
        """Harmonic mean of precision and recall.

        None if either is undefined or precision + recall = 0.
        """
        p = self.precision
        r = self.recall
        if p is None or r is None or (p + r) == 0:
            return None
        return 2 * p * r / (p + r)

    def to_metrics(self) -> MetricsRecord:
        return MetricsRecord(
            accuracy=self.accuracy,
            precision=self.precision,
            recall=self.recall,
            f1=self.f1_score,
        )


@dataclass(frozen=True)
class FoldAssignment:
    """
    Assignment of rows to cross-validation folds.

    Attributes:
        fold_ids: Fold id in [1, n_folds] for each row, in row order.
        n_folds: Number of folds.
        seed: Seed the assignment was drawn with.
    """

    fold_ids: NDArray[np.int64]
    n_folds: int
    seed: int

    def __post_init__(self) -> None:
        if self.fold_ids.ndim != 1:
            raise ValueError(
                f"fold_ids must be 1D, got shape {self.fold_ids.shape}"
            )
        if len(self.fold_ids) > 0 and (
            self.fold_ids.min() < 1 or self.fold_ids.max() > self.n_folds
        ):
            raise ValueError(f"fold_ids must be in [1, {self.n_folds}]")

    @property
    def n_rows(self) -> int:
        return len(self.fold_ids)

    def held_out_mask(self, fold_id: int) -> NDArray[np.bool_]:
        """Boolean mask of the rows in ``fold_id``."""
        result: NDArray[np.bool_] = self.fold_ids == fold_id
        return result

    def fold_sizes(self) -> NDArray[np.int64]:
        """Number of rows in each fold, indexed from fold 1."""
        counts = np.bincount(self.fold_ids, minlength=self.n_folds + 1)
        return counts[1:].astype(np.int64)


@dataclass(frozen=True)
class FoldPrediction:
    """Held-out predictions for one fold.

    Attributes:
        fold_id: Fold id in [1, n_folds].
        row_positions: Positions of the held-out rows in the input table.
        y_true: Encoded 0/1 response of the held-out rows.
        y_prob: Predicted P(response = 1) for the held-out rows.
    """

    fold_id: int
    row_positions: NDArray[np.int64]
    y_true: NDArray[np.int64]
    y_prob: NDArray[np.float64]


@dataclass(frozen=True)
class RocCurve:
    """
    ROC curve points and the area under them.

    Both rate arrays start at 0 and end at 1.
    """

    false_positive_rate: NDArray[np.float64]
    true_positive_rate: NDArray[np.float64]
    auc: float

    def __post_init__(self) -> None:
        if self.false_positive_rate.shape != self.true_positive_rate.shape:
            raise ValueError(
                "false_positive_rate and true_positive_rate must have the "
                f"same shape, got {self.false_positive_rate.shape} and "
                f"{self.true_positive_rate.shape}"
            )

    @property
    def n_points(self) -> int:
        return len(self.false_positive_rate)


@dataclass(frozen=True)
class RocAucResult:
    """ROC/AUC evaluation of a model specification."""

    curve: RocCurve
    mode: EvaluationMode
    n_folds: int | None = None

    @property
    def auc(self) -> float:
        return self.curve.auc
