"""Tests for cutoff classification metrics."""

import numpy as np
import pytest

from logistic_analysis.evaluation.data_models import MetricsRecord
from logistic_analysis.evaluation.metrics import (
    average_metrics,
    compute_classification_metrics,
    compute_confusion_matrix,
)


class TestComputeConfusionMatrix:
    def test_counts(self) -> None:
        cm = compute_confusion_matrix(
            [1, 0, 1, 0], [0.9, 0.4, 0.5, 0.6], cutoff=0.5
        )
        assert cm.true_positives == 2
        assert cm.false_positives == 1
        assert cm.true_negatives == 1
        assert cm.false_negatives == 0

    def test_probability_at_cutoff_is_positive(self) -> None:
        cm = compute_confusion_matrix([0], [0.5], cutoff=0.5)
        assert cm.false_positives == 1

    @pytest.mark.parametrize("cutoff", [-0.1, 1.1])
    def test_cutoff_out_of_range(self, cutoff: float) -> None:
        with pytest.raises(ValueError, match="cutoff"):
            compute_confusion_matrix([0, 1], [0.2, 0.8], cutoff=cutoff)

    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError, match="equal length"):
            compute_confusion_matrix([0, 1, 1], [0.2, 0.8], cutoff=0.5)


class TestComputeClassificationMetrics:
    def test_values(self) -> None:
        record = compute_classification_metrics(
            np.array([1, 0, 1, 0]), np.array([0.9, 0.4, 0.5, 0.6]), 0.5
        )
        assert record.accuracy == 0.75
        assert record.precision == pytest.approx(2 / 3)
        assert record.recall == 1.0
        assert record.f1 == pytest.approx(0.8)

    def test_no_predicted_positives(self) -> None:
        record = compute_classification_metrics([1, 0], [0.1, 0.2], 0.5)
        assert record.accuracy == 0.5
        assert record.precision is None
        assert record.recall == 0.0
        assert record.f1 is None

    def test_no_actual_positives(self) -> None:
        record = compute_classification_metrics([0, 0], [0.1, 0.9], 0.5)
        assert record.recall is None
        assert record.precision == 0.0
        assert record.f1 is None

    def test_precision_and_recall_zero(self) -> None:
        record = compute_classification_metrics([1, 0], [0.1, 0.9], 0.5)
        assert record.precision == 0.0
        assert record.recall == 0.0
        assert record.f1 is None


class TestAverageMetrics:
    def test_skips_undefined(self) -> None:
        records = [
            MetricsRecord(accuracy=1.0, precision=None, recall=0.5, f1=None),
            MetricsRecord(accuracy=0.5, precision=0.4, recall=None, f1=None),
        ]
        averaged = average_metrics(records)
        assert averaged.accuracy == 0.75
        assert averaged.precision == 0.4
        assert averaged.recall == 0.5
        assert averaged.f1 is None

    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            average_metrics([])
