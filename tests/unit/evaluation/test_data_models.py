"""Tests for evaluation data models."""

import numpy as np
import pytest
from pydantic import ValidationError

from logistic_analysis.evaluation.data_models import (
    ConfusionMatrix,
    EvaluationMode,
    FoldAssignment,
    MetricsRecord,
    RocCurve,
    parse_mode,
)


class TestParseMode:
    def test_known_modes(self) -> None:
        assert parse_mode("insample") == EvaluationMode.IN_SAMPLE
        assert parse_mode("cv") == EvaluationMode.CROSS_VALIDATED
        assert parse_mode(EvaluationMode.CROSS_VALIDATED) is (
            EvaluationMode.CROSS_VALIDATED
        )

    def test_unknown_mode_lists_valid_modes(self) -> None:
        with pytest.raises(ValueError, match="Valid modes"):
            parse_mode("bootstrap")


class TestMetricsRecord:
    def test_frozen(self) -> None:
        record = MetricsRecord(accuracy=0.5, precision=0.5, recall=0.5, f1=0.5)
        with pytest.raises(ValidationError):
            record.accuracy = 0.9  # type: ignore[misc]

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MetricsRecord(accuracy=1.5)

    def test_is_complete(self) -> None:
        full = MetricsRecord(accuracy=1.0, precision=1.0, recall=1.0, f1=1.0)
        partial = MetricsRecord(accuracy=1.0, recall=0.0)
        assert full.is_complete
        assert not partial.is_complete


class TestConfusionMatrix:
    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError, match="false_positives"):
            ConfusionMatrix(
                true_positives=1,
                false_positives=-1,
                true_negatives=0,
                false_negatives=0,
            )

    def test_ratios(self) -> None:
        cm = ConfusionMatrix(
            true_positives=3,
            false_positives=1,
            true_negatives=4,
            false_negatives=2,
        )
        assert cm.total == 10
        assert cm.accuracy == 0.7
        assert cm.precision == 0.75
        assert cm.recall == 0.6
        assert cm.f1_score == pytest.approx(2 * 0.75 * 0.6 / 1.35)

    def test_undefined_ratios_are_none(self) -> None:
        cm = ConfusionMatrix(
            true_positives=0,
            false_positives=0,
            true_negatives=5,
            false_negatives=0,
        )
        metrics = cm.to_metrics()
        assert metrics.accuracy == 1.0
        assert metrics.precision is None
        assert metrics.recall is None
        assert metrics.f1 is None

    def test_empty_matrix(self) -> None:
        cm = ConfusionMatrix(0, 0, 0, 0)
        assert cm.accuracy is None


class TestFoldAssignment:
    def test_ids_out_of_range(self) -> None:
        with pytest.raises(ValueError, match=r"\[1, 2\]"):
            FoldAssignment(
                fold_ids=np.array([1, 2, 3]), n_folds=2, seed=0
            )

    def test_fold_sizes_and_mask(self) -> None:
        assignment = FoldAssignment(
            fold_ids=np.array([2, 1, 2, 3, 1]), n_folds=3, seed=0
        )
        np.testing.assert_array_equal(assignment.fold_sizes(), [2, 2, 1])
        np.testing.assert_array_equal(
            assignment.held_out_mask(2), [True, False, True, False, False]
        )
        assert assignment.n_rows == 5


class TestRocCurve:
    def test_shape_mismatch(self) -> None:
        with pytest.raises(ValueError, match="same shape"):
            RocCurve(
                false_positive_rate=np.zeros(3),
                true_positive_rate=np.zeros(4),
                auc=0.5,
            )
