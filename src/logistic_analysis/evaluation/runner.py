"""
Evaluation runner for logistic model specifications.

Both entry points support in-sample scoring (fit and score on the full
table) and k-fold cross-validation (fit on k-1 folds, score the held-out
fold). Cross-validated metrics are averaged across folds; cross-validated
AUC is computed once from the pooled out-of-fold predictions.
"""

import logging
from collections.abc import Iterator
from typing import Any

import numpy as np
import pandas as pd

from logistic_analysis.core.constants import (
    DEFAULT_CUTOFF,
    DEFAULT_FOLDS,
    DEFAULT_SEED,
)
from logistic_analysis.evaluation.data_models import (
    EvaluationMode,
    FoldPrediction,
    MetricsRecord,
    RocAucResult,
    parse_mode,
)
from logistic_analysis.evaluation.folds import (
    assign_folds,
    validate_fold_count,
)
from logistic_analysis.evaluation.metrics import (
    average_metrics,
    compute_classification_metrics,
)
from logistic_analysis.evaluation.roc import (
    check_both_classes,
    compute_roc_curve,
)
from logistic_analysis.modeling.fitting import fit_logistic
from logistic_analysis.modeling.formula import ModelFormula, parse_formula
from logistic_analysis.modeling.response import (
    ResponseEncoder,
    resolve_response,
)

logger = logging.getLogger(__name__)


def _resolve_inputs(
    formula: str | ModelFormula,
    data: pd.DataFrame,
    baseline: Any,
) -> tuple[ModelFormula, ResponseEncoder]:
    """Expand the formula and encode the full response.

    Raises:
        DegenerateLabelSetError: If the full response has a single class.
    """
    resolved = parse_formula(formula).expand(list(data.columns))
    encoder = resolve_response(data[resolved.response], baseline)
    check_both_classes(encoder.encode(data[resolved.response]))
    return resolved, encoder


def _in_sample_predictions(
    formula: ModelFormula,
    data: pd.DataFrame,
    encoder: ResponseEncoder,
) -> tuple[np.ndarray, np.ndarray]:
    model = fit_logistic(data, formula, response_encoder=encoder)
    y_true = encoder.encode(data[formula.response])
    return y_true, model.fitted_probabilities()


def _fold_predictions(
    formula: ModelFormula,
    data: pd.DataFrame,
    encoder: ResponseEncoder,
    n_folds: int,
    seed: int,
) -> Iterator[FoldPrediction]:
    assignment = assign_folds(len(data), n_folds, seed)
    logger.info(
        f"Cross-validating '{formula}' with {n_folds} folds "
        f"(sizes {assignment.fold_sizes().tolist()}, seed={seed})"
    )

    for fold_id in range(1, n_folds + 1):
        held_out = assignment.held_out_mask(fold_id)
        train_data = data.iloc[~held_out]
        test_data = data.iloc[held_out]

        logger.debug(
            f"Fold {fold_id}/{n_folds}: fitting on {len(train_data)} rows, "
            f"scoring {len(test_data)}"
        )
        model = fit_logistic(train_data, formula, response_encoder=encoder)

        yield FoldPrediction(
            fold_id=fold_id,
            row_positions=np.flatnonzero(held_out).astype(np.int64),
            y_true=encoder.encode(test_data[formula.response]),
            y_prob=model.predict(test_data),
        )


def cross_validated_predictions(
    formula: str | ModelFormula,
    data: pd.DataFrame,
    n_folds: int = DEFAULT_FOLDS,
    baseline: Any = None,
    seed: int = DEFAULT_SEED,
) -> Iterator[FoldPrediction]:
    """
    Out-of-fold predictions, one FoldPrediction per fold in fold-id order.

    Args:
        formula: Model formula, e.g. ``"y ~ x1 + x2"``.
        data: Table holding the response and predictors.
        n_folds: Number of folds, between 2 and the number of rows.
        baseline: Optional response level to encode as 0.
        seed: Seed for the fold assignment.

    Yields:
        FoldPrediction for each fold.

    Raises:
        InvalidFoldCountError: If n_folds is out of range.
    """
    validate_fold_count(len(data), n_folds)
    resolved = parse_formula(formula).expand(list(data.columns))
    encoder = resolve_response(data[resolved.response], baseline)
    yield from _fold_predictions(resolved, data, encoder, n_folds, seed)


def evaluate(
    formula: str | ModelFormula,
    data: pd.DataFrame,
    mode: str | EvaluationMode = EvaluationMode.IN_SAMPLE,
    folds: int = DEFAULT_FOLDS,
    cutoff: float = DEFAULT_CUTOFF,
    baseline: Any = None,
    seed: int = DEFAULT_SEED,
) -> MetricsRecord:
    """
    Evaluate a logistic model with accuracy, precision, recall and F1.

    Args:
        formula: Model formula, e.g. ``"y ~ x1 + x2"`` or ``"y ~ ."``.
        data: Table holding the response and predictors.
        mode: ``"insample"`` scores the fitted probabilities of a model
            fit on all rows; ``"cv"`` averages held-out fold metrics.
        folds: Number of folds when mode is ``"cv"``.
        cutoff: Probabilities at or above the cutoff are predicted 1.
        baseline: Optional response level to encode as 0.
        seed: Seed for the fold assignment.

    Returns:
        MetricsRecord. For ``"cv"``, each field is the mean across folds
        of its defined values.

    Raises:
        InvalidFoldCountError: If folds is out of range in ``"cv"`` mode.
        DegenerateLabelSetError: If the response has a single class.
        ValueError: For an unknown mode or a cutoff outside [0, 1].
    """
    eval_mode = parse_mode(mode)
    if not 0.0 <= cutoff <= 1.0:
        raise ValueError(f"cutoff must be in [0, 1], got {cutoff}")
    if eval_mode == EvaluationMode.CROSS_VALIDATED:
        validate_fold_count(len(data), folds)

    resolved, encoder = _resolve_inputs(formula, data, baseline)

    if eval_mode == EvaluationMode.IN_SAMPLE:
        y_true, y_prob = _in_sample_predictions(resolved, data, encoder)
        return compute_classification_metrics(y_true, y_prob, cutoff)

    per_fold = [
        compute_classification_metrics(fold.y_true, fold.y_prob, cutoff)
        for fold in _fold_predictions(resolved, data, encoder, folds, seed)
    ]
    return average_metrics(per_fold)


def roc_auc(
    formula: str | ModelFormula,
    data: pd.DataFrame,
    mode: str | EvaluationMode = EvaluationMode.IN_SAMPLE,
    folds: int = DEFAULT_FOLDS,
    baseline: Any = None,
    seed: int = DEFAULT_SEED,
) -> RocAucResult:
    """
    ROC curve and AUC of a logistic model.

    In ``"cv"`` mode the held-out predictions of all folds are pooled,
    in fold-id order, and a single curve is computed from them.

    Args:
        formula: Model formula, e.g. ``"y ~ x1 + x2"`` or ``"y ~ ."``.
        data: Table holding the response and predictors.
        mode: ``"insample"`` or ``"cv"``.
        folds: Number of folds when mode is ``"cv"``.
        baseline: Optional response level to encode as 0.
        seed: Seed for the fold assignment.

    Returns:
        RocAucResult with the curve and AUC.

    Raises:
        InvalidFoldCountError: If folds is out of range in ``"cv"`` mode.
        DegenerateLabelSetError: If the response has a single class.
        ValueError: For an unknown mode.
    """
    eval_mode = parse_mode(mode)
    if eval_mode == EvaluationMode.CROSS_VALIDATED:
        validate_fold_count(len(data), folds)

    resolved, encoder = _resolve_inputs(formula, data, baseline)

    if eval_mode == EvaluationMode.IN_SAMPLE:
        y_true, y_prob = _in_sample_predictions(resolved, data, encoder)
        return RocAucResult(
            curve=compute_roc_curve(y_true, y_prob), mode=eval_mode
        )

    fold_results = list(
        _fold_predictions(resolved, data, encoder, folds, seed)
    )
    y_true = np.concatenate([f.y_true for f in fold_results])
    y_prob = np.concatenate([f.y_prob for f in fold_results])

    return RocAucResult(
        curve=compute_roc_curve(y_true, y_prob),
        mode=eval_mode,
        n_folds=folds,
    )
