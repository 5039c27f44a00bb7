"""
Binomial GLM fitting with automatic categorical handling.

Wraps the statsmodels formula interface: text predictors become pandas
categoricals, the response is normalized to 0/1 and the model is fit with
a Binomial family (logit link) by IRLS.
"""

import logging
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
import statsmodels.api as sm  # type: ignore[import-untyped]
import statsmodels.formula.api as smf  # type: ignore[import-untyped]
from numpy.typing import NDArray
from pandas.api.types import CategoricalDtype, infer_dtype

from logistic_analysis.exceptions import UnseenCategoryError
from logistic_analysis.modeling.formula import ModelFormula, parse_formula
from logistic_analysis.modeling.response import (
    ResponseEncoder,
    resolve_response,
)

logger = logging.getLogger(__name__)


def _is_text_column(values: pd.Series) -> bool:
    if isinstance(values.dtype, CategoricalDtype):
        return False
    return infer_dtype(values, skipna=True) == "string"


def _text_levels(
    data: pd.DataFrame, predictors: Sequence[Hashable]
) -> dict[Hashable, tuple[Any, ...]]:
    """Sorted levels of the text columns among ``predictors``."""
    return {
        column: tuple(sorted(data[column].dropna().unique().tolist()))
        for column in predictors
        if _is_text_column(data[column])
    }


def _apply_levels(
    data: pd.DataFrame,
    levels: Mapping[Hashable, tuple[Any, ...]],
) -> pd.DataFrame:
    """Convert text columns to categoricals with fixed levels.

    Raises:
        UnseenCategoryError: If a column holds values outside its levels.
    """
    df = data.copy()
    for column, column_levels in levels.items():
        if column not in df.columns:
            continue
        present = set(df[column].dropna().unique().tolist())
        unseen = present - set(column_levels)
        if unseen:
            raise UnseenCategoryError(str(column), sorted(unseen))
        df[column] = pd.Categorical(df[column], categories=column_levels)
    return df


@dataclass(frozen=True)
class FittedLogisticModel:
    """
    A fitted binomial GLM.

    Attributes:
        formula: The formula the model was fit with, ``.`` expanded.
        response_encoder: Encoding of the response used for fitting.
        results: The statsmodels GLMResults object.
        predictor_levels: Levels of the text predictor columns at fit time.
    """

    formula: ModelFormula
    response_encoder: ResponseEncoder
    results: Any = field(repr=False)
    predictor_levels: Mapping[Hashable, tuple[Any, ...]] = field(
        default_factory=dict
    )

    @property
    def params(self) -> pd.Series:
        """Coefficient estimates, indexed by design column name."""
        params: pd.Series = self.results.params
        return params

    @property
    def n_observations(self) -> int:
        return int(self.results.nobs)

    @property
    def converged(self) -> bool:
        return bool(self.results.converged)

    def fitted_probabilities(self) -> NDArray[np.float64]:
        """P(response = 1) for the training rows, in their original order."""
        return np.asarray(self.results.fittedvalues, dtype=np.float64)

    def predict(self, new_data: pd.DataFrame) -> NDArray[np.float64]:
        """
        Predict P(response = 1) for new rows.

        Raises:
            UnseenCategoryError: If a text column holds a level that was
                not present when the model was fit.
        """
        prepared = _apply_levels(new_data, self.predictor_levels)
        predictions = self.results.predict(prepared)
        return np.asarray(predictions, dtype=np.float64)

    def summary(self) -> Any:
        """The statsmodels summary table."""
        return self.results.summary()


def fit_logistic(
    data: pd.DataFrame,
    formula: str | ModelFormula,
    baseline: Any = None,
    response_encoder: ResponseEncoder | None = None,
) -> FittedLogisticModel:
    """
    Fit a logistic regression with automatic factor handling.

    Text predictor columns are converted to categoricals, and columns the
    formula does not reference are left untouched. The response is coded
    0/1 with ``baseline`` (or the first level) as 0.

    Args:
        data: Table holding the response and predictors.
        formula: Formula such as ``"y ~ x1 + x2"`` or ``"y ~ ."``.
        baseline: Optional response level to encode as 0.
        response_encoder: Pre-resolved response encoding. Cross-validation
            passes the encoding of the full table so every fold agrees.

    Returns:
        FittedLogisticModel wrapping the statsmodels results.

    Raises:
        FormulaError, MissingColumnError: For a malformed formula.
        UnsupportedResponseTypeError, InvalidResponseValuesError,
        InvalidBaselineError: For a response that cannot be coded 0/1.
    """
    resolved = parse_formula(formula).expand(list(data.columns))
    response = resolved.response

    encoder = response_encoder or resolve_response(data[response], baseline)
    levels = _text_levels(data, resolved.predictor_columns(data.columns))

    df = _apply_levels(data, levels)
    df[response] = encoder.encode(data[response])

    logger.debug(
        f"Fitting binomial GLM '{resolved}' on {len(df)} rows "
        f"(baseline={encoder.baseline!r})"
    )
    model = smf.glm(
        resolved.to_patsy(),
        data=df,
        family=sm.families.Binomial(),
        missing="raise",
    )
    results = model.fit()

    return FittedLogisticModel(
        formula=resolved,
        response_encoder=encoder,
        results=results,
        predictor_levels=levels,
    )
