"""
Response normalization.

A response column is resolved once into a ResponseEncoder, which fixes
how every subset of that column (the full table, a training fold, a
held-out fold) maps to 0/1. Resolving once keeps the encoding of a fold
consistent with the encoding used to fit the model, even when the fold
happens to contain a single class.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any, cast

import numpy as np
import pandas as pd
from numpy.typing import NDArray
from pandas.api.types import (
    CategoricalDtype,
    infer_dtype,
    is_bool_dtype,
    is_complex_dtype,
    is_numeric_dtype,
    is_string_dtype,
)

from logistic_analysis.exceptions import (
    DegenerateLabelSetError,
    InvalidBaselineError,
    InvalidResponseValuesError,
    UnsupportedResponseTypeError,
)

logger = logging.getLogger(__name__)

_NUMERIC_INFERRED = {"integer", "floating", "mixed-integer-float", "decimal"}
_TEXT_INFERRED = {"string"}
_BOOLEAN_INFERRED = {"boolean"}


class ResponseKind(str, Enum):
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    CATEGORICAL = "categorical"


def _classify(values: pd.Series) -> ResponseKind:
    dtype = values.dtype
    if isinstance(dtype, CategoricalDtype):
        return ResponseKind.CATEGORICAL
    if is_bool_dtype(dtype):
        return ResponseKind.BOOLEAN
    if is_complex_dtype(dtype):
        raise UnsupportedResponseTypeError(dtype)
    if is_numeric_dtype(dtype):
        return ResponseKind.NUMERIC

    if dtype == object or is_string_dtype(dtype):
        inferred = infer_dtype(values, skipna=True)
        if inferred in _TEXT_INFERRED:
            return ResponseKind.CATEGORICAL
        if inferred in _BOOLEAN_INFERRED:
            return ResponseKind.BOOLEAN
        if inferred in _NUMERIC_INFERRED:
            return ResponseKind.NUMERIC

    raise UnsupportedResponseTypeError(dtype)


@dataclass(frozen=True)
class ResponseEncoder:
    """
    Resolved encoding of a binary response column.

    Attributes:
        name: Name of the response column.
        kind: How raw values are interpreted.
        levels: For categorical responses, (level encoded 0, level encoded 1).
            None for numeric and boolean responses.
    """

    name: Hashable
    kind: ResponseKind
    levels: tuple[Any, Any] | None = None

    def __post_init__(self) -> None:
        if self.kind == ResponseKind.CATEGORICAL:
            if self.levels is None or len(self.levels) != 2:
                raise InvalidResponseValuesError(
                    f"Categorical response '{self.name}' needs exactly 2 "
                    f"levels, got {self.levels}"
                )
        elif self.levels is not None:
            raise ValueError(
                "levels are only valid for categorical responses"
            )

    @property
    def baseline(self) -> Any:
        """The raw value encoded as 0."""
        if self.kind == ResponseKind.CATEGORICAL:
            return cast(tuple[Any, Any], self.levels)[0]
        if self.kind == ResponseKind.BOOLEAN:
            return False
        return 0

    def encode(self, values: pd.Series | Any) -> NDArray[np.int64]:
        """
        Encode raw response values as a 0/1 integer array.

        Raises:
            InvalidResponseValuesError: If a value is missing or has no
                0/1 meaning under this encoding.
        """
        series = values if isinstance(values, pd.Series) else pd.Series(values)
        if series.isna().any():
            raise InvalidResponseValuesError(
                f"Response '{self.name}' contains missing values"
            )

        match self.kind:
            case ResponseKind.NUMERIC:
                numeric = series.to_numpy(dtype=np.float64)
                invalid = ~np.isin(numeric, (0.0, 1.0))
                if invalid.any():
                    bad = sorted(set(numeric[invalid].tolist()))
                    raise InvalidResponseValuesError(
                        f"Numeric response '{self.name}' must be coded 0/1, "
                        f"found {bad}"
                    )
                return numeric.astype(np.int64)
            case ResponseKind.BOOLEAN:
                flags = series.to_numpy()
                invalid = ~np.isin(flags, (True, False))
                if invalid.any():
                    raise InvalidResponseValuesError(
                        f"Boolean response '{self.name}' has non-boolean "
                        f"values {sorted(set(flags[invalid].tolist()))}"
                    )
                return flags.astype(bool).astype(np.int64)
            case ResponseKind.CATEGORICAL:
                low, high = cast(tuple[Any, Any], self.levels)
                mapping = {low: 0, high: 1}
                raw = series.astype(object).tolist()
                unknown = sorted({str(v) for v in raw if v not in mapping})
                if unknown:
                    raise InvalidResponseValuesError(
                        f"Response '{self.name}' has values outside "
                        f"{[low, high]}: {unknown}"
                    )
                return np.array([mapping[v] for v in raw], dtype=np.int64)


def _categorical_levels(values: pd.Series) -> list[Any]:
    """Level order: declared order for pandas categoricals, else sorted."""
    if isinstance(values.dtype, CategoricalDtype):
        trimmed = values.cat.remove_unused_categories()
        return list(trimmed.cat.categories)
    return sorted(values.dropna().unique().tolist())


def resolve_response(
    values: pd.Series,
    baseline: Any = None,
) -> ResponseEncoder:
    """
    Resolve a response column into its 0/1 encoding.

    Text and categorical responses become a two-level categorical. With a
    baseline, that level is encoded 0; without one, the first level is.
    Numeric and boolean responses are used as they are and the baseline
    does not change them.

    Args:
        values: The full response column.
        baseline: Optional response value to encode as 0.

    Returns:
        The resolved ResponseEncoder.

    Raises:
        UnsupportedResponseTypeError: If the column is not numeric, boolean,
            text or categorical.
        InvalidResponseValuesError: If a categorical response does not have
            exactly two levels.
        DegenerateLabelSetError: If a categorical response has one level.
        InvalidBaselineError: If the baseline is not one of the levels.
    """
    kind = _classify(values)

    if kind != ResponseKind.CATEGORICAL:
        encoder = ResponseEncoder(name=values.name, kind=kind)
        if baseline is not None and baseline != encoder.baseline:
            logger.warning(
                f"Baseline {baseline!r} ignored for {kind.value} response "
                f"'{values.name}'; {encoder.baseline!r} is encoded as 0"
            )
        return encoder

    levels = _categorical_levels(values)
    if len(levels) == 1:
        raise DegenerateLabelSetError(n_positive=0, n_negative=len(values))
    if len(levels) != 2:
        raise InvalidResponseValuesError(
            f"Response '{values.name}' must have exactly 2 levels, "
            f"got {len(levels)}: {levels}"
        )

    if baseline is not None:
        if baseline not in levels:
            raise InvalidBaselineError(baseline, levels)
        levels.remove(baseline)
        levels.insert(0, baseline)

    return ResponseEncoder(
        name=values.name,
        kind=kind,
        levels=(levels[0], levels[1]),
    )


def normalize_response(
    values: pd.Series,
    baseline: Any = None,
) -> NDArray[np.int64]:
    """Resolve and encode a response column in one step."""
    return resolve_response(values, baseline).encode(values)
