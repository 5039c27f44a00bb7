"""
Exceptions raised by the logistic analysis package.
"""

from collections.abc import Sequence
from typing import Any


class LogisticAnalysisError(Exception):
    pass


class FormulaError(LogisticAnalysisError):
    def __init__(self, formula: str, reason: str) -> None:
        self.formula = formula
        self.reason = reason
        super().__init__(f"Invalid formula '{formula}': {reason}")


class MissingColumnError(LogisticAnalysisError):
    def __init__(self, column: str, available: Sequence[str]) -> None:
        self.column = column
        self.available = tuple(available)
        super().__init__(
            f"Column not found: '{column}'. Available columns: {list(available)}"
        )


class UnsupportedResponseTypeError(LogisticAnalysisError):
    def __init__(self, dtype: Any) -> None:
        self.dtype = dtype
        super().__init__(
            f"Response must be numeric, boolean or categorical, got {dtype}"
        )


class InvalidResponseValuesError(LogisticAnalysisError):
    pass


class InvalidBaselineError(LogisticAnalysisError):
    def __init__(self, baseline: Any, levels: Sequence[Any]) -> None:
        self.baseline = baseline
        self.levels = tuple(levels)
        super().__init__(
            f"Baseline {baseline!r} is not a level of the response: "
            f"{list(levels)}"
        )


class DegenerateLabelSetError(LogisticAnalysisError):
    """Only one class is present where both are required."""

    def __init__(self, n_positive: int, n_negative: int) -> None:
        self.n_positive = n_positive
        self.n_negative = n_negative
        super().__init__(
            "Both classes are required, got "
            f"{n_positive} positives and {n_negative} negatives"
        )


class InvalidFoldCountError(LogisticAnalysisError):
    def __init__(self, n_folds: int, n_rows: int) -> None:
        self.n_folds = n_folds
        self.n_rows = n_rows
        super().__init__(
            f"n_folds must be in [2, {n_rows}] for {n_rows} rows, got {n_folds}"
        )


class UnseenCategoryError(LogisticAnalysisError):
    def __init__(self, column: str, unseen: Sequence[Any]) -> None:
        self.column = column
        self.unseen = tuple(unseen)
        super().__init__(
            f"Column '{column}' has levels not seen during fitting: "
            f"{list(unseen)}"
        )
