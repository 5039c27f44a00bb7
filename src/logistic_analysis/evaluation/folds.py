"""
Cross-validation fold assignment.
"""

import numpy as np

from logistic_analysis.core.constants import DEFAULT_SEED
from logistic_analysis.core.utils import get_rng
from logistic_analysis.evaluation.data_models import FoldAssignment
from logistic_analysis.exceptions import InvalidFoldCountError


def validate_fold_count(n_rows: int, n_folds: int) -> None:
    """
    Raises:
        InvalidFoldCountError: If n_folds < 2 or n_folds > n_rows.
    """
    if n_folds < 2 or n_folds > n_rows:
        raise InvalidFoldCountError(n_folds, n_rows)


def assign_folds(
    n_rows: int,
    n_folds: int,
    seed: int = DEFAULT_SEED,
) -> FoldAssignment:
    """
    Randomly partition rows into folds whose sizes differ by at most one.

    Fold ids 1..n_folds are repeated to cover every row, then the whole
    block is permuted. The result depends only on the arguments.

    Args:
        n_rows: Number of rows to assign.
        n_folds: Number of folds.
        seed: Random seed.

    Returns:
        FoldAssignment for the rows.

    Raises:
        InvalidFoldCountError: If n_folds < 2 or n_folds > n_rows.
    """
    validate_fold_count(n_rows, n_folds)

    repeated = np.resize(np.arange(1, n_folds + 1, dtype=np.int64), n_rows)
    rng = get_rng(seed)
    fold_ids = rng.permutation(repeated)

    return FoldAssignment(fold_ids=fold_ids, n_folds=n_folds, seed=seed)
