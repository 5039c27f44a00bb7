"""
CSV loading utilities for row tables.
"""

from pathlib import Path

import pandas as pd

TRUE_LITERALS = ["TRUE", "True", "true"]
FALSE_LITERALS = ["FALSE", "False", "false"]


def load_csv_to_frame(path: Path) -> pd.DataFrame:
    """Load a CSV file into a DataFrame suitable for model fitting.

    Columns holding only TRUE/FALSE literals are parsed as booleans so
    that logical responses survive the round trip.

    Raises:
        ValueError: If the file has no rows or no columns.
    """
    df = pd.read_csv(
        path, true_values=TRUE_LITERALS, false_values=FALSE_LITERALS
    )

    if df.shape[1] == 0:
        raise ValueError(f"CSV has no columns: {path}")
    if df.shape[0] == 0:
        raise ValueError(f"CSV has no rows: {path}")

    return df
