"""
Core shared constants and utilities for the logistic analysis package.
"""

from logistic_analysis.core.data import load_csv_to_frame
from logistic_analysis.core.utils import get_rng

__all__ = [
    "get_rng",
    "load_csv_to_frame",
]
