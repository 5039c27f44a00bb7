"""
Logistic model fitting.

Key components:
- ModelFormula / parse_formula: ``response ~ terms`` formulas
- ResponseEncoder / resolve_response: 0/1 coding of binary responses
- fit_logistic: binomial GLM fit with automatic categorical handling
"""

from logistic_analysis.modeling.fitting import (
    FittedLogisticModel,
    fit_logistic,
)
from logistic_analysis.modeling.formula import ModelFormula, parse_formula
from logistic_analysis.modeling.response import (
    ResponseEncoder,
    ResponseKind,
    normalize_response,
    resolve_response,
)

__all__ = [
    "FittedLogisticModel",
    "ModelFormula",
    "ResponseEncoder",
    "ResponseKind",
    "fit_logistic",
    "normalize_response",
    "parse_formula",
    "resolve_response",
]
