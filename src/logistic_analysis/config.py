from typing import Literal

from pydantic_settings import BaseSettings

from logistic_analysis.core.constants import (
    DEFAULT_CUTOFF,
    DEFAULT_FOLDS,
    DEFAULT_LOWESS_FRAC,
    DEFAULT_SEED,
)

LOGISTIC_ANALYSIS_ENV_PREFIX = "LOGISTIC_ANALYSIS_"


class EvaluationSettings(BaseSettings):
    model_config = {"env_prefix": LOGISTIC_ANALYSIS_ENV_PREFIX}

    mode: Literal["insample", "cv"] = "insample"
    folds: int = DEFAULT_FOLDS
    cutoff: float = DEFAULT_CUTOFF
    seed: int = DEFAULT_SEED
    lowess_frac: float = DEFAULT_LOWESS_FRAC
