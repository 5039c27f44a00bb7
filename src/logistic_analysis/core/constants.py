# Seed used for fold assignment when none is supplied
DEFAULT_SEED = 123

DEFAULT_FOLDS = 5
DEFAULT_CUTOFF = 0.5

# Fraction of points used by each local LOWESS regression
DEFAULT_LOWESS_FRAC = 0.3

# Vertical jitter applied to 0/1 responses in monotonicity plots
DEFAULT_JITTER_HEIGHT = 0.05

# Term that expands to every column other than the response
ALL_OTHER_COLUMNS = "."
