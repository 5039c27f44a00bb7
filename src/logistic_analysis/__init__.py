"""
Logistic regression fitting, evaluation and diagnostics for tabular data.
"""

import logging
import sys

# Console output for every logger without its own handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.DEBUG)
console_handler.setFormatter(
    logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
)

# Package loggers (logging.getLogger(__name__)) propagate to the root
root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
root_logger.addHandler(console_handler)

# Plotting and formula backends log below WARNING on every figure and fit
for _name in ("matplotlib", "PIL", "patsy"):
    logging.getLogger(_name).setLevel(logging.WARNING)
