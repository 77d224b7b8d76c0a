"""Numeric tolerances and default part values for the circuit engine."""

# Currents and voltages below this magnitude are written back as exact zero.
EPSILON = 1e-9

# Elimination aborts when the best pivot falls under this value.
PIVOT_EPSILON = 1e-12

DEFAULT_RESISTANCE = 5.0
DEFAULT_VOLTAGE = 5.0
DEFAULT_TARGET_MARGIN = 0.1
