# pysem/constants.py

"""
Constants shared by the projection engine.

This module defines numeric tolerances, the fixed activity-growth phase
boundary, default coefficients and the carrier names the cascade treats
specially.
"""

import math

# Tolerance for floating point comparisons of share sums
TOL = 1e-6

# Shares are percentages of a category budget
FULL_SHARE = 100.0

# Activity growth: p1 applies up to and including this year, p2 afterwards
GROWTH_PHASE_SPLIT_YEAR = 2035

# Useful-energy efficiency when no tech, subsector or fuel value exists
DEFAULT_EFFICIENCY = 0.65

# Forced logistic guards
MIN_STEEPNESS = 1e-9
MAX_EXPONENT = 700.0
MIN_SIGMA_SPAN = 1e-9
MIN_SHARE_CHANGE = 0.01
MIN_YEAR_SPAN = 0.1

# Target share that makes an s-curve technology displace its whole category
DOMINANT_SHARE_TOL = 1e-3

# Transformed carriers
HYDROGEN = "Hydrogen"
ELECTRICITY = "Electricity"

# Allocation category types
DEMAND = "Demand"
POWER = "Power"
HYDROGEN_CATEGORY = "Hydrogen"

# Unit conversion for display
GJ_PER_EJ = 1e9

# Energy flows smaller than this are left out of flow tables
FLOW_THRESHOLD = 0.001


def is_missing(value) -> bool:
    """True for None and NaN."""
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return False


def growth_phase(year: int, split_year: int = GROWTH_PHASE_SPLIT_YEAR) -> str:
    return "p1" if year <= split_year else "p2"
