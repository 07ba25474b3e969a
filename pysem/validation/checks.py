# pysem/validation/checks.py

"""
Structural checks of a projection run.

Only violations of the year-sequencing invariant are fatal: without a year
sequence, or without the previous year's activity, the yearly recurrence is
undefined. Everything else degrades to defaults further down the engine.
"""

import logging
import math
from typing import Dict, Mapping

from ..constants import FULL_SHARE, TOL

logger = logging.getLogger(__name__)


class ProjectionError(ValueError):
    """Raised when a projection run cannot proceed."""
    pass


def validate_time_axis(dataset) -> None:
    """
    Check the dataset's time axis before the year loop starts.

    Parameters
    ----------
    dataset : StructuredDataset

    Raises
    ------
    ProjectionError
        If ``years`` is missing or empty, ``start_year`` / ``end_year`` is
        missing, or ``years`` is not strictly increasing.
    """
    if not dataset.years:
        raise ProjectionError("Dataset has no projection years")
    if dataset.start_year is None:
        raise ProjectionError("Dataset has no start year")
    if dataset.end_year is None:
        raise ProjectionError("Dataset has no end year")

    years = list(dataset.years)
    for previous, current in zip(years, years[1:]):
        if current <= previous:
            raise ProjectionError(
                f"Projection years must be strictly increasing; "
                f"found {current} after {previous}"
            )

    if years[0] != dataset.start_year or years[-1] != dataset.end_year:
        logger.warning(
            f"Year sequence {years[0]}-{years[-1]} does not match "
            f"start/end years {dataset.start_year}-{dataset.end_year}"
        )


def require_previous_activity(computed: Mapping[int, object], year: int) -> Dict[str, Dict[str, float]]:
    """
    Return the activity of ``year - 1`` from what has been computed so far.

    ``computed`` maps years to YearlyResult objects or to bare activity
    mappings.

    Raises
    ------
    ProjectionError
        If the previous year has not been computed.
    """
    previous = computed.get(year - 1)
    if isinstance(previous, Mapping):
        activity = previous
    else:
        activity = getattr(previous, 'activity', None)
    if activity is None:
        raise ProjectionError(
            f"Cannot compute activity for {year}: no activity for {year - 1}"
        )
    return activity


def check_category_sum(shares: Mapping[str, float], category: str) -> bool:
    """
    True when the shares of a category sum to 100 (or to ~0 for an empty
    category). Logs a warning otherwise.
    """
    total = sum(shares.values())
    if total <= TOL or math.isclose(total, FULL_SHARE, abs_tol=TOL):
        return True
    logger.warning(f"Shares of {category} sum to {total:.6f}, not 100")
    return False
