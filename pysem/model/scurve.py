# pysem/model/scurve.py

"""
Forced logistic (S-curve) share trajectories.

A plain logistic ``A + (B - A) * sigma(t)`` is fixed by its steepness ``k``
and midpoint ``t0``; the asymptotes ``A`` and ``B`` are solved so that the
curve passes exactly through ``(base_year, start_val)`` and
``(target_year, target_val)``. Past the target year the share is held at
``target_val``.
"""

import logging
import math

from ..constants import (
    MAX_EXPONENT,
    MIN_SHARE_CHANGE,
    MIN_SIGMA_SPAN,
    MIN_STEEPNESS,
    MIN_YEAR_SPAN,
)

logger = logging.getLogger(__name__)


def sigmoid(t: float, k: float, t0: float) -> float:
    """
    Logistic ``1 / (1 + exp(-k (t - t0)))``.

    A steepness below ``MIN_STEEPNESS`` degenerates to a unit step at ``t0``
    (0 before, 0.5 at, 1 after). The exponent is clamped to +/-700.
    """
    if abs(k) < MIN_STEEPNESS:
        if t < t0:
            return 0.0
        if t > t0:
            return 1.0
        return 0.5

    exponent = -k * (t - t0)
    if exponent > MAX_EXPONENT:
        return 0.0
    if exponent < -MAX_EXPONENT:
        return 1.0
    return 1.0 / (1.0 + math.exp(exponent))


def forced_logistic_share(year: float, k: float, t0: float, base_year: float,
                          start_val: float, target_year: float,
                          target_val: float) -> float:
    """
    Share in ``year`` on the logistic through both anchor points.

    Parameters
    ----------
    year : float
        Year to evaluate.
    k : float
        Steepness of the logistic.
    t0 : float
        Midpoint year of the logistic.
    base_year : float
        Year of the first anchor.
    start_val : float
        Share at ``base_year``.
    target_year : float
        Year of the second anchor.
    target_val : float
        Share at ``target_year``.

    Returns
    -------
    float
        ``start_val`` for degenerate inputs (NaN input, ``k`` ~ 0, flat curve,
        ``target_year`` ~ ``base_year``); ``target_val`` for any year past
        ``target_year``; otherwise the curve value clamped into the range
        spanned by the two anchors.

    Examples
    --------
    >>> forced_logistic_share(2023, 0.2, 2037, 2023, 30, 2050, 100)
    30.0
    >>> forced_logistic_share(2055, 0.2, 2037, 2023, 30, 2050, 100)
    100
    """
    inputs = (year, k, t0, base_year, start_val, target_year, target_val)
    if any(_is_nan(v) for v in inputs):
        logger.warning(
            f"NaN in s-curve inputs (year={year}, k={k}, t0={t0}, "
            f"base_year={base_year}, start={start_val}, target_year={target_year}, "
            f"target={target_val}); keeping start value"
        )
        return start_val
    if abs(k) < MIN_STEEPNESS:
        return start_val
    if abs(target_val - start_val) < MIN_SHARE_CHANGE:
        return start_val
    if abs(target_year - base_year) < MIN_YEAR_SPAN:
        return start_val

    sigma_s = sigmoid(base_year, k, t0)
    sigma_t = sigmoid(target_year, k, t0)
    span = sigma_t - sigma_s

    if abs(span) < MIN_SIGMA_SPAN:
        logger.debug(
            f"Logistic flat between {base_year} and {target_year} "
            f"(k={k}, t0={t0}); interpolating linearly"
        )
        if year <= base_year:
            return start_val
        if year >= target_year:
            return target_val
        fraction = (year - base_year) / (target_year - base_year)
        return start_val + fraction * (target_val - start_val)

    lower_asymptote = (start_val * sigma_t - target_val * sigma_s) / span
    upper_asymptote = (target_val * (1.0 - sigma_s) - start_val * (1.0 - sigma_t)) / span
    value = lower_asymptote + (upper_asymptote - lower_asymptote) * sigmoid(year, k, t0)

    if year > target_year:
        return target_val
    return min(max(value, min(start_val, target_val)), max(start_val, target_val))


def _is_nan(value) -> bool:
    try:
        return math.isnan(value)
    except TypeError:
        return True
