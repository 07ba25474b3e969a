# pysem/model/allocation.py

"""
Technology share allocation within one category.

An allocation category is a set of technologies sharing one 100% budget:
one end-use subsector (``Demand|Industry|Steel``), the power pool
(``Power|Power``) or the hydrogen pool (``Hydrogen|Hydrogen``).

Allocation priority:
1. s-curve technologies take their forced-logistic share
2. fixed technologies keep their base shares, scaled down if they no
   longer fit in what the s-curves left
3. decline technologies absorb whatever budget remains
4. shares are renormalised to sum to exactly 100

An s-curve technology that targets 100% and has reached its target year
displaces every other technology in the category.
"""

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence

from ..constants import DOMINANT_SHARE_TOL, FULL_SHARE, TOL
from ..interfaces.parameters import Behavior, BehaviorSpec, parse_behavior
from ..interfaces.utilities import is_number
from ..validation import check_category_sum
from .scurve import forced_logistic_share

logger = logging.getLogger(__name__)


def allocate_category_mix(
    techs: Sequence[str],
    base_mix: Mapping[str, float],
    behaviors: Mapping[str, BehaviorSpec],
    year: int,
    base_year: int,
    category: str = "",
) -> Dict[str, float]:
    """
    Share of every technology of one category in ``year``.

    Parameters
    ----------
    techs : sequence of str
        Technologies competing in the category, in taxonomy order.
    base_mix : mapping
        ``tech -> base-year share`` (0-100). Missing technologies have 0.
    behaviors : mapping
        ``tech -> BehaviorSpec`` or its raw mapping. Missing technologies
        are fixed.
    year : int
        Year to allocate.
    base_year : int
        Year of the base mix (first anchor of every s-curve).
    category : str, optional
        Category identifier, used in log messages only.

    Returns
    -------
    dict
        ``tech -> share``, summing to 100 unless every share is ~0.

    Examples
    --------
    >>> allocate_category_mix(
    ...     ['A', 'B'], {'A': 70, 'B': 30},
    ...     {'B': SCurveBehavior(100, 2050, 0.2, 2037)}, 2050, 2023)
    {'A': 0.0, 'B': 100.0}
    """
    s_curve: List[str] = []
    fixed: List[str] = []
    decline: List[str] = []
    specs = {tech: parse_behavior(behaviors.get(tech)) for tech in techs}
    for tech in techs:
        spec = specs[tech]
        if spec.behavior is Behavior.S_CURVE:
            s_curve.append(tech)
        elif spec.behavior is Behavior.DECLINE:
            decline.append(tech)
        else:
            fixed.append(tech)

    shares: Dict[str, float] = {tech: 0.0 for tech in techs}

    # 1. s-curve technologies have priority
    s_curve_total = 0.0
    dominant_tech: Optional[str] = None
    for tech in s_curve:
        spec = specs[tech]
        share = forced_logistic_share(
            year, spec.k_value, spec.midpoint_year, base_year,
            _base_share(base_mix, tech), spec.target_year, spec.target_share,
        )
        shares[tech] = share
        s_curve_total += share
        if (dominant_tech is None
                and math.isclose(spec.target_share, FULL_SHARE, abs_tol=DOMINANT_SHARE_TOL)
                and year >= spec.target_year):
            dominant_tech = tech

    # 2. Full displacement overrides everything else
    if dominant_tech is not None:
        logger.debug(f"{category or 'category'} {year}: '{dominant_tech}' displaces all others")
        return {tech: (FULL_SHARE if tech == dominant_tech else 0.0) for tech in techs}

    # 3. Fixed technologies take what the s-curves left
    remaining = max(0.0, FULL_SHARE - s_curve_total)
    remaining -= _fill_budget(fixed, base_mix, remaining, shares)

    # 4. Decline technologies absorb the rest
    _fill_budget(decline, base_mix, max(0.0, remaining), shares)

    shares = _normalize(shares)
    check_category_sum(shares, f"{category or 'category'} {year}")
    return shares


def _fill_budget(techs: Sequence[str], base_mix: Mapping[str, float],
                 budget: float, shares: Dict[str, float]) -> float:
    """Scale base shares of ``techs`` into ``budget``; return the amount used."""
    base_total = sum(_base_share(base_mix, tech) for tech in techs)
    if base_total <= 0.0:
        return 0.0
    scale = min(1.0, budget / base_total)
    used = 0.0
    for tech in techs:
        share = _base_share(base_mix, tech) * scale
        shares[tech] = share
        used += share
    return used


def _normalize(shares: Dict[str, float]) -> Dict[str, float]:
    total = sum(shares.values())
    if total <= TOL:
        return shares
    return {tech: share * FULL_SHARE / total for tech, share in shares.items()}


def _base_share(base_mix: Mapping[str, float], tech: str) -> float:
    value = base_mix.get(tech, 0.0)
    if not is_number(value):
        return 0.0
    if math.isnan(value):
        logger.warning(f"NaN base share for '{tech}'; using 0")
        return 0.0
    return float(value)
