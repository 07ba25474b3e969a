# pysem/interfaces/parameters.py

"""
Scenario parameter definitions for one projection run.

This module defines immutable dataclasses for the two parameter groups the
engine accepts:

- activityGrowthFactors: multiplicative year-over-year growth per subsector
- techBehaviorsAndParams: how each technology's share evolves in its
  allocation category (fixed, decline or s-curve)

Behaviours are a tagged variant: the Behavior enum names the tag and one
frozen dataclass per tag carries the associated data. The allocator switches
on ``spec.behavior``.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Union

from ..constants import (
    DEMAND,
    GROWTH_PHASE_SPLIT_YEAR,
    HYDROGEN_CATEGORY,
    POWER,
    growth_phase,
    is_missing,
)
from .utilities import category_key, param_key, subsector_key

logger = logging.getLogger(__name__)


# =============================================================================
# Activity growth
# =============================================================================

@dataclass(frozen=True)
class GrowthFactors:
    """
    Multiplicative growth factors of one subsector.

    Attributes
    ----------
    p1 : float
        Year-over-year factor for years up to and including ``split_year``.
    p2 : float
        Year-over-year factor after ``split_year``.
    split_year : int
        Phase boundary (default: 2035).
    """
    p1: float = 1.0
    p2: float = 1.0
    split_year: int = GROWTH_PHASE_SPLIT_YEAR

    def factor_for(self, year: int) -> float:
        """Growth factor applied when advancing from ``year - 1`` to ``year``."""
        value = self.p1 if growth_phase(year, self.split_year) == "p1" else self.p2
        if is_missing(value):
            logger.warning(f"Growth factor for {year} is NaN; using 1.0")
            return 1.0
        return value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GrowthFactors':
        """Build from ``{p1, p2[, splitYear]}``; missing factors default to 1.0."""
        split = data.get('splitYear', data.get('split_year'))
        return cls(
            p1=_as_float(data.get('p1'), 1.0),
            p2=_as_float(data.get('p2'), 1.0),
            split_year=GROWTH_PHASE_SPLIT_YEAR if split is None else int(split),
        )


# =============================================================================
# Technology behaviours
# =============================================================================

class Behavior(str, Enum):
    """Share behaviour tags of ``techBehaviorsAndParams`` entries."""
    FIXED = "fixed"
    DECLINE = "decline"
    S_CURVE = "s-curve"


@dataclass(frozen=True)
class FixedBehavior:
    """Keep the base-year share, scaled only by normalisation."""
    behavior: Behavior = field(default=Behavior.FIXED, init=False)


@dataclass(frozen=True)
class DeclineBehavior:
    """Base-year share, filled only after s-curve and fixed allocations."""
    behavior: Behavior = field(default=Behavior.DECLINE, init=False)


@dataclass(frozen=True)
class SCurveBehavior:
    """
    Share follows the forced logistic curve.

    Attributes
    ----------
    target_share : float
        Share (0-100) reached in ``target_year``.
    target_year : float
    k_value : float
        Logistic steepness.
    midpoint_year : float
        Logistic midpoint ``t0``.
    """
    target_share: float
    target_year: float
    k_value: float
    midpoint_year: float
    behavior: Behavior = field(default=Behavior.S_CURVE, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'behavior': self.behavior.value,
            'targetShare': self.target_share,
            'targetYear': self.target_year,
            'kValue': self.k_value,
            'midpointYear': self.midpoint_year,
        }


BehaviorSpec = Union[FixedBehavior, DeclineBehavior, SCurveBehavior]


def parse_behavior(raw: Any) -> BehaviorSpec:
    """
    Convert a raw ``{behavior: ...}`` mapping into a behaviour variant.

    Parameters
    ----------
    raw : dict, BehaviorSpec or None
        E.g. ``{'behavior': 's-curve', 'targetShare': 80, 'targetYear': 2050,
        'kValue': 0.2, 'midpointYear': 2037}``.

    Returns
    -------
    BehaviorSpec
        ``FixedBehavior`` when the tag is absent or unknown. Missing s-curve
        numbers become NaN, which the solver answers with the base-year share.
    """
    if isinstance(raw, (FixedBehavior, DeclineBehavior, SCurveBehavior)):
        return raw
    if not isinstance(raw, Mapping):
        return FixedBehavior()

    tag = raw.get('behavior')
    if tag == Behavior.DECLINE.value:
        return DeclineBehavior()
    if tag == Behavior.S_CURVE.value:
        return SCurveBehavior(
            target_share=_as_float(_pick(raw, 'targetShare', 'target_share'), math.nan),
            target_year=_as_float(_pick(raw, 'targetYear', 'target_year'), math.nan),
            k_value=_as_float(_pick(raw, 'kValue', 'k_value'), math.nan),
            midpoint_year=_as_float(_pick(raw, 'midpointYear', 'midpoint_year'), math.nan),
        )
    if tag not in (None, Behavior.FIXED.value):
        logger.warning(f"Unknown behaviour '{tag}'; treating as fixed")
    return FixedBehavior()


# =============================================================================
# ScenarioParameters
# =============================================================================

@dataclass(frozen=True)
class ScenarioParameters:
    """
    Scenario parameters of one projection run.

    Attributes
    ----------
    activity_growth_factors : dict
        ``"sector|subsector" -> GrowthFactors``.
    tech_behaviors : dict
        ``"category|categoryKey|tech" -> BehaviorSpec``, e.g.
        ``"Demand|Industry|Steel|EAF"`` or ``"Power|Power|Wind"``.
    name : str
        Optional scenario name (metadata only).

    Examples
    --------
    >>> params = ScenarioParameters.from_dict({
    ...     'activityGrowthFactors': {'Industry|Steel': {'p1': 1.02, 'p2': 1.01}},
    ...     'techBehaviorsAndParams': {
    ...         'Demand|Industry|Steel|EAF': {'behavior': 'decline'},
    ...     },
    ... })
    >>> params.growth_for('Industry', 'Steel').p1
    1.02
    """
    activity_growth_factors: Dict[str, GrowthFactors] = field(default_factory=dict)
    tech_behaviors: Dict[str, BehaviorSpec] = field(default_factory=dict)
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str = "") -> 'ScenarioParameters':
        """Build from the contract shape (``activityGrowthFactors``, ``techBehaviorsAndParams``)."""
        growth = _pick(data, 'activityGrowthFactors', 'activity_growth_factors') or {}
        behaviors = _pick(data, 'techBehaviorsAndParams', 'tech_behaviors') or {}
        return cls(
            activity_growth_factors={
                key: value if isinstance(value, GrowthFactors) else GrowthFactors.from_dict(value or {})
                for key, value in growth.items()
            },
            tech_behaviors={key: parse_behavior(value) for key, value in behaviors.items()},
            name=name or data.get('name', ""),
        )

    @classmethod
    def from_dataset(cls, dataset, scenario_name: str) -> 'ScenarioParameters':
        """
        Build parameters from the dataset's scenario library.

        Every end-use subsector gets ``{p1: 1.0, p2: 1.0}`` unless the scenario
        sets its growth; every Demand, Power and Hydrogen technology gets the
        scenario's behaviour entry or ``fixed``.

        Parameters
        ----------
        dataset : StructuredDataset
            Dataset carrying ``scenarios`` and ``scenario_activity_growth``.
        scenario_name : str
            Name of the scenario to extract.

        Raises
        ------
        KeyError
            If the scenario is unknown to the dataset.
        """
        known = available_scenarios(dataset)
        if scenario_name not in known:
            raise KeyError(
                f"Unknown scenario '{scenario_name}'. Available: {known}"
            )

        scenario_growth = dataset.scenario_activity_growth.get(scenario_name) or {}
        growth_factors = {}
        for sector, subsector in dataset.all_end_use_subsectors:
            key = subsector_key(sector, subsector)
            entry = scenario_growth.get(key)
            if entry:
                # Zero or missing factors fall back to 1.0
                growth_factors[key] = GrowthFactors(
                    p1=_as_float(entry.get('p1') or 1.0, 1.0),
                    p2=_as_float(entry.get('p2') or 1.0, 1.0),
                    split_year=int(entry.get('splitYear', GROWTH_PHASE_SPLIT_YEAR)),
                )
            else:
                growth_factors[key] = GrowthFactors()

        scenario_techs = dataset.scenarios.get(scenario_name) or {}
        behaviors = {}

        def set_tech_params(category: str, techs: Iterable[str]) -> None:
            for tech in techs or []:
                key = param_key(category, tech)
                behaviors[key] = parse_behavior(scenario_techs.get(key, {'behavior': 'fixed'}))

        for sector, subsector in dataset.all_end_use_subsectors:
            set_tech_params(category_key(DEMAND, sector, subsector),
                            dataset.technologies_for(sector, subsector))
        set_tech_params(category_key(POWER), dataset.power_techs)
        set_tech_params(category_key(HYDROGEN_CATEGORY), dataset.hydrogen_techs)

        return cls(
            activity_growth_factors=growth_factors,
            tech_behaviors=behaviors,
            name=scenario_name,
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    def growth_for(self, sector: str, subsector: str) -> GrowthFactors:
        """Growth factors of a subsector; no growth when unspecified."""
        key = subsector_key(sector, subsector)
        factors = self.activity_growth_factors.get(key)
        if factors is None:
            logger.debug(f"No growth factors for '{key}'; holding activity constant")
            return GrowthFactors()
        return factors

    def behaviors_for(self, category: str, techs: Iterable[str]) -> Dict[str, BehaviorSpec]:
        """
        Resolve the behaviour of every technology in one allocation category.

        Parameters
        ----------
        category : str
            Category identifier, e.g. ``'Demand|Industry|Steel'``.
        techs : iterable of str
            Technologies competing in the category.

        Returns
        -------
        dict
            ``tech -> BehaviorSpec``; absent entries default to fixed; raw
            mappings are parsed on the way out.
        """
        return {
            tech: parse_behavior(self.tech_behaviors.get(param_key(category, tech)))
            for tech in techs
        }

    def to_dict(self) -> Dict[str, Any]:
        """Return the contract representation."""
        behaviors = {}
        for key, raw in self.tech_behaviors.items():
            spec = parse_behavior(raw)
            if isinstance(spec, SCurveBehavior):
                behaviors[key] = spec.to_dict()
            else:
                behaviors[key] = {'behavior': spec.behavior.value}
        return {
            'activityGrowthFactors': {
                key: {'p1': g.p1, 'p2': g.p2, 'splitYear': g.split_year}
                for key, g in self.activity_growth_factors.items()
            },
            'techBehaviorsAndParams': behaviors,
        }


def available_scenarios(dataset) -> List[str]:
    """Scenario names known to the dataset's scenario library."""
    names = list(dataset.scenarios.keys())
    for name in dataset.scenario_activity_growth.keys():
        if name not in names:
            names.append(name)
    return names


# =============================================================================
# Helpers
# =============================================================================

def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _as_float(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning(f"Non-numeric parameter value {value!r}; using {default}")
        return default
