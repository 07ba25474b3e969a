# pysem/model/projection.py

"""
Year-by-year projection of one scenario.

For each year, in increasing order:

    activity -> technology mixes -> energy balance cascade -> YearlyResult

Activity in the base year is taken from the dataset; later years grow the
previous year's activity by the subsector's phase growth factor. Activity
never depends on the technology mix, so ``project_activity`` can compute the
whole activity series up front.
"""

import logging
from typing import Dict, Tuple

from ..constants import DEMAND, HYDROGEN_CATEGORY, POWER
from ..interfaces.dataset import StructuredDataset
from ..interfaces.parameters import ScenarioParameters
from ..interfaces.results import ProjectionResults, YearlyResult
from ..interfaces.utilities import category_key, get_number, get_value
from ..validation import require_previous_activity, validate_time_axis
from .allocation import allocate_category_mix
from .balance import compute_energy_balance

logger = logging.getLogger(__name__)

Activity = Dict[str, Dict[str, float]]


# =============================================================================
# Activity
# =============================================================================

def base_activity(dataset: StructuredDataset) -> Activity:
    """Activity of every end-use subsector in the base year."""
    activity: Activity = {}
    for sector, subsector in dataset.all_end_use_subsectors:
        activity.setdefault(sector, {})[subsector] = get_number(
            dataset.base_activity, [sector, subsector]
        )
    return activity


def grow_activity(dataset: StructuredDataset, params: ScenarioParameters,
                  previous: Activity, year: int) -> Activity:
    """
    Activity of ``year`` from the activity of ``year - 1``.

    ``activity[year] = activity[year - 1] x (p1 if year <= split else p2)``
    """
    activity: Activity = {}
    for sector, subsector in dataset.all_end_use_subsectors:
        factor = params.growth_for(sector, subsector).factor_for(year)
        activity.setdefault(sector, {})[subsector] = (
            get_number(previous, [sector, subsector]) * factor
        )
    return activity


def project_activity(dataset: StructuredDataset,
                     params: ScenarioParameters) -> Dict[int, Activity]:
    """
    Activity series of all projection years, without mixes or cascade.

    Raises
    ------
    ProjectionError
        If the time axis is missing or a year's predecessor is missing.
    """
    validate_time_axis(dataset)
    series: Dict[int, Activity] = {}
    for year in dataset.years:
        series[year] = _activity_for_year(dataset, params, series, year)
    return series


def _activity_for_year(dataset, params, computed, year: int) -> Activity:
    if year == dataset.base_year:
        return base_activity(dataset)
    previous = require_previous_activity(computed, year)
    return grow_activity(dataset, params, previous, year)


# =============================================================================
# Mixes
# =============================================================================

def allocate_mixes(dataset: StructuredDataset, params: ScenarioParameters,
                   year: int) -> Tuple[Dict, Dict[str, float], Dict[str, float]]:
    """
    Demand, power and hydrogen technology mixes of ``year``.

    Returns
    -------
    demand_mix : dict
        ``[sector][subsector][tech] -> share``.
    power_mix, hydrogen_mix : dict
        ``tech -> share``.
    """
    base_year = dataset.base_year

    demand_mix: Dict[str, Dict[str, Dict[str, float]]] = {}
    for sector, subsector in dataset.all_end_use_subsectors:
        techs = dataset.technologies_for(sector, subsector)
        category = category_key(DEMAND, sector, subsector)
        demand_mix.setdefault(sector, {})[subsector] = allocate_category_mix(
            techs,
            get_value(dataset.base_demand_tech_mix, [sector, subsector], {}),
            params.behaviors_for(category, techs),
            year, base_year, category,
        )

    power_category = category_key(POWER)
    power_mix = allocate_category_mix(
        dataset.power_techs, dataset.base_power_prod_mix,
        params.behaviors_for(power_category, dataset.power_techs),
        year, base_year, power_category,
    )

    hydrogen_category = category_key(HYDROGEN_CATEGORY)
    hydrogen_mix = allocate_category_mix(
        dataset.hydrogen_techs, dataset.base_hydrogen_prod_mix,
        params.behaviors_for(hydrogen_category, dataset.hydrogen_techs),
        year, base_year, hydrogen_category,
    )
    return demand_mix, power_mix, hydrogen_mix


# =============================================================================
# Orchestration
# =============================================================================

def compute_year(dataset: StructuredDataset, params: ScenarioParameters,
                 activity: Activity, year: int) -> YearlyResult:
    """All stages of one year, given that year's activity."""
    demand_mix, power_mix, hydrogen_mix = allocate_mixes(dataset, params, year)
    balance = compute_energy_balance(dataset, activity, demand_mix, power_mix, hydrogen_mix)
    final = balance.final

    return YearlyResult(
        activity=activity,
        demand_tech_mix=demand_mix,
        power_prod_mix=power_mix,
        hydrogen_prod_mix=hydrogen_mix,
        demand_tech_activity=balance.demand_tech_activity,
        fec_detailed=final.fec_detailed,
        ue_detailed=final.ue_detailed,
        fec_by_fuel=final.fec_by_fuel,
        ue_by_fuel=final.ue_by_fuel,
        ue_by_subsector=final.ue_by_subsector,
        ec_post_hydrogen=balance.ec_post_hydrogen,
        ec_post_power=balance.ec_post_power,
        ped_by_fuel=balance.ped_by_fuel,
        hydrogen_input_by_fuel=balance.hydrogen_input_by_fuel,
        power_input_by_fuel=balance.power_input_by_fuel,
        other_input_by_fuel=balance.other_input_by_fuel,
    )


def run_projection(dataset: StructuredDataset,
                   params: ScenarioParameters) -> ProjectionResults:
    """
    Project one scenario from the base year to the horizon year.

    Parameters
    ----------
    dataset : StructuredDataset
        Read-only input data.
    params : ScenarioParameters
        Growth factors and technology behaviours of the scenario.

    Returns
    -------
    ProjectionResults
        ``{year -> YearlyResult}`` in increasing year order.

    Raises
    ------
    ProjectionError
        If the dataset has no year sequence or start/end year, or a year's
        predecessor has no activity (e.g. a gap in ``years``).
    """
    validate_time_axis(dataset)
    logger.info(
        f"Projecting scenario '{params.name or 'unnamed'}' "
        f"{dataset.years[0]}-{dataset.years[-1]}"
    )

    results: Dict[int, YearlyResult] = {}
    for year in dataset.years:
        if year == dataset.base_year:
            activity = base_activity(dataset)
        else:
            previous = require_previous_activity(results, year)
            activity = grow_activity(dataset, params, previous, year)
        results[year] = compute_year(dataset, params, activity, year)
        logger.debug(f"Year {year} computed")

    logger.info(f"Projection complete: {len(results)} years")
    return ProjectionResults(results=results, scenario=params.name)
