# pysem/model/balance.py

"""
Energy balance cascade of one projection year.

Stages, in dependency order:

1. technology activity   = mix share x subsector activity
2. FEC / UE              = tech activity x unit consumption (x efficiency)
3. hydrogen cascade      Hydrogen demand -> production technology inputs
4. power cascade         Electricity demand (incl. hydrogen plants) -> power inputs
5. other transforms      end-use fuels with conversion chains -> primary inputs
6. PED                   primary energy demand by primary fuel

Each stage reads only the outputs of earlier stages of the same year. Every
nested lookup goes through ``get_value`` / ``get_number``: a missing data
point contributes 0 instead of failing the projection.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple

from ..constants import ELECTRICITY, FULL_SHARE, HYDROGEN, is_missing
from ..interfaces.utilities import add_to, get_number, get_value, is_number

logger = logging.getLogger(__name__)

Nested = Dict[str, Dict]


@dataclass(frozen=True)
class FinalEnergy:
    """FEC and UE of the end-use sectors for one year."""
    fec_detailed: Nested
    ue_detailed: Nested
    fec_by_fuel: Dict[str, float]
    ue_by_fuel: Dict[str, float]
    ue_by_subsector: Nested


@dataclass(frozen=True)
class EnergyBalance:
    """
    Output of the full cascade for one year.

    Attributes
    ----------
    demand_tech_activity : dict
        ``[sector][subsector][tech] -> activity``.
    final : FinalEnergy
        FEC / UE detail and totals.
    hydrogen_input_by_fuel : dict
        Inputs consumed by hydrogen production.
    ec_post_hydrogen : dict
        FEC by fuel with Hydrogen replaced by its production inputs.
    power_input_by_fuel : dict
        Inputs consumed by power generation.
    ec_post_power : dict
        ``ec_post_hydrogen`` with Electricity replaced by power inputs.
    other_input_by_fuel : dict
        Primary inputs consumed by other conversion chains.
    ped_by_fuel : dict
        Primary energy demand by primary fuel.
    """
    demand_tech_activity: Nested
    final: FinalEnergy
    hydrogen_input_by_fuel: Dict[str, float]
    ec_post_hydrogen: Dict[str, float]
    power_input_by_fuel: Dict[str, float]
    ec_post_power: Dict[str, float]
    other_input_by_fuel: Dict[str, float]
    ped_by_fuel: Dict[str, float]


# =============================================================================
# 1. Technology activity
# =============================================================================

def compute_tech_activity(dataset, activity: Mapping[str, Mapping[str, float]],
                          demand_mix: Mapping[str, Mapping[str, Mapping[str, float]]]) -> Nested:
    """
    Activity carried by each end-use technology.

    ``demand_tech_activity[s][b][t] = demand_mix[s][b][t] / 100 * activity[s][b]``
    """
    tech_activity: Nested = {}
    for sector, subsector in dataset.all_end_use_subsectors:
        level = get_number(activity, [sector, subsector])
        tech_activity.setdefault(sector, {})[subsector] = {
            tech: get_number(demand_mix, [sector, subsector, tech]) / FULL_SHARE * level
            for tech in dataset.technologies_for(sector, subsector)
        }
    return tech_activity


# =============================================================================
# 2. Final and useful energy
# =============================================================================

def compute_final_energy(dataset, tech_activity: Nested) -> FinalEnergy:
    """
    FEC and UE for every technology-fuel pair with a unit consumption.

    ``fec = tech activity x unit consumption`` and ``ue = fec x efficiency``,
    where efficiency falls back tech+fuel -> tech -> subsector -> default.
    """
    fec_detailed: Nested = {}
    ue_detailed: Nested = {}
    fec_by_fuel: Dict[str, float] = {}
    ue_by_fuel: Dict[str, float] = {}
    ue_by_subsector: Nested = {}

    for sector, subsector in dataset.all_end_use_subsectors:
        fec_sub = fec_detailed.setdefault(sector, {}).setdefault(subsector, {})
        ue_sub = ue_detailed.setdefault(sector, {}).setdefault(subsector, {})
        subsector_ue = 0.0

        for tech in dataset.technologies_for(sector, subsector):
            level = get_number(tech_activity, [sector, subsector, tech])
            fec_tech = fec_sub.setdefault(tech, {})
            ue_tech = ue_sub.setdefault(tech, {})

            for fuel, unit_cons in _coefficients(
                    get_value(dataset.unit_energy_consumption, [sector, subsector, tech], {})):
                fec = level * unit_cons
                ue = fec * dataset.resolve_efficiency(sector, subsector, tech, fuel)
                fec_tech[fuel] = fec
                ue_tech[fuel] = ue
                add_to(fec_by_fuel, fuel, fec)
                add_to(ue_by_fuel, fuel, ue)
                subsector_ue += ue

        ue_by_subsector.setdefault(sector, {})[subsector] = subsector_ue

    return FinalEnergy(
        fec_detailed=fec_detailed,
        ue_detailed=ue_detailed,
        fec_by_fuel=fec_by_fuel,
        ue_by_fuel=ue_by_fuel,
        ue_by_subsector=ue_by_subsector,
    )


# =============================================================================
# 3-4. Hydrogen and power cascades
# =============================================================================

def cascade_transformation(
    energy_by_fuel: Mapping[str, float],
    carrier: str,
    techs: Iterable[str],
    prod_mix: Mapping[str, float],
    unit_cons: Mapping[str, Mapping[str, float]],
) -> Tuple[Dict[str, float], Dict[str, float]]:
    """
    Replace the demand for a produced carrier by its production inputs.

    Parameters
    ----------
    energy_by_fuel : mapping
        Energy demand by fuel before this stage.
    carrier : str
        Produced carrier (``'Hydrogen'`` or ``'Electricity'``).
    techs : iterable of str
        Production technologies of the carrier.
    prod_mix : mapping
        ``tech -> share`` (0-100) of carrier production.
    unit_cons : mapping
        ``tech -> {input_fuel -> input energy per unit output}``.

    Returns
    -------
    post_stage : dict
        ``energy_by_fuel`` without ``carrier``, with each input fuel's
        consumption added to its own entry.
    input_by_fuel : dict
        Inputs consumed by the production technologies.
    """
    demand = get_number(energy_by_fuel, [carrier])
    input_by_fuel: Dict[str, float] = {}
    for tech in techs:
        fraction = get_number(prod_mix, [tech]) / FULL_SHARE
        for fuel, coeff in _coefficients(get_value(unit_cons, [tech], {})):
            add_to(input_by_fuel, fuel, demand * fraction * coeff)

    post_stage = {fuel: value for fuel, value in energy_by_fuel.items() if fuel != carrier}
    for fuel, value in input_by_fuel.items():
        add_to(post_stage, fuel, value)
    return post_stage, input_by_fuel


# =============================================================================
# 5. Other conversion chains
# =============================================================================

def cascade_other_transforms(dataset, ec_post_power: Mapping[str, float]) -> Dict[str, float]:
    """
    Primary inputs of the conversion chains of end-use fuels (e.g. refining).

    Demand for each end-use fuel with declared conversion technologies is
    split by ``base_other_prod_mix`` and converted to primary fuel with the
    technologies' unit coefficients.
    """
    other_input_by_fuel: Dict[str, float] = {}
    for fuel in dataset.conversion_fuels():
        if fuel not in ec_post_power:
            continue
        demand = get_number(ec_post_power, [fuel])
        for tech in dataset.other_conv_techs[fuel]:
            fraction = get_number(dataset.base_other_prod_mix, [fuel, tech]) / FULL_SHARE
            coefficients = get_value(dataset.other_tech_unit_energy_cons, [fuel, tech], {})
            for primary_fuel, coeff in _coefficients(coefficients):
                add_to(other_input_by_fuel, primary_fuel, demand * fraction * coeff)
    return other_input_by_fuel


# =============================================================================
# 6. Primary energy demand
# =============================================================================

def aggregate_primary_energy(primary_fuels: Iterable[str],
                             ec_post_power: Mapping[str, float],
                             other_input_by_fuel: Mapping[str, float]) -> Dict[str, float]:
    """
    Primary energy demand by primary fuel.

    ``ped[f] = other_input[f] + ec_post_power[f]``, where the direct term is
    dropped for a fuel that is itself an input of a conversion chain, so the
    same energy is not counted twice.
    """
    ped_by_fuel: Dict[str, float] = {}
    for fuel in primary_fuels:
        value = get_number(other_input_by_fuel, [fuel])
        if fuel not in other_input_by_fuel:
            value += get_number(ec_post_power, [fuel])
        ped_by_fuel[fuel] = value
    return ped_by_fuel


# =============================================================================
# Full cascade
# =============================================================================

def compute_energy_balance(dataset, activity, demand_mix,
                           power_mix: Mapping[str, float],
                           hydrogen_mix: Mapping[str, float]) -> EnergyBalance:
    """
    Run all cascade stages for one year.

    Parameters
    ----------
    dataset : StructuredDataset
    activity : dict
        ``[sector][subsector] -> activity`` of the year.
    demand_mix : dict
        ``[sector][subsector][tech] -> share`` of the year.
    power_mix, hydrogen_mix : dict
        ``tech -> share`` of the year.

    Returns
    -------
    EnergyBalance
    """
    tech_activity = compute_tech_activity(dataset, activity, demand_mix)
    final = compute_final_energy(dataset, tech_activity)

    ec_post_hydrogen, hydrogen_inputs = cascade_transformation(
        final.fec_by_fuel, HYDROGEN, dataset.hydrogen_techs,
        hydrogen_mix, dataset.hydrogen_tech_unit_energy_cons,
    )
    ec_post_power, power_inputs = cascade_transformation(
        ec_post_hydrogen, ELECTRICITY, dataset.power_techs,
        power_mix, dataset.power_tech_unit_energy_cons,
    )
    other_inputs = cascade_other_transforms(dataset, ec_post_power)
    ped_by_fuel = aggregate_primary_energy(dataset.primary_fuels, ec_post_power, other_inputs)

    return EnergyBalance(
        demand_tech_activity=tech_activity,
        final=final,
        hydrogen_input_by_fuel=hydrogen_inputs,
        ec_post_hydrogen=ec_post_hydrogen,
        power_input_by_fuel=power_inputs,
        ec_post_power=ec_post_power,
        other_input_by_fuel=other_inputs,
        ped_by_fuel=ped_by_fuel,
    )


def _coefficients(mapping) -> List[Tuple[str, float]]:
    """Numeric ``(fuel, coefficient)`` pairs of a coefficient mapping."""
    if not isinstance(mapping, Mapping):
        return []
    pairs = []
    for fuel, coeff in mapping.items():
        if not is_number(coeff):
            continue
        if is_missing(coeff):
            logger.debug(f"Skipping NaN coefficient for '{fuel}'")
            continue
        pairs.append((fuel, float(coeff)))
    return pairs
