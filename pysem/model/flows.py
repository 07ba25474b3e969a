# pysem/model/flows.py

"""
Energy flows of one projection year, as a source -> target table.

The table follows the energy from primary fuels through the transformation
stages to the end-use sectors and their useful energy:

    primary fuel -> Power / Hydrogen Plants -> sector [-> subsector] -> useful type
                                                                   \\-> Losses

It is derived purely from a YearlyResult and the dataset taxonomy; drawing
the diagram is left to the caller.
"""

import logging
from typing import Dict, List, Tuple

import pandas as pd

from ..constants import ELECTRICITY, FLOW_THRESHOLD, HYDROGEN, is_missing
from ..interfaces.dataset import StructuredDataset
from ..interfaces.results import YearlyResult
from ..interfaces.utilities import add_to, get_number, get_value

logger = logging.getLogger(__name__)

POWER_NODE = "Power"
HYDROGEN_NODE = "Hydrogen Plants"
LOSSES_NODE = "Losses"
OTHER_USEFUL_TYPE = "Other"

FLOW_COLUMNS = ['SOURCE', 'TARGET', 'VALUE']

# Carrier -> node producing it
CARRIER_NODES = {
    ELECTRICITY: POWER_NODE,
    HYDROGEN: HYDROGEN_NODE,
}


def transformation_losses(result: YearlyResult) -> Dict[str, float]:
    """
    Conversion losses of the power and hydrogen stages.

    ``loss = total input of the stage - carrier delivered by the stage``,
    where delivered electricity includes what hydrogen plants consume.

    Returns
    -------
    dict
        ``{'Power': loss, 'Hydrogen': loss}`` in GJ.
    """
    power_output = get_number(result.ec_post_hydrogen, [ELECTRICITY])
    hydrogen_output = get_number(result.fec_by_fuel, [HYDROGEN])
    return {
        'Power': sum(result.power_input_by_fuel.values()) - power_output,
        'Hydrogen': sum(result.hydrogen_input_by_fuel.values()) - hydrogen_output,
    }


def build_energy_flows(result: YearlyResult, dataset: StructuredDataset,
                       show_subsectors: bool = False) -> pd.DataFrame:
    """
    Source -> target energy flows of one year.

    Parameters
    ----------
    result : YearlyResult
        Result of the year to describe.
    dataset : StructuredDataset
        Taxonomy (sector order, technologies) and useful energy type map.
    show_subsectors : bool, optional
        Route sector flows through a node per subsector (default: False).

    Returns
    -------
    pd.DataFrame
        Columns ``SOURCE``, ``TARGET``, ``VALUE`` (GJ). Flows below
        ``FLOW_THRESHOLD`` are dropped; loss rows come last.
    """
    rows: List[Tuple[str, str, float]] = []
    loss_rows: List[Tuple[str, str, float]] = []

    # Primary inputs of the transformation stages
    for fuel, value in result.power_input_by_fuel.items():
        _add_row(rows, fuel, POWER_NODE, value)
    for fuel, value in result.hydrogen_input_by_fuel.items():
        source = POWER_NODE if fuel == ELECTRICITY else fuel
        _add_row(rows, source, HYDROGEN_NODE, value)

    # Carriers into sectors
    sector_inflows: Dict[str, Dict[str, float]] = {}
    for sector in dataset.sectors:
        for subsector in dataset.subsectors.get(sector) or []:
            for tech in dataset.technologies_for(sector, subsector):
                fuels = get_value(result.fec_detailed, [sector, subsector, tech], {})
                for fuel, value in fuels.items():
                    if value <= FLOW_THRESHOLD:
                        continue
                    source = CARRIER_NODES.get(fuel, fuel)
                    add_to(sector_inflows.setdefault(source, {}), sector, value)
    for source, targets in sector_inflows.items():
        for sector, value in targets.items():
            _add_row(rows, source, sector, value)

    # Sectors into useful energy and losses
    for sector in dataset.sectors:
        sector_useful: Dict[str, float] = {}
        sector_losses = 0.0
        for subsector in dataset.subsectors.get(sector) or []:
            subsector_fec, useful_by_type = _subsector_energy(result, dataset, sector, subsector)
            subsector_ue = sum(useful_by_type.values())
            losses = subsector_fec - subsector_ue
            sector_losses += losses
            for useful_type, value in useful_by_type.items():
                add_to(sector_useful, useful_type, value)

            if show_subsectors:
                _add_row(rows, sector, subsector, subsector_fec)
                for useful_type, value in useful_by_type.items():
                    _add_row(rows, subsector, useful_type, value)
                _add_row(loss_rows, subsector, LOSSES_NODE, losses)

        if not show_subsectors:
            for useful_type, value in sector_useful.items():
                _add_row(rows, sector, useful_type, value)
            _add_row(loss_rows, sector, LOSSES_NODE, sector_losses)

    # Conversion losses
    losses = transformation_losses(result)
    _add_row(loss_rows, POWER_NODE, LOSSES_NODE, losses['Power'])
    _add_row(loss_rows, HYDROGEN_NODE, LOSSES_NODE, losses['Hydrogen'])

    return pd.DataFrame(rows + loss_rows, columns=FLOW_COLUMNS)


def _subsector_energy(result: YearlyResult, dataset: StructuredDataset,
                      sector: str, subsector: str) -> Tuple[float, Dict[str, float]]:
    """Total FEC of a subsector and its useful energy by useful type."""
    fec_total = 0.0
    useful_by_type: Dict[str, float] = {}
    for tech in dataset.technologies_for(sector, subsector):
        fec_total += sum(get_value(result.fec_detailed, [sector, subsector, tech], {}).values())
        for fuel, value in get_value(result.ue_detailed, [sector, subsector, tech], {}).items():
            if value <= FLOW_THRESHOLD:
                continue
            useful_type = get_value(
                dataset.useful_energy_type_map, [sector, subsector, tech, fuel], OTHER_USEFUL_TYPE
            )
            add_to(useful_by_type, useful_type, value)
    return fec_total, useful_by_type


def _add_row(rows: List[Tuple[str, str, float]], source: str, target: str, value: float) -> None:
    if not source or not target or is_missing(value) or value < FLOW_THRESHOLD:
        return
    rows.append((str(source), str(target), float(value)))
