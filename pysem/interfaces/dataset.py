# pysem/interfaces/dataset.py

"""
StructuredDataset container for the projection engine.

The external data loader parses the tabular source files and hands the engine
one StructuredDataset. The engine only reads it: activity levels, technology
mixes, unit energy / efficiency coefficients, the transformation-sector
coefficients, the taxonomy and the time axis.

Design principles:
- Immutable after construction (frozen dataclass)
- Nested mappings keep the loader's nesting: sector -> subsector -> tech -> fuel
- from_dict accepts the loader's camelCase keys as well as field names
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..constants import DEFAULT_EFFICIENCY, is_missing
from .utilities import get_value, is_number, load_document

logger = logging.getLogger(__name__)

NestedFloat = Dict[str, Any]


@dataclass(frozen=True)
class StructuredDataset:
    """
    Complete structured input of one projection run.

    Attributes
    ----------
    base_activity : dict
        ``[sector][subsector] -> float`` activity level in the base year.
    activity_units : dict
        ``[sector][subsector] -> str`` display unit (not used in computation).
    base_demand_tech_mix : dict
        ``[sector][subsector][tech] -> float`` base-year share (0-100).
    unit_energy_consumption : dict
        ``[sector][subsector][tech][fuel] -> float`` energy per unit activity.
    efficiency : dict
        ``[sector][subsector][tech][fuel] -> float`` (0-1). A number found at
        the tech or subsector level applies to everything below it.
    base_power_prod_mix, base_hydrogen_prod_mix : dict
        ``[tech] -> float`` base-year production shares (0-100).
    power_tech_unit_energy_cons, hydrogen_tech_unit_energy_cons : dict
        ``[tech][input_fuel] -> float`` input energy per unit output.
    other_tech_unit_energy_cons : dict
        ``[end_use_fuel][tech][primary_fuel] -> float``.
    base_other_prod_mix : dict
        ``[end_use_fuel][tech] -> float`` (0-100).
    sectors, subsectors, technologies : taxonomy of end-use demand.
    power_techs, hydrogen_techs : list of str
    end_use_fuels, primary_fuels : list of str
    other_conv_techs : dict
        ``[end_use_fuel] -> list of conversion technologies``.
    start_year, end_year : int
    years : list of int
        Ordered projection years, inclusive, yearly step.
    useful_energy_type_map : dict
        ``[sector][subsector][tech][fuel] -> str`` useful energy category
        (used by the energy flow table only).
    scenarios : dict
        ``[scenario_name]["category|key|tech"] -> behaviour mapping``.
    scenario_activity_growth : dict
        ``[scenario_name]["sector|subsector"] -> {p1, p2}``.

    Examples
    --------
    >>> dataset = StructuredDataset.from_file('dataset.yaml')
    >>> dataset.base_year
    2023
    >>> dataset.resolve_efficiency('Industry', 'Steel', 'EAF', 'Electricity')
    0.95
    """
    base_activity: NestedFloat = field(default_factory=dict)
    activity_units: Dict[str, Dict[str, str]] = field(default_factory=dict)
    base_demand_tech_mix: NestedFloat = field(default_factory=dict)
    unit_energy_consumption: NestedFloat = field(default_factory=dict)
    efficiency: NestedFloat = field(default_factory=dict)
    base_power_prod_mix: Dict[str, float] = field(default_factory=dict)
    base_hydrogen_prod_mix: Dict[str, float] = field(default_factory=dict)
    power_tech_unit_energy_cons: NestedFloat = field(default_factory=dict)
    hydrogen_tech_unit_energy_cons: NestedFloat = field(default_factory=dict)
    other_tech_unit_energy_cons: NestedFloat = field(default_factory=dict)
    base_other_prod_mix: NestedFloat = field(default_factory=dict)
    sectors: List[str] = field(default_factory=list)
    subsectors: Dict[str, List[str]] = field(default_factory=dict)
    technologies: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    power_techs: List[str] = field(default_factory=list)
    hydrogen_techs: List[str] = field(default_factory=list)
    end_use_fuels: List[str] = field(default_factory=list)
    primary_fuels: List[str] = field(default_factory=list)
    other_conv_techs: Dict[str, List[str]] = field(default_factory=dict)
    start_year: Optional[int] = None
    end_year: Optional[int] = None
    years: List[int] = field(default_factory=list)
    useful_energy_type_map: NestedFloat = field(default_factory=dict)
    scenarios: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    scenario_activity_growth: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    # Loader contract names -> field names
    KEY_MAPPING = {
        'baseActivity': 'base_activity',
        'activityUnits': 'activity_units',
        'baseDemandTechMix': 'base_demand_tech_mix',
        'unitEnergyConsumption': 'unit_energy_consumption',
        'efficiency': 'efficiency',
        'basePowerProdMix': 'base_power_prod_mix',
        'baseHydrogenProdMix': 'base_hydrogen_prod_mix',
        'powerTechUnitEnergyCons': 'power_tech_unit_energy_cons',
        'hydrogenTechUnitEnergyCons': 'hydrogen_tech_unit_energy_cons',
        'otherTechUnitEnergyCons': 'other_tech_unit_energy_cons',
        'baseOtherProdMix': 'base_other_prod_mix',
        'sectors': 'sectors',
        'subsectors': 'subsectors',
        'technologies': 'technologies',
        'powerTechs': 'power_techs',
        'hydrogenTechs': 'hydrogen_techs',
        'endUseFuels': 'end_use_fuels',
        'primaryFuels': 'primary_fuels',
        'otherConvTechs': 'other_conv_techs',
        'startYear': 'start_year',
        'endYear': 'end_year',
        'years': 'years',
        'usefulEnergyTypeMap': 'useful_energy_type_map',
        'scenarios': 'scenarios',
        'scenarioActivityGrowth': 'scenario_activity_growth',
    }

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StructuredDataset':
        """
        Build a dataset from the loader's nested mapping.

        Parameters
        ----------
        data : dict
            Mapping using either the loader contract keys (``baseActivity``,
            ``powerTechs``, ...) or the field names. Unknown keys are ignored.

        Returns
        -------
        StructuredDataset
        """
        field_names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = cls.KEY_MAPPING.get(key, key)
            if name in field_names:
                kwargs[name] = value
            else:
                logger.debug(f"Ignoring unknown dataset key '{key}'")

        for bound in ('start_year', 'end_year'):
            if kwargs.get(bound) is not None:
                kwargs[bound] = int(kwargs[bound])

        if kwargs.get('years'):
            kwargs['years'] = [int(y) for y in kwargs['years']]

        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'StructuredDataset':
        """Load a dataset from a YAML or JSON document."""
        return cls.from_dict(load_document(path))

    def to_dict(self) -> Dict[str, Any]:
        """Return the loader contract representation (camelCase keys)."""
        return {key: getattr(self, name) for key, name in self.KEY_MAPPING.items()}

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def base_year(self) -> Optional[int]:
        """The first projection year; activity is seeded from the dataset here."""
        return self.start_year

    @property
    def all_end_use_subsectors(self) -> List[Tuple[str, str]]:
        """Ordered ``(sector, subsector)`` pairs of the demand taxonomy."""
        return [
            (sector, subsector)
            for sector in self.sectors
            for subsector in self.subsectors.get(sector, [])
        ]

    def technologies_for(self, sector: str, subsector: str) -> List[str]:
        return list(get_value(self.technologies, [sector, subsector], []))

    def conversion_fuels(self) -> List[str]:
        """End-use fuels that have declared other-conversion technologies."""
        return [fuel for fuel, techs in self.other_conv_techs.items() if techs]

    # =========================================================================
    # Coefficients
    # =========================================================================

    def resolve_efficiency(self, sector: str, subsector: str,
                           tech: str, fuel: str) -> float:
        """
        Useful-energy efficiency with fallback tech+fuel -> tech -> subsector
        -> DEFAULT_EFFICIENCY.
        """
        for path in ([sector, subsector, tech, fuel],
                     [sector, subsector, tech],
                     [sector, subsector]):
            value = get_value(self.efficiency, path, None)
            if is_number(value) and not is_missing(value):
                return float(value)
        return DEFAULT_EFFICIENCY
