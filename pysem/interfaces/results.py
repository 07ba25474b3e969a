# pysem/interfaces/results.py

"""
Result containers of a projection run.

This module defines the immutable per-year result and the year-indexed
table the presentation layer consumes:

    StructuredDataset + ScenarioParameters  (immutable inputs)
                     ↓
    ProjectionResults {year -> YearlyResult} (immutable output)

Field names and nesting of ``YearlyResult.to_dict()`` are the output
contract: charts and Sankey diagrams are derived purely from this shape.
Energy quantities are gigajoules.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import numpy as np
import pandas as pd

from ..constants import FULL_SHARE, GJ_PER_EJ, TOL
from .utilities import is_number

Nested = Dict[str, Any]


# ------------------------------------------------------------------
# YearlyResult
# ------------------------------------------------------------------

@dataclass(frozen=True)
class YearlyResult:
    """
    Everything computed for one projection year.

    Attributes
    ----------
    activity : dict
        ``[sector][subsector] -> float`` activity level.
    demand_tech_mix : dict
        ``[sector][subsector][tech] -> float`` share (0-100).
    power_prod_mix, hydrogen_prod_mix : dict
        ``[tech] -> float`` share (0-100).
    demand_tech_activity : dict
        ``[sector][subsector][tech] -> float``.
    fec_detailed, ue_detailed : dict
        ``[sector][subsector][tech][fuel] -> float`` (GJ).
    fec_by_fuel, ue_by_fuel : dict
        ``[fuel] -> float`` (GJ).
    ue_by_subsector : dict
        ``[sector][subsector] -> float`` total useful energy (GJ).
    ec_post_hydrogen : dict
        FEC by fuel with Hydrogen replaced by its production inputs.
    ec_post_power : dict
        ``ec_post_hydrogen`` with Electricity replaced by power inputs.
    ped_by_fuel : dict
        ``[primary_fuel] -> float`` primary energy demand (GJ).
    hydrogen_input_by_fuel, power_input_by_fuel, other_input_by_fuel : dict
        ``[fuel] -> float`` inputs consumed by each transformation stage.
    """
    activity: Nested
    demand_tech_mix: Nested
    power_prod_mix: Dict[str, float]
    hydrogen_prod_mix: Dict[str, float]
    demand_tech_activity: Nested
    fec_detailed: Nested
    ue_detailed: Nested
    fec_by_fuel: Dict[str, float]
    ue_by_fuel: Dict[str, float]
    ue_by_subsector: Nested
    ec_post_hydrogen: Dict[str, float]
    ec_post_power: Dict[str, float]
    ped_by_fuel: Dict[str, float]
    hydrogen_input_by_fuel: Dict[str, float] = field(default_factory=dict)
    power_input_by_fuel: Dict[str, float] = field(default_factory=dict)
    other_input_by_fuel: Dict[str, float] = field(default_factory=dict)

    # Field name -> output contract name
    CONTRACT_NAMES = {
        'activity': 'activity',
        'demand_tech_mix': 'demandTechMix',
        'power_prod_mix': 'powerProdMix',
        'hydrogen_prod_mix': 'hydrogenProdMix',
        'demand_tech_activity': 'demandTechActivity',
        'fec_detailed': 'fecDetailed',
        'ue_detailed': 'ueDetailed',
        'fec_by_fuel': 'fecByFuel',
        'ue_by_fuel': 'ueByFuel',
        'ue_by_subsector': 'ueBySubsector',
        'ec_post_hydrogen': 'ecPostHydrogen',
        'ec_post_power': 'ecPostPower',
        'ped_by_fuel': 'pedByFuel',
        'hydrogen_input_by_fuel': 'hydrogenInputByFuel',
        'power_input_by_fuel': 'powerInputByFuel',
        'other_input_by_fuel': 'otherInputEnergyByFuel',
    }

    # Index column names of each field in long format
    INDEX_COLUMNS = {
        'activity': ['SECTOR', 'SUBSECTOR'],
        'demand_tech_mix': ['SECTOR', 'SUBSECTOR', 'TECHNOLOGY'],
        'power_prod_mix': ['TECHNOLOGY'],
        'hydrogen_prod_mix': ['TECHNOLOGY'],
        'demand_tech_activity': ['SECTOR', 'SUBSECTOR', 'TECHNOLOGY'],
        'fec_detailed': ['SECTOR', 'SUBSECTOR', 'TECHNOLOGY', 'FUEL'],
        'ue_detailed': ['SECTOR', 'SUBSECTOR', 'TECHNOLOGY', 'FUEL'],
        'fec_by_fuel': ['FUEL'],
        'ue_by_fuel': ['FUEL'],
        'ue_by_subsector': ['SECTOR', 'SUBSECTOR'],
        'ec_post_hydrogen': ['FUEL'],
        'ec_post_power': ['FUEL'],
        'ped_by_fuel': ['FUEL'],
        'hydrogen_input_by_fuel': ['FUEL'],
        'power_input_by_fuel': ['FUEL'],
        'other_input_by_fuel': ['FUEL'],
    }

    SHARE_FIELDS = ('demand_tech_mix', 'power_prod_mix', 'hydrogen_prod_mix')

    def to_dict(self) -> Dict[str, Any]:
        """Return the output contract representation (camelCase keys)."""
        return {
            contract: getattr(self, name)
            for name, contract in self.CONTRACT_NAMES.items()
        }

    def records(self, name: str) -> List[Dict[str, Any]]:
        """Flatten one nested field into ``{INDEX..., VALUE}`` rows."""
        columns = self.INDEX_COLUMNS[name]
        rows = []
        _flatten(getattr(self, name), columns, {}, rows)
        return rows


def _flatten(node: Any, columns: List[str], prefix: Dict[str, Any],
             rows: List[Dict[str, Any]]) -> None:
    depth = len(prefix)
    if depth == len(columns):
        if is_number(node):
            rows.append({**prefix, 'VALUE': float(node)})
        return
    if not isinstance(node, dict):
        return
    for key, child in node.items():
        _flatten(child, columns, {**prefix, columns[depth]: key}, rows)


# ------------------------------------------------------------------
# ProjectionResults
# ------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectionResults:
    """
    Ordered ``{year -> YearlyResult}`` table of one scenario run.

    Attributes
    ----------
    results : dict
        ``year -> YearlyResult`` in increasing year order.
    scenario : str
        Scenario name (metadata).

    Examples
    --------
    >>> results = run_projection(dataset, params)
    >>> results[2050].ped_by_fuel['Gas']
    1234.5
    >>> results.to_frame('fec_by_fuel', unit='EJ').head()
       YEAR         FUEL     VALUE
    0  2023  Electricity  0.000012
    """
    results: Dict[int, YearlyResult]
    scenario: str = ""

    def __getitem__(self, year: int) -> YearlyResult:
        return self.results[year]

    def __contains__(self, year: int) -> bool:
        return year in self.results

    def __iter__(self) -> Iterator[int]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    @property
    def years(self) -> List[int]:
        return list(self.results.keys())

    def items(self):
        return self.results.items()

    def to_dict(self) -> Dict[int, Dict[str, Any]]:
        """Return ``{year -> contract dict}``."""
        return {year: result.to_dict() for year, result in self.results.items()}

    # =========================================================================
    # pandas export
    # =========================================================================

    def to_frame(self, name: str, unit: str = "GJ") -> pd.DataFrame:
        """
        Long-format DataFrame of one result field across all years.

        Parameters
        ----------
        name : str
            Field name (``'fec_by_fuel'``) or contract name (``'fecByFuel'``).
        unit : str, optional
            ``'GJ'`` (default) or ``'EJ'``. Only energy fields are converted;
            shares and activity are returned unchanged.

        Returns
        -------
        pd.DataFrame
            Columns: ``YEAR``, the field's index columns, ``VALUE``.

        Raises
        ------
        KeyError
            If ``name`` is not a result field.
        ValueError
            If ``unit`` is not supported.
        """
        field_name = _resolve_field(name)
        if unit not in ("GJ", "EJ"):
            raise ValueError(f"Unsupported unit '{unit}'; use 'GJ' or 'EJ'")

        columns = ['YEAR'] + YearlyResult.INDEX_COLUMNS[field_name] + ['VALUE']
        rows = []
        for year, result in self.results.items():
            for row in result.records(field_name):
                rows.append({'YEAR': year, **row})

        df = pd.DataFrame(rows, columns=columns)
        if unit == "EJ" and _is_energy_field(field_name):
            df['VALUE'] = df['VALUE'] / GJ_PER_EJ
        return df

    def to_frames(self, unit: str = "GJ") -> Dict[str, pd.DataFrame]:
        """All result fields as long-format DataFrames, keyed by field name."""
        return {name: self.to_frame(name, unit=unit) for name in YearlyResult.CONTRACT_NAMES}

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> None:
        """
        Check the invariants of every year.

        Checks:
        - Years are strictly increasing
        - Every non-empty allocation category sums to 100
        - Every energy quantity is finite and non-negative

        Raises
        ------
        ValueError
            If any invariant is violated.
        """
        years = self.years
        if any(b <= a for a, b in zip(years, years[1:])):
            raise ValueError(f"Result years are not strictly increasing: {years}")

        for year, result in self.results.items():
            for name in YearlyResult.SHARE_FIELDS:
                for category, shares in _share_categories(getattr(result, name)):
                    total = sum(shares.values())
                    if total > TOL and not math.isclose(total, FULL_SHARE, abs_tol=TOL):
                        raise ValueError(
                            f"{name} for {category} in {year} sums to {total:.6f}, not 100"
                        )

            for name in YearlyResult.CONTRACT_NAMES:
                if name in YearlyResult.SHARE_FIELDS:
                    continue
                values = np.array([row['VALUE'] for row in result.records(name)], dtype=float)
                if values.size == 0:
                    continue
                if not np.isfinite(values).all():
                    raise ValueError(f"{name} in {year} contains NaN or infinite values")
                if (values < -TOL).any():
                    raise ValueError(f"{name} in {year} contains negative values")


def _resolve_field(name: str) -> str:
    if name in YearlyResult.CONTRACT_NAMES:
        return name
    for field_name, contract in YearlyResult.CONTRACT_NAMES.items():
        if contract == name:
            return field_name
    raise KeyError(f"Unknown result field '{name}'")


def _is_energy_field(name: str) -> bool:
    return name not in YearlyResult.SHARE_FIELDS + ('activity', 'demand_tech_activity')


def _share_categories(mix: Dict[str, Any], label: Optional[str] = None):
    """Yield ``(category, {tech: share})`` for flat or sector-nested mixes."""
    if mix and all(is_number(v) for v in mix.values()):
        yield (label or 'category', mix)
        return
    for key, child in mix.items():
        if isinstance(child, dict):
            yield from _share_categories(child, key if label is None else f"{label}|{key}")
