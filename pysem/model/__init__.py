# pysem/model/__init__.py

"""
Projection engine.

Submodules
----------
scurve
    Forced logistic share trajectories.
allocation
    Technology share allocation within one category.
balance
    Energy balance cascade of one year.
projection
    Year-by-year orchestration of a scenario.
flows
    Source -> target energy flows and transformation losses.
"""

from .scurve import sigmoid, forced_logistic_share
from .allocation import allocate_category_mix
from .balance import (
    EnergyBalance,
    FinalEnergy,
    compute_tech_activity,
    compute_final_energy,
    cascade_transformation,
    cascade_other_transforms,
    aggregate_primary_energy,
    compute_energy_balance,
)
from .projection import (
    base_activity,
    grow_activity,
    project_activity,
    allocate_mixes,
    compute_year,
    run_projection,
)
from .flows import build_energy_flows, transformation_losses

__all__ = [
    'sigmoid',
    'forced_logistic_share',
    'allocate_category_mix',
    'EnergyBalance',
    'FinalEnergy',
    'compute_tech_activity',
    'compute_final_energy',
    'cascade_transformation',
    'cascade_other_transforms',
    'aggregate_primary_energy',
    'compute_energy_balance',
    'base_activity',
    'grow_activity',
    'project_activity',
    'allocate_mixes',
    'compute_year',
    'run_projection',
    'build_energy_flows',
    'transformation_losses',
]
