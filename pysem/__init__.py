# pysem/__init__.py

"""
pysem: multi-sector energy system projection engine.

Projects activity, technology mixes and the energy balance of an energy
system year by year, from a base-year dataset and a scenario of growth
factors and technology behaviours.

Main Components
---------------
StructuredDataset : dataclass
    Immutable base-year data and taxonomy.
ScenarioParameters : dataclass
    Growth factors and technology behaviours of one scenario.
ProjectionResults : dataclass
    ``{year -> YearlyResult}`` output of one run.
run : function
    Unified entry point to project a scenario.

Subpackages
-----------
interfaces : Data containers and lookup helpers
model : S-curves, share allocation, energy balance cascade, orchestration
validation : Structural checks and ProjectionError
input / output : Project folder reading and CSV result writing
logs : Run logger setup

Example
-------
>>> from pysem import StructuredDataset, run
>>> dataset = StructuredDataset.from_file('/path/to/dataset.yaml')
>>> results = run(dataset, scenario='Net Zero')
>>> results.to_frame('ped_by_fuel', unit='EJ')
"""

from .interfaces import (
    StructuredDataset,
    ScenarioParameters,
    YearlyResult,
    ProjectionResults,
)
from .model import run_projection, build_energy_flows, transformation_losses
from .run import run, run_scenarios, run_from_files, run_from_directory
from .validation import ProjectionError

__all__ = [
    # Core classes
    'StructuredDataset',
    'ScenarioParameters',
    'YearlyResult',
    'ProjectionResults',
    'ProjectionError',
    # Run functions
    'run',
    'run_projection',
    'run_scenarios',
    'run_from_files',
    'run_from_directory',
    # Flows
    'build_energy_flows',
    'transformation_losses',
]

__version__ = '0.1.0'
