# pysem/interfaces/__init__.py

"""
Typed interfaces of the projection engine.

This module provides the immutable input containers (StructuredDataset,
ScenarioParameters), the result containers (YearlyResult,
ProjectionResults) and the get-or-default lookup helpers they share.
"""

from .dataset import StructuredDataset
from .parameters import (
    Behavior,
    BehaviorSpec,
    FixedBehavior,
    DeclineBehavior,
    SCurveBehavior,
    GrowthFactors,
    ScenarioParameters,
    available_scenarios,
    parse_behavior,
)
from .results import YearlyResult, ProjectionResults
from .utilities import (
    get_value,
    get_number,
    category_key,
    param_key,
    subsector_key,
    load_document,
)

__all__ = [
    # Inputs
    'StructuredDataset',
    'ScenarioParameters',
    'GrowthFactors',
    # Behaviours
    'Behavior',
    'BehaviorSpec',
    'FixedBehavior',
    'DeclineBehavior',
    'SCurveBehavior',
    'parse_behavior',
    'available_scenarios',
    # Outputs
    'YearlyResult',
    'ProjectionResults',
    # Helper functions
    'get_value',
    'get_number',
    'category_key',
    'param_key',
    'subsector_key',
    'load_document',
]
