# pysem/run.py

"""
Unified run interface for pysem.

This module provides a simple interface to project one or more scenarios
from a StructuredDataset, either in memory or from documents on disk.

Example
-------
>>> from pysem import StructuredDataset, run
>>> dataset = StructuredDataset.from_file('/path/to/dataset.yaml')
>>> results = run(dataset, scenario='Net Zero')
>>> results[2050].ped_by_fuel
"""

import logging
from typing import Dict, Iterable, Optional

from .input.reader import ProjectInputReader
from .interfaces import (
    ProjectionResults,
    ScenarioParameters,
    StructuredDataset,
    available_scenarios,
    load_document,
)
from .model.projection import run_projection

logger = logging.getLogger(__name__)


def run(
    dataset: StructuredDataset,
    params: Optional[ScenarioParameters] = None,
    scenario: Optional[str] = None,
    validate: bool = True,
) -> ProjectionResults:
    """
    Project one scenario.

    Parameters
    ----------
    dataset : StructuredDataset
        Read-only input data.
    params : ScenarioParameters, optional
        Explicit scenario parameters. Takes precedence over ``scenario``.
    scenario : str, optional
        Name of a scenario in the dataset's scenario library.
    validate : bool, optional
        Check the result invariants after the run (default: True).

    Returns
    -------
    ProjectionResults

    Raises
    ------
    ValueError
        If neither ``params`` nor ``scenario`` is given.
    KeyError
        If ``scenario`` is unknown to the dataset.
    ProjectionError
        If the dataset's time axis is unusable.
    """
    if params is None:
        if scenario is None:
            raise ValueError("Provide either scenario parameters or a scenario name")
        params = ScenarioParameters.from_dataset(dataset, scenario)

    results = run_projection(dataset, params)
    if validate:
        results.validate()
    return results


def run_scenarios(
    dataset: StructuredDataset,
    scenarios: Optional[Iterable[str]] = None,
    validate: bool = True,
) -> Dict[str, ProjectionResults]:
    """
    Project several scenarios of the dataset's library one after another.

    Parameters
    ----------
    dataset : StructuredDataset
        Read-only input data shared by all runs.
    scenarios : iterable of str, optional
        Scenario names (default: every scenario in the library).
    validate : bool, optional
        Check the result invariants of every run (default: True).

    Returns
    -------
    dict
        ``scenario name -> ProjectionResults``.
    """
    names = list(scenarios) if scenarios is not None else available_scenarios(dataset)
    results = {}
    for name in names:
        logger.info(f"Running scenario '{name}'")
        results[name] = run(dataset, scenario=name, validate=validate)
    return results


# Convenience functions to run from documents on disk
def run_from_files(
    dataset_path: str,
    scenario: Optional[str] = None,
    params_path: Optional[str] = None,
    **kwargs
) -> ProjectionResults:
    """
    Load a dataset (and optional parameter document) and project it.

    Parameters
    ----------
    dataset_path : str
        Path to a YAML or JSON dataset document.
    scenario : str, optional
        Scenario name; names the run when ``params_path`` is given.
    params_path : str, optional
        Path to a YAML or JSON scenario-parameter document.
    **kwargs
        Additional arguments passed to run().
    """
    dataset = StructuredDataset.from_file(dataset_path)
    params = None
    if params_path is not None:
        params = ScenarioParameters.from_dict(load_document(params_path), name=scenario or "")
    return run(dataset, params=params, scenario=scenario, **kwargs)


def run_from_directory(
    input_dir: str,
    scenario: Optional[str] = None,
    **kwargs
) -> ProjectionResults:
    """
    Load and project a project folder (see ProjectInputReader).

    Parameters
    ----------
    input_dir : str
        Folder holding ``config.yaml`` and the dataset document.
    scenario : str, optional
        Overrides the config's scenario.
    **kwargs
        Additional arguments passed to run().
    """
    reader = ProjectInputReader(input_dir)
    reader.read_config()
    dataset = reader.read_dataset()
    params = reader.read_parameters(dataset, scenario=scenario)
    return run(dataset, params=params, **kwargs)
