# pysem/input/reader.py

"""
Reads a projection project from a folder holding a config file, a dataset
document and, optionally, a scenario-parameter document.

Expected layout::

    project/
        config.yaml        # optional; keys: dataset, scenario, parameters,
                           # output_dir, log_level, log_dir
        dataset.yaml       # or dataset.json
        params.yaml        # optional explicit scenario parameters
"""
import logging
import os
from typing import Any, Dict, Optional

import yaml

from ..interfaces.dataset import StructuredDataset
from ..interfaces.parameters import ScenarioParameters, available_scenarios
from ..interfaces.utilities import load_document

logger = logging.getLogger(__name__)

DEFAULT_DATASET_NAMES = ('dataset.yaml', 'dataset.yml', 'dataset.json')


class ProjectInputReader:
    """
    Reads the config, dataset and scenario parameters of a project folder.
    """
    def __init__(self, input_dir: str):
        self.input_dir = input_dir
        self.config: Dict[str, Any] = {}

    def read_config(self, config_name: str = 'config.yaml') -> None:
        """Reads a YAML config file from the input directory."""
        config_path = os.path.join(self.input_dir, config_name)
        if os.path.exists(config_path):
            with open(config_path, 'r') as f:
                self.config = yaml.safe_load(f) or {}
        else:
            self.config = {}

    def get_config(self) -> Dict[str, Any]:
        """Returns the loaded config dictionary."""
        return self.config

    def resolve(self, path: str) -> str:
        """Path relative to the input directory unless already absolute."""
        if os.path.isabs(path):
            return path
        return os.path.join(self.input_dir, path)

    def read_dataset(self, path: Optional[str] = None) -> StructuredDataset:
        """
        Reads the dataset document.

        The path is taken from the argument, then the config's ``dataset``
        key, then the first of ``dataset.yaml``, ``dataset.yml`` and
        ``dataset.json`` present in the input directory.

        Raises
        ------
        FileNotFoundError
            If no dataset document can be found.
        """
        path = path or self.config.get('dataset')
        if path is None:
            for name in DEFAULT_DATASET_NAMES:
                if os.path.exists(os.path.join(self.input_dir, name)):
                    path = name
                    break
        if path is None:
            raise FileNotFoundError(f"No dataset document found in {self.input_dir}")

        dataset_path = self.resolve(path)
        logger.info(f"Reading dataset from {dataset_path}")
        return StructuredDataset.from_file(dataset_path)

    def read_parameters(self, dataset: StructuredDataset, scenario: Optional[str] = None,
                        params_path: Optional[str] = None) -> ScenarioParameters:
        """
        Resolves the scenario parameters of the run.

        An explicit parameter document wins over the dataset's scenario
        library. Without either, the first scenario of the library is used;
        a dataset without scenarios runs with all technologies fixed and no
        activity growth.

        Raises
        ------
        KeyError
            If the named scenario is not in the dataset's library.
        """
        params_path = params_path or self.config.get('parameters')
        scenario = scenario or self.config.get('scenario')

        if params_path:
            path = self.resolve(params_path)
            logger.info(f"Reading scenario parameters from {path}")
            name = scenario or os.path.splitext(os.path.basename(path))[0]
            return ScenarioParameters.from_dict(load_document(path), name=name)

        if scenario is None:
            known = available_scenarios(dataset)
            if not known:
                logger.warning("No scenario given and none in dataset; using defaults")
                return ScenarioParameters(name="default")
            scenario = known[0]
            logger.info(f"No scenario given; using '{scenario}'")

        return ScenarioParameters.from_dataset(dataset, scenario)
