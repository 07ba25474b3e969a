"""
pysem/output/writer.py

Handles writing projection results to CSV files and managing output directories.
"""
import logging
import os
from typing import Dict

import pandas as pd

from ..interfaces.results import ProjectionResults

logger = logging.getLogger(__name__)


class OutputWriter:
    """
    Writes output data (as DataFrames) to CSV files in the output directory.
    """
    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        os.makedirs(self.output_dir, exist_ok=True)

    def write_csv(self, name: str, df: pd.DataFrame) -> str:
        """Writes a DataFrame to a CSV file in the output directory."""
        path = os.path.join(self.output_dir, f"{name}.csv")
        df.to_csv(path, index=False)
        return path

    def write_multiple(self, data: Dict[str, pd.DataFrame]) -> Dict[str, str]:
        """Writes multiple DataFrames to CSV files. Returns dict of file paths."""
        return {name: self.write_csv(name, df) for name, df in data.items()}

    def write_results(self, results: ProjectionResults, unit: str = "GJ") -> Dict[str, str]:
        """
        Writes every result field as ``<field>.csv`` in long format.

        Parameters
        ----------
        results : ProjectionResults
            Results of one scenario run.
        unit : str, optional
            Energy unit of the tables, ``'GJ'`` (default) or ``'EJ'``.

        Returns
        -------
        dict
            ``field name -> CSV path``.
        """
        paths = self.write_multiple(results.to_frames(unit=unit))
        logger.info(f"Wrote {len(paths)} result tables to {self.output_dir}")
        return paths
