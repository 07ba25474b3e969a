"""
pysem/tests/test_output_writer.py

Unit tests for OutputWriter.
"""
import os

import pandas as pd
import pytest

from pysem.interfaces import ScenarioParameters, StructuredDataset
from pysem.model.projection import run_projection
from pysem.output.writer import OutputWriter


def test_write_csv(tmp_path):
    writer = OutputWriter(str(tmp_path))
    df = pd.DataFrame({"x": [1, 2]})
    path = writer.write_csv("foo", df)
    assert os.path.exists(path)
    df2 = pd.read_csv(path)
    pd.testing.assert_frame_equal(df, df2)


def test_write_multiple(tmp_path):
    writer = OutputWriter(str(tmp_path))
    dfs = {"a": pd.DataFrame({"y": [3]}), "b": pd.DataFrame({"z": [4]})}
    paths = writer.write_multiple(dfs)
    for name, path in paths.items():
        assert os.path.exists(path)
        pd.testing.assert_frame_equal(dfs[name], pd.read_csv(path))


def test_write_results(tmp_path):
    dataset = StructuredDataset.from_dict({
        "startYear": 2023,
        "endYear": 2050,
        "years": list(range(2023, 2051)),
        "sectors": ["Industry"],
        "subsectors": {"Industry": ["Cement"]},
        "technologies": {"Industry": {"Cement": ["Kiln"]}},
        "baseActivity": {"Industry": {"Cement": 70.0}},
        "baseDemandTechMix": {"Industry": {"Cement": {"Kiln": 100.0}}},
        "unitEnergyConsumption": {"Industry": {"Cement": {"Kiln": {"Gas": 2.0}}}},
        "primaryFuels": ["Gas"],
    })
    results = run_projection(dataset, ScenarioParameters())
    writer = OutputWriter(str(tmp_path / "out"))
    paths = writer.write_results(results, unit="EJ")
    assert os.path.basename(paths["ped_by_fuel"]) == "ped_by_fuel.csv"
    ped = pd.read_csv(paths["ped_by_fuel"])
    assert list(ped.columns) == ["YEAR", "FUEL", "VALUE"]
    assert ped["YEAR"].tolist() == list(range(2023, 2051))
    # 140 GJ of gas per year
    assert ped["VALUE"].iloc[0] == pytest.approx(140.0 / 1e9)
