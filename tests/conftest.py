# tests/conftest.py

import copy

import pytest

from pysem.interfaces import ScenarioParameters, StructuredDataset


BASE_YEAR = 2023
END_YEAR = 2050

# Small two-sector system:
# - Buildings|Residential heated by gas, oil and heat pumps
# - Industry|Steel made by BF-BOF, EAF and H2-DRI
# - Electricity from gas and solar, hydrogen from SMR and electrolysis
# - Oil refined from crude (modelled as primary Oil) with 10% own use
DATASET = {
    'startYear': BASE_YEAR,
    'endYear': END_YEAR,
    'years': list(range(BASE_YEAR, END_YEAR + 1)),
    'sectors': ['Buildings', 'Industry'],
    'subsectors': {
        'Buildings': ['Residential'],
        'Industry': ['Steel'],
    },
    'technologies': {
        'Buildings': {'Residential': ['Gas boiler', 'Oil boiler', 'Heat pump']},
        'Industry': {'Steel': ['BF-BOF', 'EAF', 'H2-DRI']},
    },
    'baseActivity': {
        'Buildings': {'Residential': 100.0},
        'Industry': {'Steel': 50.0},
    },
    'activityUnits': {
        'Buildings': {'Residential': 'million m2'},
        'Industry': {'Steel': 'Mt'},
    },
    'baseDemandTechMix': {
        'Buildings': {'Residential': {'Gas boiler': 50.0, 'Oil boiler': 20.0, 'Heat pump': 30.0}},
        'Industry': {'Steel': {'BF-BOF': 80.0, 'EAF': 20.0, 'H2-DRI': 0.0}},
    },
    'unitEnergyConsumption': {
        'Buildings': {'Residential': {
            'Gas boiler': {'Gas': 10.0},
            'Oil boiler': {'Oil': 11.0},
            'Heat pump': {'Electricity': 3.0},
        }},
        'Industry': {'Steel': {
            'BF-BOF': {'Coal': 15.0, 'Electricity': 1.0},
            'EAF': {'Electricity': 5.0},
            'H2-DRI': {'Hydrogen': 12.0, 'Electricity': 2.0},
        }},
    },
    'efficiency': {
        # Oil boiler has no entry and falls back to the default
        'Buildings': {'Residential': {'Gas boiler': {'Gas': 0.9}, 'Heat pump': 3.0}},
        'Industry': {'Steel': 0.8},
    },
    'powerTechs': ['Gas power', 'Solar PV'],
    'basePowerProdMix': {'Gas power': 60.0, 'Solar PV': 40.0},
    'powerTechUnitEnergyCons': {
        'Gas power': {'Gas': 2.0},
        'Solar PV': {'Solar': 1.0},
    },
    'hydrogenTechs': ['Electrolyser', 'SMR'],
    'baseHydrogenProdMix': {'Electrolyser': 0.0, 'SMR': 100.0},
    'hydrogenTechUnitEnergyCons': {
        'Electrolyser': {'Electricity': 1.5},
        'SMR': {'Gas': 1.4},
    },
    'endUseFuels': ['Coal', 'Electricity', 'Gas', 'Hydrogen', 'Oil'],
    'primaryFuels': ['Coal', 'Gas', 'Oil', 'Solar'],
    'otherConvTechs': {'Oil': ['Refinery']},
    'baseOtherProdMix': {'Oil': {'Refinery': 100.0}},
    'otherTechUnitEnergyCons': {'Oil': {'Refinery': {'Oil': 1.1}}},
    'usefulEnergyTypeMap': {
        'Buildings': {'Residential': {
            'Gas boiler': {'Gas': 'Low T heating'},
            'Oil boiler': {'Oil': 'Low T heating'},
            'Heat pump': {'Electricity': 'Low T heating'},
        }},
        'Industry': {'Steel': {
            'BF-BOF': {'Coal': 'High T heating', 'Electricity': 'Stationary power'},
            'EAF': {'Electricity': 'High T heating'},
            'H2-DRI': {'Hydrogen': 'Feedstock', 'Electricity': 'Stationary power'},
        }},
    },
    'scenarios': {
        'Net Zero': {
            'Demand|Buildings|Residential|Heat pump': {
                'behavior': 's-curve', 'targetShare': 100,
                'targetYear': 2040, 'kValue': 0.4, 'midpointYear': 2032,
            },
            'Demand|Industry|Steel|BF-BOF': {'behavior': 'decline'},
            'Demand|Industry|Steel|H2-DRI': {
                'behavior': 's-curve', 'targetShare': 60,
                'targetYear': 2050, 'kValue': 0.3, 'midpointYear': 2040,
            },
            'Power|Power|Gas power': {'behavior': 'decline'},
            'Power|Power|Solar PV': {
                'behavior': 's-curve', 'targetShare': 90,
                'targetYear': 2050, 'kValue': 0.25, 'midpointYear': 2038,
            },
            'Hydrogen|Hydrogen|Electrolyser': {
                'behavior': 's-curve', 'targetShare': 80,
                'targetYear': 2050, 'kValue': 0.3, 'midpointYear': 2042,
            },
            'Hydrogen|Hydrogen|SMR': {'behavior': 'decline'},
        },
        'Reference': {},
    },
    'scenarioActivityGrowth': {
        'Net Zero': {
            'Buildings|Residential': {'p1': 1.01, 'p2': 1.0},
            'Industry|Steel': {'p1': 1.05, 'p2': 1.02},
        },
    },
}


@pytest.fixture
def dataset_dict():
    """Fresh copy of the test dataset in the loader's camelCase shape."""
    return copy.deepcopy(DATASET)


@pytest.fixture
def dataset(dataset_dict):
    return StructuredDataset.from_dict(dataset_dict)


@pytest.fixture
def net_zero(dataset):
    return ScenarioParameters.from_dataset(dataset, 'Net Zero')


@pytest.fixture
def reference(dataset):
    return ScenarioParameters.from_dataset(dataset, 'Reference')


@pytest.fixture
def single_tech_dataset():
    """
    One subsector with technologies A (70%) and B (30%), 2023-2050.

    No power or hydrogen pool; A consumes Gas, B Electricity.
    """
    return StructuredDataset.from_dict({
        'startYear': BASE_YEAR,
        'endYear': END_YEAR,
        'years': list(range(BASE_YEAR, END_YEAR + 1)),
        'sectors': ['Industry'],
        'subsectors': {'Industry': ['Cement']},
        'technologies': {'Industry': {'Cement': ['A', 'B']}},
        'baseActivity': {'Industry': {'Cement': 100.0}},
        'baseDemandTechMix': {'Industry': {'Cement': {'A': 70.0, 'B': 30.0}}},
        'unitEnergyConsumption': {'Industry': {'Cement': {
            'A': {'Gas': 2.0},
            'B': {'Electricity': 1.0},
        }}},
        'primaryFuels': ['Gas'],
    })
