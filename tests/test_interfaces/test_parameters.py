# tests/test_interfaces/test_parameters.py

import math

import pytest

from pysem.interfaces import (
    Behavior,
    DeclineBehavior,
    FixedBehavior,
    GrowthFactors,
    SCurveBehavior,
    ScenarioParameters,
    StructuredDataset,
    available_scenarios,
    parse_behavior,
)


class TestGrowthFactors:

    def test_defaults(self):
        factors = GrowthFactors()
        assert (factors.p1, factors.p2, factors.split_year) == (1.0, 1.0, 2035)

    @pytest.mark.parametrize("year, expected", [
        (2024, 1.05), (2035, 1.05), (2036, 1.02), (2050, 1.02),
    ])
    def test_phase_factor(self, year, expected):
        assert GrowthFactors(p1=1.05, p2=1.02).factor_for(year) == expected

    def test_nan_factor_is_no_growth(self):
        assert GrowthFactors(p1=math.nan).factor_for(2030) == 1.0

    def test_from_dict(self):
        factors = GrowthFactors.from_dict({'p1': '1.03', 'splitYear': 2030})
        assert factors == GrowthFactors(p1=1.03, p2=1.0, split_year=2030)


class TestParseBehavior:

    def test_fixed(self):
        assert parse_behavior({'behavior': 'fixed'}) == FixedBehavior()

    def test_decline(self):
        assert parse_behavior({'behavior': 'decline'}).behavior is Behavior.DECLINE

    def test_s_curve(self):
        spec = parse_behavior({
            'behavior': 's-curve', 'targetShare': 80, 'targetYear': 2050,
            'kValue': 0.2, 'midpointYear': 2037,
        })
        assert spec == SCurveBehavior(80.0, 2050.0, 0.2, 2037.0)

    def test_s_curve_missing_numbers_are_nan(self):
        spec = parse_behavior({'behavior': 's-curve', 'targetShare': 80})
        assert spec.target_share == 80.0
        assert math.isnan(spec.k_value)
        assert math.isnan(spec.midpoint_year)

    @pytest.mark.parametrize("raw", [None, {}, 'fixed', {'behavior': 'exponential'}])
    def test_anything_else_is_fixed(self, raw):
        assert parse_behavior(raw) == FixedBehavior()

    def test_variant_passes_through(self):
        spec = DeclineBehavior()
        assert parse_behavior(spec) is spec

    def test_s_curve_to_dict(self):
        spec = SCurveBehavior(80.0, 2050.0, 0.2, 2037.0)
        assert parse_behavior(spec.to_dict()) == spec


class TestScenarioParameters:

    def test_from_dict(self):
        params = ScenarioParameters.from_dict({
            'activityGrowthFactors': {'Industry|Steel': {'p1': 1.02, 'p2': 1.01}},
            'techBehaviorsAndParams': {'Demand|Industry|Steel|EAF': {'behavior': 'decline'}},
        }, name='custom')
        assert params.name == 'custom'
        assert params.growth_for('Industry', 'Steel').p1 == 1.02
        assert params.behaviors_for('Demand|Industry|Steel', ['EAF', 'BF-BOF']) == {
            'EAF': DeclineBehavior(),
            'BF-BOF': FixedBehavior(),
        }

    def test_missing_growth_is_no_growth(self):
        assert ScenarioParameters().growth_for('Industry', 'Steel') == GrowthFactors()

    def test_from_dataset(self, dataset):
        params = ScenarioParameters.from_dataset(dataset, 'Net Zero')
        assert params.name == 'Net Zero'
        assert params.growth_for('Industry', 'Steel') == GrowthFactors(p1=1.05, p2=1.02)
        assert params.tech_behaviors['Power|Power|Gas power'] == DeclineBehavior()
        assert params.tech_behaviors['Demand|Industry|Steel|EAF'] == FixedBehavior()
        assert params.tech_behaviors['Hydrogen|Hydrogen|Electrolyser'].behavior is Behavior.S_CURVE

    def test_from_dataset_covers_every_technology(self, dataset):
        params = ScenarioParameters.from_dataset(dataset, 'Reference')
        assert len(params.tech_behaviors) == 3 + 3 + 2 + 2
        assert all(spec == FixedBehavior() for spec in params.tech_behaviors.values())
        assert params.growth_for('Buildings', 'Residential') == GrowthFactors()

    def test_zero_growth_factor_falls_back_to_one(self, dataset_dict):
        dataset_dict['scenarioActivityGrowth']['Net Zero']['Industry|Steel'] = {'p1': 0, 'p2': None}
        params = ScenarioParameters.from_dataset(StructuredDataset.from_dict(dataset_dict), 'Net Zero')
        assert params.growth_for('Industry', 'Steel') == GrowthFactors()

    def test_unknown_scenario(self, dataset):
        with pytest.raises(KeyError, match="Unknown scenario"):
            ScenarioParameters.from_dataset(dataset, 'Imaginary')

    def test_available_scenarios(self, dataset):
        assert available_scenarios(dataset) == ['Net Zero', 'Reference']

    def test_to_dict_round_trip(self, net_zero):
        rebuilt = ScenarioParameters.from_dict(net_zero.to_dict(), name=net_zero.name)
        assert rebuilt == net_zero

    def test_raw_behaviour_mappings_are_parsed(self):
        params = ScenarioParameters(tech_behaviors={
            'Demand|Industry|Steel|EAF': {'behavior': 'decline'},
            'Demand|Industry|Steel|H2-DRI': {
                'behavior': 's-curve', 'targetShare': 60, 'targetYear': 2050,
                'kValue': 0.3, 'midpointYear': 2040,
            },
        })
        assert params.behaviors_for('Demand|Industry|Steel', ['EAF', 'H2-DRI', 'BF-BOF']) == {
            'EAF': DeclineBehavior(),
            'H2-DRI': SCurveBehavior(60.0, 2050.0, 0.3, 2040.0),
            'BF-BOF': FixedBehavior(),
        }
        assert params.to_dict()['techBehaviorsAndParams']['Demand|Industry|Steel|EAF'] == {
            'behavior': 'decline',
        }
