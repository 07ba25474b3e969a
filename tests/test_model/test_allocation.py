# tests/test_model/test_allocation.py

import math

import numpy as np
import pytest

from pysem.interfaces.parameters import DeclineBehavior, FixedBehavior, SCurveBehavior
from pysem.model.allocation import allocate_category_mix


def total(shares):
    return sum(shares.values())


class TestAllocateFixedAndDecline:
    """Categories without s-curve technologies."""

    def test_all_fixed_keeps_base_mix(self):
        shares = allocate_category_mix(
            ['A', 'B', 'C'], {'A': 50, 'B': 30, 'C': 20}, {}, 2030, 2023
        )
        assert shares == pytest.approx({'A': 50.0, 'B': 30.0, 'C': 20.0})

    def test_missing_behaviours_default_to_fixed(self):
        shares = allocate_category_mix(['A', 'B'], {'A': 60, 'B': 40}, {}, 2040, 2023)
        assert shares == pytest.approx({'A': 60.0, 'B': 40.0})

    @pytest.mark.parametrize("year", [2023, 2030, 2050])
    def test_decline_without_s_curve_keeps_base_share(self, year):
        shares = allocate_category_mix(
            ['A', 'B'], {'A': 75, 'B': 25},
            {'A': FixedBehavior(), 'B': DeclineBehavior()}, year, 2023,
        )
        assert shares == pytest.approx({'A': 75.0, 'B': 25.0})

    def test_base_mix_not_summing_to_100_is_normalised(self):
        shares = allocate_category_mix(['A', 'B'], {'A': 30, 'B': 10}, {}, 2030, 2023)
        assert shares == pytest.approx({'A': 75.0, 'B': 25.0})
        assert total(shares) == pytest.approx(100.0, abs=1e-6)

    def test_zero_base_mix_stays_zero(self):
        shares = allocate_category_mix(['A', 'B'], {}, {}, 2030, 2023)
        assert shares == {'A': 0.0, 'B': 0.0}

    def test_nan_base_share_treated_as_zero(self):
        shares = allocate_category_mix(['A', 'B'], {'A': math.nan, 'B': 40}, {}, 2030, 2023)
        assert shares == pytest.approx({'A': 0.0, 'B': 100.0})

    def test_empty_category(self):
        assert allocate_category_mix([], {}, {}, 2030, 2023) == {}


class TestAllocateSCurve:
    """S-curve technologies take priority over fixed and decline ones."""

    def test_s_curve_displaces_fixed(self):
        behaviors = {'B': SCurveBehavior(100, 2050, 0.2, 2037)}
        mix_2023 = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2023, 2023)
        mix_2040 = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2040, 2023)

        assert mix_2023 == pytest.approx({'A': 70.0, 'B': 30.0})
        assert mix_2040['B'] > 30.0
        assert total(mix_2040) == pytest.approx(100.0, abs=1e-6)

    def test_dominant_tech_override(self):
        behaviors = {'B': SCurveBehavior(100, 2050, 0.2, 2037)}
        shares = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2050, 2023)
        assert shares == {'A': 0.0, 'B': 100.0}

    def test_dominant_override_holds_after_target_year(self):
        behaviors = {'B': SCurveBehavior(100, 2040, 0.3, 2032)}
        shares = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2045, 2023)
        assert shares == {'A': 0.0, 'B': 100.0}

    def test_no_override_before_target_year(self):
        behaviors = {'B': SCurveBehavior(100, 2050, 0.2, 2037)}
        shares = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2049, 2023)
        assert 0.0 < shares['A'] < 70.0

    def test_first_dominant_tech_wins(self):
        behaviors = {
            'B': SCurveBehavior(100, 2040, 0.3, 2032),
            'C': SCurveBehavior(100, 2040, 0.3, 2032),
        }
        shares = allocate_category_mix(
            ['A', 'B', 'C'], {'A': 60, 'B': 20, 'C': 20}, behaviors, 2045, 2023
        )
        assert shares == {'A': 0.0, 'B': 100.0, 'C': 0.0}

    def test_fixed_filled_before_decline(self):
        # B grows from 20 to 50: fixed A keeps 40, decline C absorbs the rest
        behaviors = {
            'A': FixedBehavior(),
            'B': SCurveBehavior(50, 2040, 0.3, 2032),
            'C': DeclineBehavior(),
        }
        shares = allocate_category_mix(
            ['A', 'B', 'C'], {'A': 40, 'B': 20, 'C': 40}, behaviors, 2040, 2023
        )
        assert shares['B'] == pytest.approx(50.0)
        assert shares['A'] == pytest.approx(40.0)
        assert shares['C'] == pytest.approx(10.0)

    def test_fixed_scaled_when_budget_short(self):
        behaviors = {
            'A': FixedBehavior(),
            'B': SCurveBehavior(80, 2040, 0.3, 2032),
            'C': DeclineBehavior(),
        }
        shares = allocate_category_mix(
            ['A', 'B', 'C'], {'A': 40, 'B': 20, 'C': 40}, behaviors, 2040, 2023
        )
        assert shares['B'] == pytest.approx(80.0)
        assert shares['A'] == pytest.approx(20.0)
        assert shares['C'] == pytest.approx(0.0)

    def test_competing_s_curves_are_normalised(self):
        behaviors = {
            'A': SCurveBehavior(70, 2040, 0.3, 2032),
            'B': SCurveBehavior(70, 2040, 0.3, 2032),
        }
        shares = allocate_category_mix(['A', 'B'], {'A': 50, 'B': 50}, behaviors, 2040, 2023)
        assert shares == pytest.approx({'A': 50.0, 'B': 50.0})

    def test_nan_s_curve_keeps_base_share(self):
        behaviors = {'B': SCurveBehavior(math.nan, 2050, 0.2, 2037)}
        shares = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2040, 2023)
        assert shares == pytest.approx({'A': 70.0, 'B': 30.0})

    @pytest.mark.parametrize("year", range(2023, 2051))
    def test_shares_sum_to_100(self, year):
        behaviors = {
            'A': DeclineBehavior(),
            'B': SCurveBehavior(60, 2050, 0.3, 2040),
            'C': SCurveBehavior(25, 2045, 0.2, 2035),
            'D': FixedBehavior(),
        }
        shares = allocate_category_mix(
            ['A', 'B', 'C', 'D'], {'A': 50, 'B': 5, 'C': 10, 'D': 35}, behaviors, year, 2023
        )
        assert total(shares) == pytest.approx(100.0, abs=1e-6)
        assert all(share >= 0.0 for share in shares.values())


class TestAllocateInputTypes:
    """Base mixes and behaviours as loaders hand them over."""

    def test_numpy_integer_base_shares(self):
        shares = allocate_category_mix(
            ['A', 'B'], {'A': np.int64(70), 'B': np.int64(30)}, {}, 2030, 2023
        )
        assert shares == pytest.approx({'A': 70.0, 'B': 30.0})

    def test_bool_base_share_ignored(self):
        shares = allocate_category_mix(['A', 'B'], {'A': True, 'B': 30}, {}, 2030, 2023)
        assert shares == pytest.approx({'A': 0.0, 'B': 100.0})

    def test_raw_behaviour_mappings(self):
        behaviors = {
            'A': {'behavior': 'decline'},
            'B': {'behavior': 's-curve', 'targetShare': 100, 'targetYear': 2050,
                  'kValue': 0.2, 'midpointYear': 2037},
        }
        shares = allocate_category_mix(['A', 'B'], {'A': 70, 'B': 30}, behaviors, 2050, 2023)
        assert shares == {'A': 0.0, 'B': 100.0}
