# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the day-count, interest and cost primitives.

Expected values are computed inline from the textbook formulas rather than by
calling the library, to avoid circular testing.
"""

import pytest

from creditfolio.core.calculations import DAYS_IN_YEAR, FinancialCalculations
from creditfolio.loan import CostItem


class TestInterest:
    """Simple interest on a 360-day year."""

    def test_day_count_basis_is_360(self):
        assert DAYS_IN_YEAR == 360

    def test_reference_scenario(self):
        assert FinancialCalculations.calculate_interest(50_000, 20, 90) == pytest.approx(2500.0)

    @pytest.mark.parametrize(
        "principal, rate, days",
        [
            (100_000, 14, 360),
            (75_000, 9.5, 45),
            (1_234.56, 0, 30),
            (10_000_000, 22.75, 721),
        ],
    )
    def test_matches_flat_formula(self, principal, rate, days):
        expected = principal * rate / 100 * days / 360
        assert FinancialCalculations.calculate_interest(principal, rate, days) == pytest.approx(expected)

    def test_no_compounding_beyond_one_year(self):
        """Two years of interest is exactly twice one year."""
        one_year = FinancialCalculations.calculate_interest(100_000, 12, 360)
        two_years = FinancialCalculations.calculate_interest(100_000, 12, 720)
        assert two_years == pytest.approx(2 * one_year)

    def test_custom_day_count(self):
        assert FinancialCalculations.calculate_interest(36_500, 10, 365, days_in_year=365) == pytest.approx(3650.0)


class TestCostAllocation:
    """Cost of capital, variable costs and break-even."""

    def test_allocated_cost_of_capital(self):
        assert FinancialCalculations.calculate_allocated_cost_of_capital(50_000, 10, 90) == pytest.approx(1250.0)

    def test_variable_costs_sum_percentages(self):
        costs = [CostItem(name="Insurance", percentage=1.5), CostItem(name="Legal", percentage=0.5)]
        assert FinancialCalculations.calculate_variable_costs(100_000, costs) == pytest.approx(2000.0)

    def test_variable_costs_order_irrelevant(self):
        costs = [CostItem(name="A", percentage=0.25), CostItem(name="B", percentage=1.75)]
        forward = FinancialCalculations.calculate_variable_costs(80_000, costs)
        backward = FinancialCalculations.calculate_variable_costs(80_000, list(reversed(costs)))
        assert forward == pytest.approx(backward)

    def test_no_variable_costs(self):
        assert FinancialCalculations.calculate_variable_costs(100_000, []) == 0.0

    def test_break_even_reference_scenario(self):
        assert FinancialCalculations.calculate_break_even_amount(50_000, 10, 90, []) == pytest.approx(51_250.0)

    def test_break_even_includes_variable_costs(self):
        costs = [CostItem(name="Insurance", percentage=2)]
        # 50,000 + 1,250 CoC + 1,000 insurance
        assert FinancialCalculations.calculate_break_even_amount(50_000, 10, 90, costs) == pytest.approx(52_250.0)

    def test_net_yield(self):
        assert FinancialCalculations.calculate_net_yield(50_000, 20, 10, 90, []) == pytest.approx(1250.0)

    def test_processing_fee(self):
        assert FinancialCalculations.calculate_processing_fee(100_000, 2) == pytest.approx(2000.0)
        assert FinancialCalculations.calculate_processing_fee(100_000, 0) == 0.0


class TestWeightedCostOfCapital:
    """WACC merge when new capital is raised."""

    def test_blend(self):
        wacc = FinancialCalculations.calculate_weighted_cost_of_capital(100_000, 10, 50_000, 16)
        assert wacc == pytest.approx((100_000 * 10 + 50_000 * 16) / 150_000)
        assert wacc == pytest.approx(12.0)

    def test_zero_raise_is_noop(self):
        wacc = FinancialCalculations.calculate_weighted_cost_of_capital(100_000, 10, 50_000, 16)
        again = FinancialCalculations.calculate_weighted_cost_of_capital(150_000, wacc, 0, 99)
        assert again == pytest.approx(wacc)

    def test_no_capital_raises(self):
        with pytest.raises(ValueError):
            FinancialCalculations.calculate_weighted_cost_of_capital(0, 10, 0, 12)


class TestGlobalCost:
    def test_granularities(self):
        cost = FinancialCalculations.calculate_global_cost(360_000, 10)
        assert cost.annual == pytest.approx(36_000)
        assert cost.daily == pytest.approx(100)
        assert cost.weekly == pytest.approx(700)
        assert cost.monthly == pytest.approx(3000)
        assert set(cost.as_dict()) == {"annual", "monthly", "weekly", "daily"}
