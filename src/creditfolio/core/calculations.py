# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains static methods for the day-count, interest and cost primitives every
other component builds on. These functions are pure (math-only) and
independent of the loan and fund records; other modules should delegate to
these to ensure a single source of truth for financial calculations.

All rates are annual percentages (``14.0`` means 14% p.a.) and all time
scaling uses simple interest on a 360-day year.
"""

from __future__ import annotations

from typing import Dict, Iterable, Protocol

from .primitives.model import Model

DAYS_IN_YEAR = 360


class CostLike(Protocol):
    """Anything carrying a percentage-of-principal cost (e.g. CostItem)."""

    percentage: float


class FinancialCalculations:
    """
    Pure mathematical functions for loan and fund economics.

    Static methods only; no state, no I/O.
    """

    @staticmethod
    def calculate_interest(
        principal: float, rate: float, days: float, days_in_year: int = DAYS_IN_YEAR
    ) -> float:
        """
        Simple (flat) interest on a 360-day year.

        Args:
            principal: Loan amount
            rate: Annual interest rate in percent (e.g. 14 for 14%)
            days: Number of days

        Returns:
            Interest amount

        Example:
            ```python
            FinancialCalculations.calculate_interest(50_000, 20, 90)  # 2500.0
            ```
        """
        return (principal * (rate / 100) * days) / days_in_year

    @staticmethod
    def calculate_allocated_cost_of_capital(
        principal: float,
        fund_cost_rate: float,
        days: float,
        days_in_year: int = DAYS_IN_YEAR,
    ) -> float:
        """
        Cost of capital attributable to a loan for its duration.

        Same formula as interest, applied with the fund's blended rate.
        """
        return (principal * (fund_cost_rate / 100) * days) / days_in_year

    @staticmethod
    def calculate_variable_costs(principal: float, costs: Iterable[CostLike]) -> float:
        """Sum of percentage-of-principal costs (insurance, legal, etc.)."""
        total_percentage = sum(item.percentage for item in costs)
        return principal * (total_percentage / 100)

    @staticmethod
    def calculate_break_even_amount(
        principal: float,
        fund_cost_rate: float,
        days: float,
        costs: Iterable[CostLike],
        days_in_year: int = DAYS_IN_YEAR,
    ) -> float:
        """
        Amount a loan must return before it generates any profit.

        Break Even = Principal + Allocated Cost of Capital + Variable Costs
        """
        allocated_cost = FinancialCalculations.calculate_allocated_cost_of_capital(
            principal, fund_cost_rate, days, days_in_year
        )
        total_variable_cost = FinancialCalculations.calculate_variable_costs(
            principal, costs
        )
        return principal + allocated_cost + total_variable_cost

    @staticmethod
    def calculate_net_yield(
        principal: float,
        interest_rate: float,
        fund_cost_rate: float,
        days: float,
        costs: Iterable[CostLike],
        days_in_year: int = DAYS_IN_YEAR,
    ) -> float:
        """
        Profit on a single performing loan.

        Net Yield = Interest Income - Allocated Cost of Capital - Variable Costs

        Processing fees are a standalone revenue line and never enter net yield.
        """
        interest_income = FinancialCalculations.calculate_interest(
            principal, interest_rate, days, days_in_year
        )
        allocated_cost = FinancialCalculations.calculate_allocated_cost_of_capital(
            principal, fund_cost_rate, days, days_in_year
        )
        total_variable_cost = FinancialCalculations.calculate_variable_costs(
            principal, costs
        )
        return interest_income - allocated_cost - total_variable_cost

    @staticmethod
    def calculate_processing_fee(principal: float, fee_rate: float) -> float:
        """Upfront processing fee, collected at origination."""
        return principal * (fee_rate / 100)

    @staticmethod
    def calculate_weighted_cost_of_capital(
        existing_capital: float,
        existing_rate: float,
        new_capital: float,
        new_rate: float,
    ) -> float:
        """
        Blend an incoming capital raise into the fund's cost of capital (WACC).

        WACC = (C1 * r1 + dC * r2) / (C1 + dC)

        Raising zero additional capital returns the existing rate unchanged.

        Raises:
            ValueError: If the combined capital is not positive
        """
        total_capital = existing_capital + new_capital
        if total_capital <= 0:
            raise ValueError("Combined capital must be positive to blend rates")
        return (existing_capital * existing_rate + new_capital * new_rate) / total_capital

    @staticmethod
    def calculate_global_cost(
        total_raised: float, fund_cost_rate: float, days_in_year: int = DAYS_IN_YEAR
    ) -> "GlobalCost":
        """
        Cost of carrying the whole fund, whether deployed or not.

        Daily cost uses the 360-day basis; monthly is annual / 12.
        """
        annual = total_raised * (fund_cost_rate / 100)
        daily = annual / days_in_year
        return GlobalCost(
            annual=annual,
            monthly=annual / 12,
            weekly=daily * 7,
            daily=daily,
        )


class GlobalCost(Model):
    """Carrying cost of all raised capital at several granularities."""

    annual: float
    monthly: float
    weekly: float
    daily: float

    def as_dict(self) -> Dict[str, float]:
        return self.model_dump()

