# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
Creditfolio - Private Credit Fund Economics Engine

Pure, synchronous calculations for a loan portfolio drawn against a pool of
capital raised at a blended cost: flat-interest schedules, cost of capital
allocation, XIRR, fund metrics and forward cash-flow forecasts.

Key Entry Points:
- creditfolio.generate_schedule() - Bullet or monthly repayment schedule
- creditfolio.compute_loan_irr() / compute_loan_net_irr() - Per-loan returns
- creditfolio.compute_fund_metrics() - Capital, yield, NAV/AUM, portfolio IRR
- creditfolio.compute_cash_flow_forecast() - Repayment waterfall and liquidity
- creditfolio.xirr() - 360-day-year Newton-Raphson XIRR

Example Usage:
    ```python
    from datetime import date
    from creditfolio import Fund, compute_fund_metrics, originate_loan

    fund = Fund(name="Fund I", total_raised=100_000, cost_of_capital_rate=10)
    loan = originate_loan(
        borrower_name="Acme Trading",
        principal=50_000,
        interest_rate=20,
        start_date=date(2024, 1, 1),
        duration_days=90,
    )
    metrics = compute_fund_metrics(fund, [loan])
    print(f"Net yield: {metrics.net_yield:,.2f}")  # Net yield: 1,250.00
    ```
"""

# Add a NullHandler to the package logger to prevent "No handlers could be found"
# warnings when the library is used in applications that don't configure logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [  # noqa: F822 - lazy loading
    # Subpackages
    "core",
    "fund",
    "loan",
    "reporting",
    # Records
    "CashFlow",
    "CostItem",
    "Fund",
    "Installment",
    "Loan",
    "GlobalSettings",
    # Operations
    "compute_cash_flow_forecast",
    "compute_fund_metrics",
    "compute_loan_irr",
    "compute_loan_net_irr",
    "generate_schedule",
    "originate_loan",
    "raise_capital",
    "xirr",
]


_LAZY_MODULES = {
    "core": "creditfolio.core",
    "fund": "creditfolio.fund",
    "loan": "creditfolio.loan",
    "reporting": "creditfolio.reporting",
}

_LAZY_ATTRIBUTES = {
    "CashFlow": "creditfolio.core",
    "xirr": "creditfolio.core",
    "GlobalSettings": "creditfolio.core.primitives",
    "CostItem": "creditfolio.loan",
    "Installment": "creditfolio.loan",
    "Loan": "creditfolio.loan",
    "generate_schedule": "creditfolio.loan",
    "originate_loan": "creditfolio.loan",
    "compute_loan_irr": "creditfolio.loan",
    "compute_loan_net_irr": "creditfolio.loan",
    "Fund": "creditfolio.fund",
    "raise_capital": "creditfolio.fund",
    "compute_fund_metrics": "creditfolio.fund",
    "compute_cash_flow_forecast": "creditfolio.fund",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is not None:
        module = importlib.import_module(module_path)
        globals()[name] = module
        return module

    module_path = _LAZY_ATTRIBUTES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'creditfolio' has no attribute '{name}'")
    value = getattr(importlib.import_module(module_path), name)
    globals()[name] = value
    return value
