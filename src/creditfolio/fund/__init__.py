# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .capital import (
    CapitalEvent,
    accumulated_undeployed_cost,
    build_capital_events,
    recovery_dates,
)
from .entities import Fund, raise_capital
from .forecast import (
    CashFlowEvent,
    CashFlowForecast,
    CashFlowProjection,
    CashFlowSummary,
    compute_cash_flow_forecast,
    repayment_events,
)
from .metrics import (
    FundMetrics,
    LoanEconomics,
    PortfolioLedger,
    compute_fund_metrics,
    evaluate_loan,
    fund_loans,
    portfolio_cash_flows,
)

__all__ = [
    # Records
    "Fund",
    "raise_capital",
    # Idle capital
    "CapitalEvent",
    "accumulated_undeployed_cost",
    "build_capital_events",
    "recovery_dates",
    # Metrics
    "FundMetrics",
    "LoanEconomics",
    "PortfolioLedger",
    "compute_fund_metrics",
    "evaluate_loan",
    "fund_loans",
    "portfolio_cash_flows",
    # Forecast
    "CashFlowEvent",
    "CashFlowForecast",
    "CashFlowProjection",
    "CashFlowSummary",
    "compute_cash_flow_forecast",
    "repayment_events",
]
