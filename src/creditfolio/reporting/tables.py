# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tabular views of engine results.

These functions only reshape and format; they never perform financial
calculations. Monetary values are left as floats so callers can round for
display (two decimal places) at the last moment.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from ..fund.forecast import CashFlowForecast
from ..fund.metrics import FundMetrics
from ..loan.entities import Installment

SCHEDULE_COLUMNS = ["Installment", "Due Date", "Amount", "Principal", "Interest", "Status"]
FORECAST_COLUMNS = ["Expected Repayments", "Capital Recovered", "Cumulative Available", "Events"]


def format_currency(amount: float) -> str:
    """Format as US dollars, e.g. ``$1,234.56`` or ``-$1,234.56``."""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def format_percentage(rate: Optional[float]) -> str:
    """Format a percent value, e.g. ``12.34%``. None (no IRR) renders as ``N/A``."""
    if rate is None:
        return "N/A"
    return f"{rate:.2f}%"


def schedule_to_dataframe(installments: Sequence[Installment]) -> pd.DataFrame:
    """Repayment schedule as a DataFrame with a totals-friendly layout."""
    df = pd.DataFrame(
        [
            {
                "Installment": number,
                "Due Date": pd.Timestamp(installment.due_date),
                "Amount": installment.amount,
                "Principal": installment.principal_component,
                "Interest": installment.interest_component,
                "Status": installment.status.value,
            }
            for number, installment in enumerate(installments, start=1)
        ],
        columns=SCHEDULE_COLUMNS,
    )
    return df.set_index("Installment")


def forecast_to_dataframe(forecast: CashFlowForecast) -> pd.DataFrame:
    """
    One row per projection date, indexed by date.

    The opening projection and events due on the same day share one row:
    flows are summed and the closing cumulative balance is kept.
    """
    df = pd.DataFrame(
        [
            {
                "Date": pd.Timestamp(projection.projection_date),
                "Expected Repayments": projection.expected_repayments,
                "Capital Recovered": sum(
                    event.capital_recovery for event in projection.events
                ),
                "Cumulative Available": projection.cumulative_available,
                "Events": len(projection.events),
            }
            for projection in forecast.projections
        ],
        columns=["Date", *FORECAST_COLUMNS],
    )
    return df.groupby("Date", sort=False).agg(
        {
            "Expected Repayments": "sum",
            "Capital Recovered": "sum",
            "Cumulative Available": "last",
            "Events": "sum",
        }
    )


def metrics_to_series(metrics: FundMetrics) -> pd.Series:
    """Flat Series of every scalar fund metric, with global cost fields prefixed."""
    data = metrics.model_dump(exclude={"global_cost"})
    for key, value in metrics.global_cost.model_dump().items():
        data[f"global_cost_{key}"] = value
    return pd.Series(data, name="metrics")
