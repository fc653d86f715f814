# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import pandas as pd
import pytest

from creditfolio.fund import compute_cash_flow_forecast, compute_fund_metrics
from creditfolio.reporting import (
    forecast_to_dataframe,
    format_currency,
    format_percentage,
    metrics_to_series,
    schedule_to_dataframe,
)
from tests.conftest import AS_OF, create_test_loan, days_from_as_of


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "$0.00"),
        (1234.567, "$1,234.57"),
        (-1250, "-$1,250.00"),
        (1_000_000, "$1,000,000.00"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_percentage():
    assert format_percentage(21.550625) == "21.55%"
    assert format_percentage(None) == "N/A"


def test_schedule_to_dataframe(monthly_loan):
    df = schedule_to_dataframe(monthly_loan.installments)

    assert list(df.columns) == ["Due Date", "Amount", "Principal", "Interest", "Status"]
    assert df.index.name == "Installment"
    assert list(df.index) == list(range(1, 13))
    assert df["Amount"].sum() == pytest.approx(13_440)
    assert (df["Status"] == "PENDING").all()
    assert df["Due Date"].iloc[0] == pd.Timestamp(monthly_loan.installments[0].due_date)


def test_forecast_to_dataframe(fund, bullet_loan):
    forecast = compute_cash_flow_forecast(fund, [bullet_loan], as_of=AS_OF)
    df = forecast_to_dataframe(forecast)

    assert len(df) == 2
    assert df.index.name == "Date"
    assert df["Capital Recovered"].tolist() == pytest.approx([0.0, 51_250])
    assert df["Cumulative Available"].iloc[-1] == pytest.approx(101_250)
    assert df["Events"].tolist() == [0, 1]


def test_metrics_to_series(fund, bullet_loan):
    series = metrics_to_series(compute_fund_metrics(fund, [bullet_loan], as_of=AS_OF))

    assert series["net_yield"] == pytest.approx(1_250)
    assert series["global_cost_annual"] == pytest.approx(10_000)
    assert "global_cost" not in series.index


def test_forecast_to_dataframe_merges_same_day_rows(fund):
    """A repayment due on the forecast date folds into the opening row."""
    maturing = create_test_loan(start_date=days_from_as_of(-90))
    forecast = compute_cash_flow_forecast(fund, [maturing], as_of=AS_OF)
    df = forecast_to_dataframe(forecast)

    assert len(forecast.projections) == 2
    assert df.index.is_unique
    row = df.loc[pd.Timestamp(AS_OF)]
    assert row["Expected Repayments"] == pytest.approx(52_500)
    assert row["Capital Recovered"] == pytest.approx(51_250)
    assert row["Cumulative Available"] == pytest.approx(101_250)
    assert row["Events"] == 1
