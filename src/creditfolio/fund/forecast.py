# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Forward cash-flow forecast.

Projects the repayments still due on active loans, splits each repayment into
what it recovers (principal, upfront variable costs, allocated cost of
capital) and what it earns (yield), and tracks how much capital becomes
deployable again as those recoveries arrive.

Waterfall conventions:
- A loan's realized yield is ``max(0, repayment - break_even)`` where
  repayment includes the processing fee. The whole yield is attributed to the
  loan's final installment.
- The rest of each installment is split across principal, variable cost and
  cost of capital in proportion to their shares of the break-even amount.
- Only recoveries replenish available capital; yield does not.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from dateutil.relativedelta import relativedelta
from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    CashFlowEventTypeEnum,
    GlobalSettings,
    LoanStatusEnum,
    Model,
)
from ..loan.entities import Loan
from .entities import Fund
from .metrics import fund_loans

logger = logging.getLogger(__name__)


class CashFlowEvent(Model):
    """One expected repayment and its waterfall allocation."""

    event_date: date
    amount: float
    event_type: CashFlowEventTypeEnum = CashFlowEventTypeEnum.REPAYMENT
    loan_id: str
    borrower_name: str
    installment_number: Optional[int] = None
    total_installments: Optional[int] = None
    description: str
    principal_portion: float
    variable_cost_recovery: float
    coc_recovery: float
    realized_yield: float = 0.0

    @property
    def capital_recovery(self) -> float:
        """Portion of the repayment that becomes deployable again."""
        return self.principal_portion + self.variable_cost_recovery + self.coc_recovery


class CashFlowProjection(Model):
    """Available capital after all events on one date."""

    projection_date: date
    expected_repayments: float
    cumulative_available: float
    events: List[CashFlowEvent] = Field(default_factory=list)


class CashFlowSummary(Model):
    """Near-term liquidity and the range of the running balance."""

    next_30_days: float
    next_90_days: float
    peak_available: float
    lowest_available: float
    peak_date: date
    lowest_date: date


class CashFlowForecast(Model):
    projections: List[CashFlowProjection]
    summary: CashFlowSummary


class _LoanWaterfall(Model):
    """Loan-level totals that every installment's split is derived from."""

    total_repayment: float
    total_yield: float
    principal_share: float
    variable_cost_share: float
    coc_share: float

    def allocate(self, amount: float, yield_portion: float) -> Dict[str, float]:
        amount_for_break_even = amount - yield_portion
        return {
            "principal_portion": amount_for_break_even * self.principal_share,
            "variable_cost_recovery": amount_for_break_even * self.variable_cost_share,
            "coc_recovery": amount_for_break_even * self.coc_share,
            "realized_yield": yield_portion,
        }


def _loan_waterfall(loan: Loan, fund: Fund, settings: GlobalSettings) -> _LoanWaterfall:
    days_in_year = settings.calculation.days_in_year
    total_interest = FinancialCalculations.calculate_interest(
        loan.principal, loan.interest_rate, loan.duration_days, days_in_year
    )
    processing_fee = FinancialCalculations.calculate_processing_fee(
        loan.principal, loan.processing_fee_rate
    )
    variable_costs = FinancialCalculations.calculate_variable_costs(
        loan.principal, loan.variable_costs
    )
    allocated_coc = FinancialCalculations.calculate_allocated_cost_of_capital(
        loan.principal, fund.cost_of_capital_rate, loan.duration_days, days_in_year
    )
    total_repayment = loan.principal + total_interest + processing_fee
    break_even = loan.principal + variable_costs + allocated_coc
    return _LoanWaterfall(
        total_repayment=total_repayment,
        total_yield=max(0.0, total_repayment - break_even),
        principal_share=loan.principal / break_even,
        variable_cost_share=variable_costs / break_even,
        coc_share=allocated_coc / break_even,
    )


def repayment_events(
    fund: Fund,
    loans: Sequence[Loan],
    as_of: date,
    horizon_end: Optional[date] = None,
    settings: Optional[GlobalSettings] = None,
) -> List[CashFlowEvent]:
    """
    Future repayment events of active loans, in date order.

    Installments due on or after ``as_of`` (and on or before ``horizon_end``
    when given) are included. Closed and defaulted loans contribute nothing.
    A loan without stored installments contributes its bullet maturity.
    """
    settings = settings or GlobalSettings()
    events: List[CashFlowEvent] = []

    def in_window(due: date) -> bool:
        return due >= as_of and (horizon_end is None or due <= horizon_end)

    for loan in loans:
        if loan.status != LoanStatusEnum.ACTIVE:
            continue

        waterfall = _loan_waterfall(loan, fund, settings)

        if loan.installments:
            count = len(loan.installments)
            for idx, installment in enumerate(loan.installments):
                if not in_window(installment.due_date):
                    continue
                is_last = idx == count - 1
                yield_portion = waterfall.total_yield if is_last else 0.0
                events.append(
                    CashFlowEvent(
                        event_date=installment.due_date,
                        amount=installment.amount,
                        loan_id=loan.uid,
                        borrower_name=loan.borrower_name,
                        installment_number=idx + 1,
                        total_installments=count,
                        description=f"{loan.borrower_name} - Installment {idx + 1}/{count}",
                        **waterfall.allocate(installment.amount, yield_portion),
                    )
                )
        elif in_window(loan.maturity_date):
            events.append(
                CashFlowEvent(
                    event_date=loan.maturity_date,
                    amount=waterfall.total_repayment,
                    loan_id=loan.uid,
                    borrower_name=loan.borrower_name,
                    description=f"{loan.borrower_name} - Bullet Repayment",
                    **waterfall.allocate(
                        waterfall.total_repayment, waterfall.total_yield
                    ),
                )
            )

    return sorted(events, key=lambda event: event.event_date)


def _summarize(
    projections: List[CashFlowProjection],
    as_of: date,
    settings: GlobalSettings,
) -> CashFlowSummary:
    short_window, medium_window = settings.forecast.near_term_windows
    short_end = as_of + timedelta(days=short_window)
    medium_end = as_of + timedelta(days=medium_window)

    opening = projections[0]
    next_short = 0.0
    next_medium = 0.0
    peak_available = lowest_available = opening.cumulative_available
    peak_date = lowest_date = opening.projection_date

    for projection in projections:
        if projection.projection_date <= short_end:
            next_short += projection.expected_repayments
        if projection.projection_date <= medium_end:
            next_medium += projection.expected_repayments

        if projection.cumulative_available > peak_available:
            peak_available = projection.cumulative_available
            peak_date = projection.projection_date
        if projection.cumulative_available < lowest_available:
            lowest_available = projection.cumulative_available
            lowest_date = projection.projection_date

    return CashFlowSummary(
        next_30_days=next_short,
        next_90_days=next_medium,
        peak_available=peak_available,
        lowest_available=lowest_available,
        peak_date=peak_date,
        lowest_date=lowest_date,
    )


def compute_cash_flow_forecast(
    fund: Fund,
    loans: Sequence[Loan],
    months: Optional[int] = None,
    as_of: Optional[date] = None,
    settings: Optional[GlobalSettings] = None,
) -> CashFlowForecast:
    """
    Forecast repayments and available capital.

    Args:
        fund: The fund
        loans: Loans drawn against the fund
        months: Horizon in months (defaults to ``settings.forecast.horizon_months``,
            12; a horizon of None in settings includes every future event)
        as_of: Forecast date (defaults to today, read once per call)
        settings: Engine settings

    Returns:
        CashFlowForecast whose first projection is the opening balance on
        ``as_of``, followed by one projection per distinct event date.

    Example:
        ```python
        forecast = compute_cash_flow_forecast(fund, loans, months=6)
        forecast.summary.next_30_days
        ```
    """
    settings = settings or GlobalSettings()
    as_of = as_of or date.today()
    months = months if months is not None else settings.forecast.horizon_months
    horizon_end = as_of + relativedelta(months=months) if months is not None else None
    loans = fund_loans(fund, loans)

    events = repayment_events(fund, loans, as_of, horizon_end, settings)

    deployed = [loan for loan in loans if loan.is_deployed]
    deployed_principal = sum(loan.principal for loan in deployed)
    upfront_variable_costs = sum(
        FinancialCalculations.calculate_variable_costs(loan.principal, loan.variable_costs)
        for loan in deployed
    )
    running_available = fund.total_raised - deployed_principal - upfront_variable_costs

    events_by_date: Dict[date, List[CashFlowEvent]] = {}
    for event in events:
        events_by_date.setdefault(event.event_date, []).append(event)

    projections = [
        CashFlowProjection(
            projection_date=as_of,
            expected_repayments=0.0,
            cumulative_available=running_available,
        )
    ]
    for event_date, day_events in events_by_date.items():
        running_available += sum(event.capital_recovery for event in day_events)
        projections.append(
            CashFlowProjection(
                projection_date=event_date,
                expected_repayments=sum(event.amount for event in day_events),
                cumulative_available=running_available,
                events=day_events,
            )
        )

    logger.debug(
        f"{fund.name}: forecast {len(events)} repayment events over "
        f"{len(events_by_date)} dates through {horizon_end or 'maturity'}"
    )

    return CashFlowForecast(
        projections=projections,
        summary=_summarize(projections, as_of, settings),
    )
