# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Idle capital simulation.

Raised capital costs the fund money whether or not it is lent out. This
module replays every deployment and recovery since fund inception and
accrues the cost of capital on whatever sat undeployed in between, which is
the "leakage" from idle capital.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    CalculationSettings,
    CapitalEventKindEnum,
    Model,
    RepaymentTypeEnum,
)
from ..loan.entities import Loan
from ..loan.schedule import generate_schedule
from .entities import Fund

logger = logging.getLogger(__name__)


class CapitalEvent(Model):
    """A dated change to the fund's undeployed balance."""

    event_date: date
    delta: float
    kind: CapitalEventKindEnum
    loan_id: str


def recovery_dates(
    loan: Loan, settings: Optional[CalculationSettings] = None
) -> List[date]:
    """Dates on which a loan hands capital back: installments, or maturity for bullets."""
    settings = settings or CalculationSettings()
    if loan.repayment_type == RepaymentTypeEnum.BULLET:
        return [loan.maturity_date]
    if loan.installments:
        return [installment.due_date for installment in loan.installments]
    schedule = generate_schedule(
        loan.principal,
        loan.interest_rate,
        loan.start_date,
        loan.duration_days,
        loan.repayment_type,
        settings,
    )
    return [installment.due_date for installment in schedule]


def build_capital_events(
    loans: Sequence[Loan], settings: Optional[CalculationSettings] = None
) -> List[CapitalEvent]:
    """
    Deployment and recovery events for every loan, in date order.

    Each loan deploys principal plus upfront variable costs at its start
    date and recovers the same total across its installment dates (or at
    maturity for bullet loans). Same-day events keep loan order, with a
    loan's deployment ahead of its recoveries.
    """
    settings = settings or CalculationSettings()
    events: List[CapitalEvent] = []

    for loan in loans:
        upfront = loan.principal + FinancialCalculations.calculate_variable_costs(
            loan.principal, loan.variable_costs
        )
        events.append(
            CapitalEvent(
                event_date=loan.start_date,
                delta=-upfront,
                kind=CapitalEventKindEnum.DEPLOYMENT,
                loan_id=loan.uid,
            )
        )
        loan_recovery_dates = recovery_dates(loan, settings)
        per_recovery = upfront / len(loan_recovery_dates)
        events.extend(
            CapitalEvent(
                event_date=recovery_date,
                delta=per_recovery,
                kind=CapitalEventKindEnum.RECOVERY,
                loan_id=loan.uid,
            )
            for recovery_date in loan_recovery_dates
        )

    return sorted(events, key=lambda event: event.event_date)


def accumulated_undeployed_cost(
    fund: Fund,
    loans: Sequence[Loan],
    as_of: Optional[date] = None,
    settings: Optional[CalculationSettings] = None,
) -> float:
    """
    Cost of capital accrued on undeployed funds from inception to ``as_of``.

    Starting from ``total_raised`` available at ``fund.created_at``, each
    event is applied in date order exactly once. Between consecutive points
    in time, a positive available balance accrues
    ``available * rate / 100 / 360 * days``. Events after ``as_of`` are
    ignored and nothing accrues past it.

    Args:
        fund: Fund whose idle capital is simulated
        loans: Loans drawn against the fund
        as_of: Simulation end date (defaults to today)
        settings: Day-count basis

    Returns:
        Accumulated idle capital cost
    """
    settings = settings or CalculationSettings()
    as_of = as_of or date.today()
    daily_rate = fund.cost_of_capital_rate / 100 / settings.days_in_year

    available = fund.total_raised
    accumulated = 0.0
    cursor = fund.created_at
    applied = 0

    for event in build_capital_events(loans, settings):
        if event.event_date > as_of:
            break
        if event.event_date > cursor:
            if available > 0:
                accumulated += available * daily_rate * (event.event_date - cursor).days
            cursor = event.event_date
        available += event.delta
        applied += 1

    if as_of > cursor and available > 0:
        accumulated += available * daily_rate * (as_of - cursor).days

    logger.debug(
        f"{fund.name}: applied {applied} capital events through {as_of}, "
        f"idle capital cost {accumulated:,.2f}"
    )
    return accumulated
