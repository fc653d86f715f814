# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Per-loan return metrics.

Gross IRR looks at the lender's cash only: principal out, principal plus
interest back. Net IRR also charges the upfront variable costs and the
allocated cost of capital. Processing fees are excluded from both.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from ..core.calculations import FinancialCalculations
from ..core.irr import CashFlow, xirr
from ..core.primitives import GlobalSettings, RepaymentTypeEnum
from .entities import Loan
from .schedule import generate_schedule


def _repayment_dates(loan: Loan, settings: GlobalSettings) -> List[date]:
    """Stored installment dates for monthly loans, otherwise the generated ones."""
    if loan.installments and loan.repayment_type == RepaymentTypeEnum.MONTHLY:
        return [installment.due_date for installment in loan.installments]
    schedule = generate_schedule(
        loan.principal,
        loan.interest_rate,
        loan.start_date,
        loan.duration_days,
        loan.repayment_type,
        settings.calculation,
    )
    return [installment.due_date for installment in schedule]


def loan_cash_flows(
    loan: Loan,
    cost_of_capital_rate: Optional[float] = None,
    settings: Optional[GlobalSettings] = None,
) -> List[CashFlow]:
    """
    Lender cash flows for a loan, with flat amounts regenerated from its terms.

    Stored installment dates are honored, but amounts are always the flat
    split of principal plus interest so hand-rounded schedules do not skew
    the rate. When ``cost_of_capital_rate`` is given the flows are net: the
    outflow includes upfront variable costs and each repayment is reduced by
    its share of allocated cost of capital.
    """
    settings = settings or GlobalSettings()
    days_in_year = settings.calculation.days_in_year

    dates = _repayment_dates(loan, settings)
    count = len(dates)
    total_interest = FinancialCalculations.calculate_interest(
        loan.principal, loan.interest_rate, loan.duration_days, days_in_year
    )
    per_installment = loan.principal / count + total_interest / count

    outflow = loan.principal
    if cost_of_capital_rate is not None:
        outflow += FinancialCalculations.calculate_variable_costs(
            loan.principal, loan.variable_costs
        )
        allocated_cost = FinancialCalculations.calculate_allocated_cost_of_capital(
            loan.principal, cost_of_capital_rate, loan.duration_days, days_in_year
        )
        per_installment -= allocated_cost / count

    flows = [CashFlow(amount=-outflow, flow_date=loan.start_date)]
    flows.extend(CashFlow(amount=per_installment, flow_date=due) for due in dates)
    return flows


def compute_loan_irr(
    loan: Loan, settings: Optional[GlobalSettings] = None
) -> Optional[float]:
    """Gross IRR of a single loan in percent, or None if unavailable."""
    settings = settings or GlobalSettings()
    return xirr(
        loan_cash_flows(loan, settings=settings),
        settings=settings.xirr,
        days_in_year=settings.calculation.days_in_year,
    )


def compute_loan_net_irr(
    loan: Loan, cost_of_capital_rate: float, settings: Optional[GlobalSettings] = None
) -> Optional[float]:
    """
    IRR of a single loan after variable costs and allocated cost of capital.

    Returns None when the loan cannot cover its costs in a way the solver can
    resolve (e.g. every net repayment is negative).
    """
    settings = settings or GlobalSettings()
    return xirr(
        loan_cash_flows(loan, cost_of_capital_rate, settings),
        settings=settings.xirr,
        days_in_year=settings.calculation.days_in_year,
    )
