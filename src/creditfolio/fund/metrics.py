# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Fund-level metrics.

Combines a fund with its loans into capital, income, expense, yield,
valuation and return figures. The aggregation is a single fold: each loan is
reduced to a :class:`LoanEconomics` record and added into a
:class:`PortfolioLedger` accumulator whose named fields make every figure
auditable on its own.

Cost and income attribution always uses a loan's original principal, even
after partial recovery. Processing fees are reported as a standalone line and
never enter income, yield, NPL volume or IRR.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from ..core.calculations import FinancialCalculations, GlobalCost
from ..core.irr import CashFlow, xirr
from ..core.primitives import (
    GlobalSettings,
    LoanStatusEnum,
    Model,
    RepaymentTypeEnum,
)
from ..loan.entities import Loan
from .capital import accumulated_undeployed_cost, recovery_dates
from .entities import Fund

logger = logging.getLogger(__name__)


class LoanEconomics(Model):
    """Per-loan contribution to the fund ledger."""

    loan_id: str
    status: LoanStatusEnum
    principal: float
    interest_income: float
    processing_fee: float
    allocated_cost_of_capital: float
    variable_costs: float
    recovered_principal: float
    recovered_variable_costs: float
    npl_principal: float
    npl_volume: float

    @property
    def expenses(self) -> float:
        return self.allocated_cost_of_capital + self.variable_costs


@dataclass
class PortfolioLedger:
    """Running totals for the metrics fold."""

    interest_income: float = 0.0
    processing_fees: float = 0.0
    expenses: float = 0.0
    allocated_cost_of_capital: float = 0.0  # Non-defaulted loans only
    gross_deployed_principal: float = 0.0
    recovered_principal: float = 0.0
    upfront_variable_costs: float = 0.0
    recovered_variable_costs: float = 0.0
    npl_principal: float = 0.0
    npl_volume: float = 0.0
    loan_count: int = 0

    def add(self, entry: LoanEconomics) -> "PortfolioLedger":
        self.loan_count += 1
        self.interest_income += entry.interest_income
        self.processing_fees += entry.processing_fee
        self.expenses += entry.expenses
        self.npl_principal += entry.npl_principal
        self.npl_volume += entry.npl_volume

        if entry.status != LoanStatusEnum.DEFAULTED:
            self.allocated_cost_of_capital += entry.allocated_cost_of_capital

        if entry.status in (LoanStatusEnum.ACTIVE, LoanStatusEnum.DEFAULTED):
            self.gross_deployed_principal += entry.principal
            self.upfront_variable_costs += entry.variable_costs
            self.recovered_principal += entry.recovered_principal
            self.recovered_variable_costs += entry.recovered_variable_costs
        return self

    @property
    def net_deployed_principal(self) -> float:
        return self.gross_deployed_principal - self.recovered_principal

    @property
    def net_upfront_variable_costs(self) -> float:
        return self.upfront_variable_costs - self.recovered_variable_costs

    @property
    def net_yield(self) -> float:
        """Interest income less expenses and NPL principal losses (cash basis)."""
        return self.interest_income - self.expenses - self.npl_principal


class FundMetrics(Model):
    """
    Aggregated metrics for one fund.

    Attributes:
        deployed_capital: Principal of active and defaulted loans net of
            principal already recovered through past installments
        available_capital: Raised less net deployed principal and unrecovered
            upfront variable costs
        npl_volume: Principal plus flat interest of defaulted loans
        npl_ratio: Defaulted principal as a percent of capital raised. Measured
            on principal while ``npl_volume`` includes interest.
        projected_income: Interest income on performing principal
        total_expenses: Allocated cost of capital plus variable costs, all loans
        total_allocated_cost_of_capital: Cost of capital on non-defaulted loans
        accumulated_undeployed_cost: Cost of capital on idle funds since inception
        net_yield: Income less expenses less NPL principal
        nav: Raised + allocated cost of capital - NPL principal
        aum: Raised + allocated cost of capital + net yield
        portfolio_irr: Realized IRR (defaulted loans return nothing), percent
        projected_portfolio_irr: IRR if every loan repays as scheduled, percent
    """

    total_raised: float
    gross_deployed_capital: float
    recovered_principal: float
    deployed_capital: float
    total_upfront_costs_deployed: float
    available_capital: float
    npl_volume: float
    npl_principal_loss: float
    npl_ratio: float
    projected_income: float
    total_processing_fees: float
    total_expenses: float
    total_allocated_cost_of_capital: float
    accumulated_undeployed_cost: float
    net_yield: float
    nav: float
    aum: float
    global_cost: GlobalCost
    portfolio_irr: Optional[float] = None
    projected_portfolio_irr: Optional[float] = None
    loan_count: int = 0


def evaluate_loan(
    loan: Loan,
    fund: Fund,
    as_of: date,
    settings: Optional[GlobalSettings] = None,
) -> LoanEconomics:
    """
    Reduce a loan to its contribution to the fund ledger as of a date.

    Monthly loans recover ``1/n`` of principal and upfront variable costs for
    each installment due on or before ``as_of``. Bullet loans recover nothing
    while they remain deployed.
    """
    settings = settings or GlobalSettings()
    days_in_year = settings.calculation.days_in_year
    days = loan.duration_days

    allocated_cost = FinancialCalculations.calculate_allocated_cost_of_capital(
        loan.principal, fund.cost_of_capital_rate, days, days_in_year
    )
    variable_cost = FinancialCalculations.calculate_variable_costs(
        loan.principal, loan.variable_costs
    )
    # Income accrues only on the performing portion of principal
    interest_income = FinancialCalculations.calculate_interest(
        loan.active_principal, loan.interest_rate, days, days_in_year
    )
    processing_fee = (
        0.0
        if loan.is_defaulted
        else FinancialCalculations.calculate_processing_fee(
            loan.principal, loan.processing_fee_rate
        )
    )

    recovered_principal = 0.0
    recovered_variable_costs = 0.0
    if loan.repayment_type == RepaymentTypeEnum.MONTHLY:
        dates = recovery_dates(loan, settings.calculation)
        elapsed = sum(1 for due in dates if due <= as_of)
        recovered_principal = loan.principal / len(dates) * elapsed
        recovered_variable_costs = variable_cost / len(dates) * elapsed

    npl_principal = 0.0
    npl_volume = 0.0
    if loan.is_defaulted:
        npl_principal = loan.principal
        npl_volume = loan.principal + FinancialCalculations.calculate_interest(
            loan.principal, loan.interest_rate, days, days_in_year
        )

    return LoanEconomics(
        loan_id=loan.uid,
        status=loan.status,
        principal=loan.principal,
        interest_income=interest_income,
        processing_fee=processing_fee,
        allocated_cost_of_capital=allocated_cost,
        variable_costs=variable_cost,
        recovered_principal=recovered_principal,
        recovered_variable_costs=recovered_variable_costs,
        npl_principal=npl_principal,
        npl_volume=npl_volume,
    )


def portfolio_cash_flows(
    loans: Sequence[Loan], include_defaulted_inflows: bool
) -> List[CashFlow]:
    """
    Lender cash flows across a portfolio.

    One ``-principal`` outflow per loan at its start date, plus its scheduled
    installments as inflows. When ``include_defaulted_inflows`` is False,
    defaulted loans contribute no inflows (total loss).
    """
    flows: List[CashFlow] = []
    for loan in loans:
        flows.append(CashFlow(amount=-loan.principal, flow_date=loan.start_date))

        if loan.is_defaulted and not include_defaulted_inflows:
            continue

        if loan.installments:
            flows.extend(
                CashFlow(amount=installment.amount, flow_date=installment.due_date)
                for installment in loan.installments
            )
        else:
            flows.append(
                CashFlow(
                    amount=loan.expected_total_repayment,
                    flow_date=loan.maturity_date,
                )
            )
    return flows


def fund_loans(fund: Fund, loans: Sequence[Loan]) -> List[Loan]:
    """Loans drawn against ``fund``; loans tagged with another fund are skipped."""
    selected = [loan for loan in loans if loan.fund_id in (None, fund.uid)]
    skipped = len(loans) - len(selected)
    if skipped:
        logger.warning(f"{fund.name}: ignoring {skipped} loan(s) from other funds")
    return selected


def compute_fund_metrics(
    fund: Fund,
    loans: Sequence[Loan],
    as_of: Optional[date] = None,
    settings: Optional[GlobalSettings] = None,
) -> FundMetrics:
    """
    Compute all fund-level metrics.

    Args:
        fund: The fund
        loans: Loans drawn against the fund
        as_of: Valuation date for recoveries and idle capital accrual
            (defaults to today, read once per call)
        settings: Engine settings

    Returns:
        FundMetrics snapshot

    Example:
        ```python
        fund = Fund(name="Fund I", total_raised=100_000, cost_of_capital_rate=10)
        loan = originate_loan(borrower_name="Acme", principal=50_000,
                              interest_rate=20, start_date=date.today(),
                              duration_days=90)
        metrics = compute_fund_metrics(fund, [loan])
        metrics.net_yield  # 1250.0
        ```
    """
    settings = settings or GlobalSettings()
    as_of = as_of or date.today()
    loans = fund_loans(fund, loans)

    ledger = PortfolioLedger()
    for loan in loans:
        ledger.add(evaluate_loan(loan, fund, as_of, settings))

    total_raised = fund.total_raised
    net_yield = ledger.net_yield
    npl_ratio = (ledger.npl_principal / total_raised) * 100 if total_raised > 0 else 0.0

    portfolio_irr = xirr(
        portfolio_cash_flows(loans, include_defaulted_inflows=False),
        settings=settings.xirr,
        days_in_year=settings.calculation.days_in_year,
    )
    projected_portfolio_irr = xirr(
        portfolio_cash_flows(loans, include_defaulted_inflows=True),
        settings=settings.xirr,
        days_in_year=settings.calculation.days_in_year,
    )

    logger.debug(
        f"{fund.name}: {ledger.loan_count} loans, deployed "
        f"{ledger.net_deployed_principal:,.2f}, net yield {net_yield:,.2f}"
    )

    return FundMetrics(
        total_raised=total_raised,
        gross_deployed_capital=ledger.gross_deployed_principal,
        recovered_principal=ledger.recovered_principal,
        deployed_capital=ledger.net_deployed_principal,
        total_upfront_costs_deployed=ledger.net_upfront_variable_costs,
        available_capital=(
            total_raised
            - ledger.net_deployed_principal
            - ledger.net_upfront_variable_costs
        ),
        npl_volume=ledger.npl_volume,
        npl_principal_loss=ledger.npl_principal,
        npl_ratio=npl_ratio,
        projected_income=ledger.interest_income,
        total_processing_fees=ledger.processing_fees,
        total_expenses=ledger.expenses,
        total_allocated_cost_of_capital=ledger.allocated_cost_of_capital,
        accumulated_undeployed_cost=accumulated_undeployed_cost(
            fund, loans, as_of, settings.calculation
        ),
        net_yield=net_yield,
        nav=total_raised + ledger.allocated_cost_of_capital - ledger.npl_principal,
        aum=total_raised + ledger.allocated_cost_of_capital + net_yield,
        portfolio_irr=portfolio_irr,
        projected_portfolio_irr=projected_portfolio_irr,
        global_cost=FinancialCalculations.calculate_global_cost(
            total_raised, fund.cost_of_capital_rate, settings.calculation.days_in_year
        ),
        loan_count=ledger.loan_count,
    )
