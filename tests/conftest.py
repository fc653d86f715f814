# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for Creditfolio testing.

Every test pins "today" to ``AS_OF`` so results do not depend on the date the
suite runs.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional

import pytest

from creditfolio.core.primitives import LoanStatusEnum, RepaymentTypeEnum
from creditfolio.fund import Fund
from creditfolio.loan import CostItem, Loan, originate_loan

AS_OF = date(2025, 1, 1)


def days_from_as_of(days: int) -> date:
    """Date ``days`` after (negative: before) the pinned valuation date."""
    return AS_OF + timedelta(days=days)


def create_test_fund(
    total_raised: float = 100_000,
    cost_of_capital_rate: float = 10,
    created_at: Optional[date] = None,
    name: str = "Test Fund",
) -> Fund:
    """
    Create a fund for testing.

    Example:
        >>> fund = create_test_fund(total_raised=250_000)
        >>> fund.cost_of_capital_rate
        10.0
    """
    return Fund(
        uid="fund-1",
        name=name,
        total_raised=total_raised,
        cost_of_capital_rate=cost_of_capital_rate,
        created_at=created_at or AS_OF,
    )


def create_test_loan(
    principal: float = 50_000,
    interest_rate: float = 20,
    duration_days: int = 90,
    start_date: Optional[date] = None,
    repayment_type: RepaymentTypeEnum = RepaymentTypeEnum.BULLET,
    processing_fee_rate: float = 0.0,
    variable_costs: Iterable[CostItem] = (),
    status: LoanStatusEnum = LoanStatusEnum.ACTIVE,
    defaulted_amount: float = 0.0,
    borrower_name: str = "Acme Trading",
    fund_id: Optional[str] = "fund-1",
) -> Loan:
    """
    Originate a loan with a generated schedule, then apply status changes the
    way the calling application would (by deriving a new record).
    """
    loan = originate_loan(
        borrower_name=borrower_name,
        principal=principal,
        interest_rate=interest_rate,
        start_date=start_date or AS_OF,
        duration_days=duration_days,
        repayment_type=repayment_type,
        processing_fee_rate=processing_fee_rate,
        variable_costs=variable_costs,
        fund_id=fund_id,
    )
    if status != LoanStatusEnum.ACTIVE or defaulted_amount:
        loan = loan.model_copy(
            update={"status": status, "defaulted_amount": defaulted_amount}
        )
    return loan


@pytest.fixture
def fund() -> Fund:
    """100k fund at a 10% blended cost of capital."""
    return create_test_fund()


@pytest.fixture
def bullet_loan() -> Loan:
    """50k bullet loan at 20% for 90 days starting on AS_OF."""
    return create_test_loan()


@pytest.fixture
def monthly_loan() -> Loan:
    """12k monthly loan at 12% for 360 days starting on AS_OF."""
    return create_test_loan(
        principal=12_000,
        interest_rate=12,
        duration_days=360,
        repayment_type=RepaymentTypeEnum.MONTHLY,
    )
