# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Loan origination: attach a schedule to new loan terms.

This is the creation-time gate. Once a loan exists, every downstream
computation trusts its schedule, so mismatches must be rejected here.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from ..core.primitives import CalculationSettings, RepaymentTypeEnum
from .entities import CostItem, Installment, Loan
from .schedule import (
    expected_total_repayment,
    generate_schedule,
    schedule_matches_terms,
)

logger = logging.getLogger(__name__)


def originate_loan(
    *,
    borrower_name: str,
    principal: float,
    interest_rate: float,
    start_date: date,
    duration_days: int,
    repayment_type: RepaymentTypeEnum = RepaymentTypeEnum.BULLET,
    processing_fee_rate: float = 0.0,
    variable_costs: Iterable[CostItem] = (),
    fund_id: Optional[str] = None,
    installments: Optional[List[Installment]] = None,
    settings: Optional[CalculationSettings] = None,
) -> Loan:
    """
    Create an ACTIVE loan with a generated or caller-supplied schedule.

    When ``installments`` is None the schedule is generated from the terms.
    A custom schedule is accepted only if it sums to principal plus flat
    interest within the schedule tolerance.

    Raises:
        ValueError: If a custom schedule does not match the loan terms
        pydantic.ValidationError: If the terms themselves are invalid
    """
    settings = settings or CalculationSettings()

    if installments is None:
        installments = generate_schedule(
            principal,
            interest_rate,
            start_date,
            duration_days,
            repayment_type,
            settings,
        )
    elif not schedule_matches_terms(
        installments, principal, interest_rate, duration_days, settings
    ):
        expected = expected_total_repayment(
            principal, interest_rate, duration_days, settings
        )
        scheduled = sum(installment.amount for installment in installments)
        raise ValueError(
            f"Total scheduled repayment (${scheduled:,.2f}) must match the "
            f"term-based total (${expected:,.2f}); difference "
            f"${scheduled - expected:,.2f}"
        )

    loan = Loan(
        fund_id=fund_id,
        borrower_name=borrower_name,
        principal=principal,
        interest_rate=interest_rate,
        processing_fee_rate=processing_fee_rate,
        start_date=start_date,
        duration_days=duration_days,
        repayment_type=repayment_type,
        variable_costs=list(variable_costs),
        installments=sorted(installments, key=lambda inst: inst.due_date),
    )
    logger.debug(
        f"Originated loan {loan.uid} for {borrower_name}: "
        f"{len(loan.installments)} installment(s), ${principal:,.2f}"
    )
    return loan
