# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Repayment schedule generation.

Schedules use flat interest: total interest is computed once over the full
tenure and spread evenly, never on a reducing balance. Processing fees are
collected upfront and never appear in a schedule.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import List, Optional, Sequence

from ..core.calculations import FinancialCalculations
from ..core.primitives import CalculationSettings, RepaymentTypeEnum
from .entities import Installment

logger = logging.getLogger(__name__)


def monthly_installment_count(
    duration_days: int, settings: Optional[CalculationSettings] = None
) -> int:
    """Number of 30-day installments in a tenure, never fewer than one."""
    settings = settings or CalculationSettings()
    return max(1, duration_days // settings.installment_interval_days)


def generate_schedule(
    principal: float,
    annual_rate: float,
    start_date: date,
    duration_days: int,
    repayment_type: RepaymentTypeEnum,
    settings: Optional[CalculationSettings] = None,
) -> List[Installment]:
    """
    Generate the repayment schedule for a loan's terms.

    Args:
        principal: Amount lent
        annual_rate: Annual flat interest rate in percent
        start_date: Disbursement date
        duration_days: Tenure in days
        repayment_type: BULLET or MONTHLY
        settings: Day-count basis and installment spacing

    Returns:
        Installments in due-date order. BULLET yields a single installment at
        maturity; MONTHLY yields ``max(1, duration_days // 30)`` equal
        installments every 30 days.

    Example:
        ```python
        schedule = generate_schedule(50_000, 20, date(2024, 1, 1), 90, RepaymentTypeEnum.BULLET)
        schedule[0].amount  # 52500.0
        ```
    """
    settings = settings or CalculationSettings()
    total_interest = FinancialCalculations.calculate_interest(
        principal, annual_rate, duration_days, settings.days_in_year
    )

    if RepaymentTypeEnum(repayment_type) == RepaymentTypeEnum.BULLET:
        return [
            Installment(
                due_date=start_date + timedelta(days=duration_days),
                amount=principal + total_interest,
                principal_component=principal,
                interest_component=total_interest,
            )
        ]

    months = monthly_installment_count(duration_days, settings)
    principal_per_installment = principal / months
    interest_per_installment = total_interest / months
    amount_per_installment = principal_per_installment + interest_per_installment

    schedule = [
        Installment(
            due_date=start_date
            + timedelta(days=i * settings.installment_interval_days),
            amount=amount_per_installment,
            principal_component=principal_per_installment,
            interest_component=interest_per_installment,
        )
        for i in range(1, months + 1)
    ]
    logger.debug(
        f"Generated {months} monthly installments of {amount_per_installment:,.2f}"
    )
    return schedule


def expected_total_repayment(
    principal: float,
    annual_rate: float,
    duration_days: int,
    settings: Optional[CalculationSettings] = None,
) -> float:
    """Principal plus flat interest over the tenure (processing fee excluded)."""
    settings = settings or CalculationSettings()
    return principal + FinancialCalculations.calculate_interest(
        principal, annual_rate, duration_days, settings.days_in_year
    )


def schedule_matches_terms(
    installments: Sequence[Installment],
    principal: float,
    annual_rate: float,
    duration_days: int,
    settings: Optional[CalculationSettings] = None,
) -> bool:
    """
    Check a (possibly hand-edited) schedule against the loan's terms.

    The installment amounts must sum to principal plus flat interest within
    ``settings.schedule_tolerance`` (0.05 currency units by default).
    """
    settings = settings or CalculationSettings()
    expected = expected_total_repayment(principal, annual_rate, duration_days, settings)
    scheduled = sum(installment.amount for installment in installments)
    return abs(scheduled - expected) <= settings.schedule_tolerance


def build_custom_schedule(
    principal: float,
    annual_rate: float,
    start_date: date,
    duration_days: int,
    count: int,
    settings: Optional[CalculationSettings] = None,
) -> List[Installment]:
    """
    Spread the expected repayment over ``count`` installments of the caller's choosing.

    Due dates are evenly spaced across the tenure (half days round up) and
    amounts are rounded to cents, with any rounding residue added to the last
    installment so the schedule still matches the terms.

    Raises:
        ValueError: If ``count`` is not positive
    """
    if count <= 0:
        raise ValueError(f"Installment count must be positive, got {count}")
    settings = settings or CalculationSettings()

    expected = expected_total_repayment(principal, annual_rate, duration_days, settings)
    amount_per_installment = round(expected / count, 2)
    days_per_installment = duration_days / count
    principal_per_installment = principal / count

    amounts = [amount_per_installment] * count
    residue = expected - sum(amounts)
    if abs(residue) > 0.001:
        amounts[-1] += residue

    return [
        Installment(
            due_date=start_date
            + timedelta(days=math.floor(days_per_installment * (i + 1) + 0.5)),
            amount=amount,
            principal_component=principal_per_installment,
            interest_component=amount - principal_per_installment,
        )
        for i, amount in enumerate(amounts)
    ]
