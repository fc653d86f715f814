# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Fund records and the capital-raise operation.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional
from uuid import uuid4

from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import Model, PercentRate, StrictlyPositiveFloat

logger = logging.getLogger(__name__)


class Fund(Model):
    """
    A pool of capital raised at a blended annual cost.

    ``cost_of_capital_rate`` is the capital-weighted average of every raise so
    far; use :func:`raise_capital` to blend in new money.
    """

    uid: str = Field(default_factory=lambda: str(uuid4()))
    user_id: Optional[str] = None
    name: str = Field(..., description="Fund display name")
    total_raised: StrictlyPositiveFloat
    cost_of_capital_rate: PercentRate = Field(
        ..., description="Blended annual cost of capital in percent"
    )
    created_at: date = Field(default_factory=date.today)


def raise_capital(fund: Fund, amount: float, cost_of_capital_rate: float) -> Fund:
    """
    Return a new fund with ``amount`` added at ``cost_of_capital_rate``.

    The fund's rate becomes the weighted average of the existing and incoming
    capital. Raising zero leaves the fund unchanged.

    Raises:
        ValueError: If the amount or rate is negative
    """
    if amount < 0:
        raise ValueError(f"Capital raise amount must be non-negative, got {amount}")
    if cost_of_capital_rate < 0:
        raise ValueError(
            f"Cost of capital rate must be non-negative, got {cost_of_capital_rate}"
        )
    if amount == 0:
        return fund

    wacc = FinancialCalculations.calculate_weighted_cost_of_capital(
        fund.total_raised, fund.cost_of_capital_rate, amount, cost_of_capital_rate
    )
    logger.debug(
        f"{fund.name}: raised ${amount:,.2f} at {cost_of_capital_rate:.2f}%, "
        f"blended rate {fund.cost_of_capital_rate:.4f}% -> {wacc:.4f}%"
    )
    return fund.model_copy(
        update={
            "total_raised": fund.total_raised + amount,
            "cost_of_capital_rate": wacc,
        }
    )
