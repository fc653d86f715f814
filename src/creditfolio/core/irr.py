# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
XIRR (Extended Internal Rate of Return) solver.

Finds the annual rate that zeroes the net present value of an irregularly
dated series of cash flows using Newton-Raphson iteration. Time is measured
in years of 360 days, consistent with the interest and cost-of-capital
primitives, so results are not directly comparable with ACT/365 XIRR
implementations such as a spreadsheet's ``XIRR``.

Failure is a value, not an exception: every ill-posed or non-convergent input
returns ``None`` and callers must treat that as "IRR unavailable".
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional, Sequence

import numpy as np

from .calculations import DAYS_IN_YEAR
from .primitives.model import Model
from .primitives.settings import XirrSettings

logger = logging.getLogger(__name__)


class CashFlow(Model):
    """A dated, signed amount. Outflows are negative, inflows positive."""

    amount: float
    flow_date: date


def _year_fractions(flows: Sequence[CashFlow], days_in_year: int) -> np.ndarray:
    start = flows[0].flow_date
    days = np.array([(flow.flow_date - start).days for flow in flows], dtype=float)
    return days / days_in_year


def xnpv(
    rate: float,
    cash_flows: Sequence[CashFlow],
    days_in_year: int = DAYS_IN_YEAR,
) -> float:
    """
    Net present value of dated cash flows at an annual ``rate`` (decimal).

    Discounting is anchored on the earliest flow.
    """
    if not cash_flows:
        return 0.0
    flows = sorted(cash_flows, key=lambda flow: flow.flow_date)
    amounts = np.array([flow.amount for flow in flows], dtype=float)
    times = _year_fractions(flows, days_in_year)
    with np.errstate(all="ignore"):
        return float(np.sum(amounts / np.power(1.0 + rate, times)))


def xirr(
    cash_flows: Sequence[CashFlow],
    guess: Optional[float] = None,
    settings: Optional[XirrSettings] = None,
    days_in_year: int = DAYS_IN_YEAR,
) -> Optional[float]:
    """
    Calculate XIRR by Newton-Raphson on a 360-day year.

    Args:
        cash_flows: Dated flows; negative = investment, positive = return
        guess: Starting rate as a decimal (defaults to ``settings.guess``, 0.10)
        settings: Solver tolerance and iteration limit
        days_in_year: Day-count basis for time scaling

    Returns:
        Annualized rate in percent (e.g. 10.0 for 10%) or None if unavailable

    Edge Cases Handled:
        - Fewer than two flows → None
        - All flows the same sign (no sign change) → None
        - Derivative magnitude below tolerance (singular) → None
        - Non-finite iterate (divergence, rate at -100%) → None
        - No convergence within the iteration limit → None

    Example:
        ```python
        flows = [
            CashFlow(amount=-1000, flow_date=date(2024, 1, 1)),
            CashFlow(amount=1100, flow_date=date(2024, 12, 26)),  # 360 days later
        ]
        xirr(flows)  # 10.0
        ```
    """
    settings = settings or XirrSettings()

    if not cash_flows or len(cash_flows) < 2:
        return None

    has_positive = any(flow.amount > 0 for flow in cash_flows)
    has_negative = any(flow.amount < 0 for flow in cash_flows)
    if not (has_positive and has_negative):
        return None

    # Stable sort keeps same-day flows in caller order
    flows = sorted(cash_flows, key=lambda flow: flow.flow_date)
    amounts = np.array([flow.amount for flow in flows], dtype=float)
    times = _year_fractions(flows, days_in_year)

    rate = settings.guess if guess is None else guess
    tolerance = settings.tolerance

    for iteration in range(settings.max_iterations):
        with np.errstate(all="ignore"):
            factor = np.power(1.0 + rate, times)
            npv = float(np.sum(amounts / factor))
            # d/dr of a * (1 + r)^-t is -t * a * (1 + r)^(-t - 1)
            d_npv = float(np.sum(-times * amounts / (factor * (1.0 + rate))))

        if abs(npv) < tolerance:
            logger.debug(f"XIRR converged after {iteration} iterations: {rate:.8f}")
            return rate * 100

        if abs(d_npv) < tolerance:
            logger.debug(f"XIRR derivative vanished at rate {rate:.8f}")
            return None

        new_rate = rate - npv / d_npv
        if not math.isfinite(new_rate):
            logger.debug(f"XIRR produced a non-finite iterate after {iteration} iterations")
            return None

        rate = new_rate

    logger.debug(f"XIRR failed to converge in {settings.max_iterations} iterations")
    return None
