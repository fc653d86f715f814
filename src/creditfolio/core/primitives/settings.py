# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import Field, field_validator

from .model import Model
from .types import PositiveFloat, StrictlyPositiveFloat, StrictlyPositiveInt


class CalculationSettings(Model):
    """
    Day-count and rounding conventions for interest and cost calculations.

    The 360-day year is applied uniformly to interest, cost of capital, idle
    capital accrual and XIRR time scaling. Downstream reports depend on these
    exact values, so the defaults should only be overridden for what-if work.
    """

    days_in_year: StrictlyPositiveInt = Field(
        default=360, description="Day-count basis for annual rates."
    )
    installment_interval_days: StrictlyPositiveInt = Field(
        default=30, description="Spacing between monthly installments, in days."
    )
    schedule_tolerance: PositiveFloat = Field(
        default=0.05,
        description=(
            "Maximum absolute difference allowed between a schedule's total and "
            "principal plus flat interest."
        ),
    )


class XirrSettings(Model):
    """Newton-Raphson solver controls for XIRR."""

    guess: float = Field(default=0.10, description="Initial rate (decimal).")
    tolerance: StrictlyPositiveFloat = Field(
        default=1e-7,
        description="Convergence threshold on |NPV| and singularity threshold on |NPV'|.",
    )
    max_iterations: StrictlyPositiveInt = Field(default=100)


class ForecastSettings(Model):
    """Defaults for the forward cash-flow forecast."""

    horizon_months: Optional[StrictlyPositiveInt] = Field(
        default=12,
        description="Months of repayment events to include. None means no cut-off.",
    )
    near_term_windows: Tuple[StrictlyPositiveInt, StrictlyPositiveInt] = Field(
        default=(30, 90),
        description="Day windows summed into the short and medium liquidity figures.",
    )

    @field_validator("near_term_windows")
    @classmethod
    def _windows_ascending(cls, value: Tuple[int, int]) -> Tuple[int, int]:
        if value[0] > value[1]:
            raise ValueError("near_term_windows must be in ascending order")
        return value


class GlobalSettings(Model):
    """Global engine settings

    Groups the calculation, solver and forecast settings. Every public
    operation accepts an optional ``settings`` argument and falls back to
    ``GlobalSettings()`` when none is given.
    """

    calculation: CalculationSettings = Field(default_factory=CalculationSettings)
    xirr: XirrSettings = Field(default_factory=XirrSettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
