# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Loan records.

Plain, immutable snapshots supplied by the calling application. Every
computation in the engine is a pure function of these records.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional
from uuid import uuid4

from pydantic import Field, model_validator

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    InstallmentStatusEnum,
    LoanStatusEnum,
    Model,
    PercentRate,
    PositiveFloat,
    RepaymentTypeEnum,
    StrictlyPositiveFloat,
    StrictlyPositiveInt,
)


class CostItem(Model):
    """A named percentage-of-principal transaction cost (e.g. insurance)."""

    name: str = Field(..., description="Cost label")
    percentage: PositiveFloat = Field(..., description="Percent of principal (0-100)")


class Installment(Model):
    """One scheduled repayment.

    ``status`` is maintained by the caller; the engine never reads or changes
    it when computing metrics.
    """

    due_date: date
    amount: float
    principal_component: float = 0.0
    interest_component: float = 0.0
    status: InstallmentStatusEnum = InstallmentStatusEnum.PENDING


class Loan(Model):
    """
    A loan drawn against a fund.

    Created with its repayment schedule already generated (or a validated
    custom schedule). After creation only ``status`` and ``defaulted_amount``
    change, always by deriving a new record.

    Attributes:
        principal: Amount lent
        interest_rate: Annual flat interest rate in percent
        processing_fee_rate: Upfront fee in percent of principal (standalone revenue)
        duration_days: Tenure in days
        variable_costs: Percentage-of-principal costs paid upfront
        installments: Repayment schedule (fee excluded)
        defaulted_amount: Principal marked non-performing (0 to principal)
    """

    uid: str = Field(default_factory=lambda: str(uuid4()))
    fund_id: Optional[str] = None
    borrower_name: str = Field(..., description="Borrower display name")
    principal: StrictlyPositiveFloat
    interest_rate: PercentRate
    processing_fee_rate: PercentRate = 0.0
    start_date: date
    duration_days: StrictlyPositiveInt
    repayment_type: RepaymentTypeEnum = RepaymentTypeEnum.BULLET
    variable_costs: List[CostItem] = Field(default_factory=list)
    installments: List[Installment] = Field(default_factory=list)
    status: LoanStatusEnum = LoanStatusEnum.ACTIVE
    defaulted_amount: PositiveFloat = 0.0

    @model_validator(mode="after")
    def _check_defaulted_amount(self) -> "Loan":
        """A loan cannot lose more principal than it lent."""
        if self.defaulted_amount > self.principal:
            raise ValueError(
                f"defaulted_amount ({self.defaulted_amount}) cannot exceed "
                f"principal ({self.principal})"
            )
        return self

    @property
    def maturity_date(self) -> date:
        return self.start_date + timedelta(days=self.duration_days)

    @property
    def is_defaulted(self) -> bool:
        return self.status == LoanStatusEnum.DEFAULTED

    @property
    def is_deployed(self) -> bool:
        """Active and defaulted loans tie up fund capital; closed loans do not."""
        return self.status in (LoanStatusEnum.ACTIVE, LoanStatusEnum.DEFAULTED)

    @property
    def active_principal(self) -> float:
        """Principal still generating income."""
        return self.principal - self.defaulted_amount

    @property
    def total_interest(self) -> float:
        """Flat interest over the full tenure."""
        return FinancialCalculations.calculate_interest(
            self.principal, self.interest_rate, self.duration_days
        )

    @property
    def processing_fee(self) -> float:
        return FinancialCalculations.calculate_processing_fee(
            self.principal, self.processing_fee_rate
        )

    @property
    def total_variable_costs(self) -> float:
        return FinancialCalculations.calculate_variable_costs(
            self.principal, self.variable_costs
        )

    @property
    def expected_total_repayment(self) -> float:
        """Principal plus flat interest; the target every schedule must sum to."""
        return self.principal + self.total_interest
