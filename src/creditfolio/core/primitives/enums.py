# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class LoanStatusEnum(str, Enum):
    """
    Lifecycle status of a loan.

    Only ``ACTIVE`` loans produce future repayment events. ``DEFAULTED`` loans
    stay in deployed capital but their principal is treated as a realized loss
    (NPL). ``CLOSED`` loans have been repaid and no longer tie up capital.
    """

    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"
    DEFAULTED = "DEFAULTED"


class RepaymentTypeEnum(str, Enum):
    """How a loan repays its principal and interest."""

    BULLET = "BULLET"  # Single lump sum at maturity
    MONTHLY = "MONTHLY"  # Equal flat installments every 30 days


class InstallmentStatusEnum(str, Enum):
    """Collection status of an installment (maintained by the caller)."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class CashFlowEventTypeEnum(str, Enum):
    """Direction of a forecast cash flow event."""

    REPAYMENT = "REPAYMENT"
    DEPLOYMENT = "DEPLOYMENT"


class CapitalEventKindEnum(str, Enum):
    """Events that move the fund's idle capital balance."""

    DEPLOYMENT = "Deployment"  # Principal and upfront costs leave the fund
    RECOVERY = "Recovery"  # Principal and upfront costs come back
