# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .entities import CostItem, Installment, Loan
from .origination import originate_loan
from .returns import compute_loan_irr, compute_loan_net_irr, loan_cash_flows
from .schedule import (
    build_custom_schedule,
    expected_total_repayment,
    generate_schedule,
    monthly_installment_count,
    schedule_matches_terms,
)

__all__ = [
    # Records
    "CostItem",
    "Installment",
    "Loan",
    # Schedules
    "generate_schedule",
    "build_custom_schedule",
    "expected_total_repayment",
    "monthly_installment_count",
    "schedule_matches_terms",
    "originate_loan",
    # Returns
    "compute_loan_irr",
    "compute_loan_net_irr",
    "loan_cash_flows",
]
