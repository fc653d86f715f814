# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .calculations import DAYS_IN_YEAR, FinancialCalculations, GlobalCost
from .irr import CashFlow, xirr, xnpv

__all__ = [
    "DAYS_IN_YEAR",
    "FinancialCalculations",
    "GlobalCost",
    "CashFlow",
    "xirr",
    "xnpv",
]
