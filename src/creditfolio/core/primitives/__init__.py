# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Creditfolio Core Primitives

Building blocks shared by every calculation: the immutable base model,
constrained numeric types, enums and engine settings.
"""

from .enums import (
    CapitalEventKindEnum,
    CashFlowEventTypeEnum,
    InstallmentStatusEnum,
    LoanStatusEnum,
    RepaymentTypeEnum,
)
from .model import Model
from .settings import (
    CalculationSettings,
    ForecastSettings,
    GlobalSettings,
    XirrSettings,
)
from .types import (
    PercentRate,
    PositiveFloat,
    StrictlyPositiveFloat,
    StrictlyPositiveInt,
)

__all__ = [
    "Model",
    # Enums
    "CapitalEventKindEnum",
    "CashFlowEventTypeEnum",
    "InstallmentStatusEnum",
    "LoanStatusEnum",
    "RepaymentTypeEnum",
    # Settings
    "CalculationSettings",
    "ForecastSettings",
    "GlobalSettings",
    "XirrSettings",
    # Types
    "PercentRate",
    "PositiveFloat",
    "StrictlyPositiveFloat",
    "StrictlyPositiveInt",
]
