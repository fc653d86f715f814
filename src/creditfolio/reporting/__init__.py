# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Reporting helpers: pandas tables and display formatting for engine results.
"""

from .tables import (
    format_currency,
    format_percentage,
    forecast_to_dataframe,
    metrics_to_series,
    schedule_to_dataframe,
)

__all__ = [
    "format_currency",
    "format_percentage",
    "forecast_to_dataframe",
    "metrics_to_series",
    "schedule_to_dataframe",
]
