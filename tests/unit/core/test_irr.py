# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the 360-day-year XIRR solver, including adversarial inputs.
"""

from datetime import date, timedelta

import pytest

from creditfolio.core.irr import CashFlow, xirr, xnpv
from creditfolio.core.primitives import XirrSettings

START = date(2024, 1, 1)


def flows(*pairs):
    """Build cash flows from (amount, days after START) pairs."""
    return [CashFlow(amount=amount, flow_date=START + timedelta(days=days)) for amount, days in pairs]


class TestXirrConvergence:
    def test_ten_percent_over_one_360_day_year(self):
        result = xirr(flows((-1000, 0), (1100, 360)))
        assert result == pytest.approx(10.0, abs=0.01)

    def test_quarter_year(self):
        # (1 + r)^0.25 = 1.05
        result = xirr(flows((-50_000, 0), (52_500, 90)))
        assert result == pytest.approx((1.05**4 - 1) * 100, abs=1e-6)

    def test_result_zeroes_npv(self):
        series = flows((-10_000, 0), (2_000, 30), (3_000, 95), (6_500, 200))
        rate = xirr(series)
        assert rate is not None
        assert xnpv(rate / 100, series) == pytest.approx(0.0, abs=1e-6)

    def test_input_order_irrelevant(self):
        series = flows((-10_000, 0), (2_000, 30), (3_000, 95), (6_500, 200))
        assert xirr(list(reversed(series))) == pytest.approx(xirr(series))

    def test_scale_invariant(self):
        series = flows((-1000, 0), (300, 90), (400, 180), (500, 270))
        doubled = [CashFlow(amount=f.amount * 2, flow_date=f.flow_date) for f in series]
        assert xirr(doubled) == pytest.approx(xirr(series), abs=1e-6)

    def test_negative_return(self):
        result = xirr(flows((-1000, 0), (900, 360)))
        assert result == pytest.approx(-10.0, abs=1e-6)

    def test_deterministic(self):
        series = flows((-7_500, 0), (1_000, 31), (2_000, 59), (5_200, 120))
        assert xirr(series) == xirr(series)

    def test_matches_pyxirr_act_360(self):
        """Independent check against the PyXIRR implementation with an ACT/360 day count."""
        pyxirr = pytest.importorskip("pyxirr")
        series = flows((-100_000, 0), (30_000, 30), (30_000, 60), (30_000, 90), (15_000, 120))
        expected = pyxirr.xirr(
            [f.flow_date for f in series],
            [f.amount for f in series],
            day_count=pyxirr.DayCount.ACT_360,
        )
        assert xirr(series) == pytest.approx(expected * 100, rel=1e-6)


class TestXirrUnavailable:
    """Ill-posed or non-convergent inputs return None, never raise."""

    def test_empty(self):
        assert xirr([]) is None

    def test_single_flow(self):
        assert xirr(flows((-1000, 0))) is None

    def test_all_positive(self):
        assert xirr(flows((1000, 0), (1100, 360))) is None

    def test_all_negative(self):
        assert xirr(flows((-1000, 0), (-1100, 360))) is None

    def test_zero_flows_have_no_sign_change(self):
        assert xirr(flows((0, 0), (0, 360))) is None

    def test_singular_derivative(self):
        """All flows on one date: the derivative is identically zero."""
        assert xirr(flows((-1000, 0), (500, 0))) is None

    def test_non_finite_iterate(self):
        assert xirr(flows((-1000, 0), (1100, 360)), guess=-1.0) is None

    def test_iteration_exhaustion(self):
        settings = XirrSettings(max_iterations=1)
        assert xirr(flows((-1000, 0), (300, 90), (900, 400)), settings=settings) is None


class TestXnpv:
    def test_zero_rate_is_sum(self):
        assert xnpv(0.0, flows((-1000, 0), (400, 10), (700, 20))) == pytest.approx(100.0)

    def test_empty(self):
        assert xnpv(0.1, []) == 0.0
