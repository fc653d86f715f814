# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for loan records and their derived figures.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from creditfolio.core.primitives import LoanStatusEnum
from creditfolio.loan import CostItem, Loan
from tests.conftest import create_test_loan


def _loan(**overrides) -> Loan:
    terms = dict(
        borrower_name="Acme",
        principal=50_000,
        interest_rate=20,
        start_date=date(2024, 1, 1),
        duration_days=90,
    )
    terms.update(overrides)
    return Loan(**terms)


class TestLoanValidation:
    def test_principal_must_be_positive(self):
        with pytest.raises(ValidationError):
            _loan(principal=0)

    def test_duration_must_be_positive(self):
        with pytest.raises(ValidationError):
            _loan(duration_days=0)

    def test_rates_must_be_non_negative(self):
        with pytest.raises(ValidationError):
            _loan(interest_rate=-1)
        with pytest.raises(ValidationError):
            _loan(processing_fee_rate=-0.5)

    def test_cost_percentage_non_negative(self):
        with pytest.raises(ValidationError):
            CostItem(name="Insurance", percentage=-1)

    def test_defaulted_amount_bounded_by_principal(self):
        _loan(defaulted_amount=50_000)
        with pytest.raises(ValidationError):
            _loan(defaulted_amount=50_000.01)

    def test_each_loan_gets_distinct_uid(self):
        assert _loan().uid != _loan().uid


class TestLoanDerivedFigures:
    def test_reference_bullet(self, bullet_loan):
        assert bullet_loan.total_interest == pytest.approx(2500.0)
        assert bullet_loan.expected_total_repayment == pytest.approx(52_500.0)
        assert bullet_loan.maturity_date == date(2025, 4, 1)

    def test_processing_fee_and_variable_costs(self):
        loan = _loan(
            processing_fee_rate=2,
            variable_costs=[CostItem(name="Insurance", percentage=1)],
        )
        assert loan.processing_fee == pytest.approx(1000.0)
        assert loan.total_variable_costs == pytest.approx(500.0)
        # Fee is never part of the repayment target
        assert loan.expected_total_repayment == pytest.approx(52_500.0)

    def test_active_principal_excludes_defaulted_amount(self):
        loan = create_test_loan(status=LoanStatusEnum.DEFAULTED, defaulted_amount=20_000)
        assert loan.active_principal == pytest.approx(30_000.0)
        assert loan.is_defaulted
        assert loan.is_deployed

    def test_closed_loan_is_not_deployed(self):
        loan = create_test_loan(status=LoanStatusEnum.CLOSED)
        assert not loan.is_deployed
        assert not loan.is_defaulted

    def test_status_change_derives_new_record(self, bullet_loan):
        closed = bullet_loan.model_copy(update={"status": LoanStatusEnum.CLOSED})
        assert bullet_loan.status == LoanStatusEnum.ACTIVE
        assert closed.uid == bullet_loan.uid
