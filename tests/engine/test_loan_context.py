from decimal import Decimal

import pytest

from loan_calculator.exceptions import DomainError
from loan_calculator.models.loan import CONFIGURATION_FIELDS, Frequency, LoanContext


class TestDefaults:
    def test_defaults(self):
        context = LoanContext()
        assert context.principal == Decimal("0")
        assert context.interest_rate_frequency == Frequency.YEARLY
        assert context.term_frequency == Frequency.YEARLY
        assert context.repayment_frequency == Frequency.MONTHLY
        assert context.fee == Decimal("0")

    def test_partial_configuration(self):
        context = LoanContext(principal=100000, interest_rate=0.1, term=10)
        assert context.principal == Decimal("100000")
        assert context.interest_rate == Decimal("0.1")
        assert context.repayment_frequency == Frequency.MONTHLY

    def test_fee_is_not_a_configuration_field(self):
        assert "fee" not in CONFIGURATION_FIELDS
        assert "interest_rate" in CONFIGURATION_FIELDS


class TestDerived:
    def test_eff_interest_rate(self):
        context = LoanContext(interest_rate=Decimal("0.06"))
        assert context.eff_interest_rate() == Decimal("0.005")

    def test_eff_term(self):
        assert LoanContext(term=Decimal("30")).eff_term() == Decimal("360")

    def test_weekly_repayment(self):
        context = LoanContext(term=Decimal("1"), repayment_frequency=Frequency.WEEKLY)
        assert context.eff_term() == Decimal("52")

    def test_zero_repayment_frequency(self):
        context = LoanContext(interest_rate=Decimal("0.06"), repayment_frequency=0)
        with pytest.raises(DomainError):
            context.eff_interest_rate()

    def test_zero_term_frequency(self):
        with pytest.raises(DomainError):
            LoanContext(term=Decimal("1"), term_frequency=0).eff_term()


class TestValidation:
    def test_negative_principal(self):
        with pytest.raises(DomainError):
            LoanContext(principal=Decimal("-1"))

    def test_negative_term(self):
        with pytest.raises(DomainError):
            LoanContext(term=Decimal("-1"))

    def test_negative_frequency(self):
        with pytest.raises(DomainError):
            LoanContext(repayment_frequency=-12)

    def test_nan(self):
        with pytest.raises(DomainError):
            LoanContext(interest_rate=Decimal("NaN"))

    def test_error_message_carries_context(self):
        with pytest.raises(DomainError) as exc_info:
            LoanContext(principal=Decimal("-5"))
        assert "principal=-5" in str(exc_info.value)
