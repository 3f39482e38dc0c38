from decimal import Decimal

import pytest

from loan_calculator.engine.financial import eff_interest_rate, eff_term, pmt, to_decimal
from loan_calculator.exceptions import DomainError

TWO_PLACES = Decimal("0.01")


class TestEffInterestRate:
    def test_annual_to_monthly(self):
        assert eff_interest_rate(Decimal("0.12"), 1, 12) == Decimal("0.01")

    def test_monthly_quoted_monthly_repaid(self):
        assert eff_interest_rate(Decimal("0.06"), 12, 12) == Decimal("0.06")

    def test_monthly_to_quarterly(self):
        assert eff_interest_rate(Decimal("0.01"), 12, 4) == Decimal("0.03")

    def test_zero_repayment_frequency(self):
        with pytest.raises(DomainError):
            eff_interest_rate(Decimal("0.07"), 1, 0)


class TestEffTerm:
    def test_years_to_months(self):
        assert eff_term(Decimal("30"), 1, 12) == Decimal("360")

    def test_months_to_quarters(self):
        assert eff_term(Decimal("24"), 12, 4) == Decimal("8")

    def test_fractional(self):
        assert eff_term(Decimal("1.5"), 12, 12) == Decimal("1.5")

    def test_zero_term_frequency(self):
        with pytest.raises(DomainError):
            eff_term(Decimal("30"), 0, 12)


class TestPmt:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years."""
        payment = pmt(Decimal("400000"), Decimal("0.07") / 12, 360)
        assert payment.quantize(TWO_PLACES) == Decimal("2661.21")

    def test_zero_rate_is_straight_line(self):
        assert pmt(Decimal("360000"), Decimal("0"), 360) == Decimal("1000")

    def test_single_period_repays_balance_plus_interest(self):
        assert pmt(Decimal("1000"), Decimal("0.05"), 1).quantize(TWO_PLACES) == Decimal("1050.00")

    def test_zero_balance(self):
        assert pmt(Decimal("0"), Decimal("0.01"), 12) == 0

    def test_rate_below_decimal_precision(self):
        # 1 + r rounds to exactly 1, leaving a zero annuity denominator
        payment = pmt(Decimal("1200"), Decimal("1E-30"), 12)
        assert payment == Decimal("100")

    def test_non_positive_periods(self):
        with pytest.raises(DomainError):
            pmt(Decimal("1000"), Decimal("0.01"), 0)

    def test_rate_at_minus_one_hundred_percent(self):
        with pytest.raises(DomainError):
            pmt(Decimal("1000"), Decimal("-1"), 12)


class TestToDecimal:
    def test_float_uses_shortest_repr(self):
        assert to_decimal(0.06) == Decimal("0.06")

    def test_int_and_str(self):
        assert to_decimal(12) == Decimal("12")
        assert to_decimal("100000") == Decimal("100000")

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            to_decimal(True)
