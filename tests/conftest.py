"""Canonical test fixtures used across engine and API tests.

Fixture loans:
- 12-month loan, 6% per month, repaid monthly (rate quoted monthly).
- $400K mortgage, 7% annual, 30yr fixed, repaid monthly.
"""

import pytest
from decimal import Decimal

from loan_calculator.engine.amortization import LoanCalculator
from loan_calculator.models.loan import Frequency, LoanContext


@pytest.fixture
def monthly_loan_context() -> LoanContext:
    """$100K over 12 months at 6% per month."""
    return LoanContext(
        principal=Decimal("100000"),
        interest_rate=Decimal("0.06"),
        interest_rate_frequency=Frequency.MONTHLY,
        term=Decimal("12"),
        term_frequency=Frequency.MONTHLY,
        repayment_frequency=Frequency.MONTHLY,
    )


@pytest.fixture
def monthly_loan(monthly_loan_context) -> LoanCalculator:
    return LoanCalculator(monthly_loan_context)


@pytest.fixture
def standard_mortgage() -> LoanCalculator:
    """$400K at 7% for 30 years with default frequencies."""
    return LoanCalculator(
        principal=Decimal("400000"),
        interest_rate=Decimal("0.07"),
        term=Decimal("30"),
    )
