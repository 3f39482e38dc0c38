"""Rate/term frequency conversion and the fixed-payment annuity formula.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from loan_calculator.exceptions import DomainError


def to_decimal(value) -> Decimal:
    """Coerce an int, float or numeric string to Decimal.

    Floats go through ``str`` so that 0.06 becomes Decimal("0.06") rather
    than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got {value!r}")
    return Decimal(str(value))


def eff_interest_rate(rate: Decimal, rate_frequency: int, repayment_frequency: int) -> Decimal:
    """Convert a nominal rate quoted per ``rate_frequency`` into a per-repayment-period rate."""
    if repayment_frequency == 0:
        raise DomainError(
            "Repayment frequency must be non-zero",
            context={"repayment_frequency": repayment_frequency},
        )
    return rate * rate_frequency / repayment_frequency


def eff_term(term: Decimal, term_frequency: int, repayment_frequency: int) -> Decimal:
    """Convert a duration in ``term_frequency`` units into repayment periods."""
    if term_frequency == 0:
        raise DomainError(
            "Term frequency must be non-zero",
            context={"term_frequency": term_frequency},
        )
    return term / term_frequency * repayment_frequency


def pmt(balance: Decimal, rate: Decimal, periods: int) -> Decimal:
    """Fixed payment that fully amortizes ``balance`` over ``periods`` at ``rate``.

    PMT = B * r / (1 - (1 + r)^-n), or B / n when the rate is zero.
    """
    if periods <= 0:
        raise DomainError("Number of periods must be positive", context={"periods": periods})
    if rate == 0:
        return balance / periods
    if rate <= -1:
        raise DomainError("Periodic rate must be greater than -100%", context={"rate": rate})
    denominator = 1 - (1 + rate) ** -periods
    if denominator == 0:
        # Rate below Decimal precision: 1 + r rounds to 1
        return balance / periods
    return balance * rate / denominator
