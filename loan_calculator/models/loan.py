"""Loan calculation data types."""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import IntEnum

from loan_calculator.engine.financial import eff_interest_rate, eff_term, to_decimal
from loan_calculator.exceptions import DomainError


class Frequency(IntEnum):
    """Number of periods per year a quantity is expressed in."""
    YEARLY = 1
    SEMI_ANNUALLY = 2
    QUARTERLY = 4
    MONTHLY = 12
    FORTNIGHTLY = 26
    WEEKLY = 52
    DAILY = 365


@dataclass
class LoanContext:
    """Loan configuration for one period of the schedule.

    A context built by the caller is the base configuration; the engine
    derives one effective context per period by layering active adjustments
    on top of it.
    """
    principal: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")  # Nominal, quoted per interest_rate_frequency
    interest_rate_frequency: int = Frequency.YEARLY
    term: Decimal = Decimal("0")  # In term_frequency units
    term_frequency: int = Frequency.YEARLY
    repayment_frequency: int = Frequency.MONTHLY

    # Accumulated by adjustments, per repayment period
    fee: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.principal = to_decimal(self.principal)
        self.interest_rate = to_decimal(self.interest_rate)
        self.term = to_decimal(self.term)
        self.fee = to_decimal(self.fee)

        for name in ("principal", "interest_rate", "term", "fee"):
            if getattr(self, name).is_nan():
                raise DomainError("Loan values must be numbers", context={name: "NaN"})
        if self.principal < 0:
            raise DomainError("Principal must not be negative", context={"principal": self.principal})
        if self.term < 0:
            raise DomainError("Term must not be negative", context={"term": self.term})
        for name in ("interest_rate_frequency", "term_frequency", "repayment_frequency"):
            if getattr(self, name) < 0:
                raise DomainError(
                    "Frequency must not be negative", context={name: getattr(self, name)}
                )

    def eff_interest_rate(self) -> Decimal:
        """Interest rate per repayment period."""
        return eff_interest_rate(
            self.interest_rate,
            self.interest_rate_frequency,
            self.repayment_frequency,
        )

    def eff_term(self) -> Decimal:
        """Loan duration expressed in repayment periods (may be fractional)."""
        return eff_term(self.term, self.term_frequency, self.repayment_frequency)


ADDITIVE_FIELDS = frozenset({"fee"})

# Fields an adjustment may override while active
CONFIGURATION_FIELDS = frozenset(
    f.name for f in fields(LoanContext) if f.name not in ADDITIVE_FIELDS
)


@dataclass(frozen=True)
class LoanSummaryItem:
    period: int
    principal_initial_balance: Decimal
    principal_final_balance: Decimal
    interest_paid: Decimal
    principal_paid: Decimal
    pmt: Decimal
    fee: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanTotals:
    pmt: Decimal = Decimal("0")
    interest_paid: Decimal = Decimal("0")
    fee: Decimal = Decimal("0")


@dataclass(frozen=True)
class AmortizationResult:
    summary_list: tuple[LoanSummaryItem, ...] = ()
    totals: LoanTotals = field(default_factory=LoanTotals)

    @property
    def number_of_periods(self) -> int:
        return len(self.summary_list)
