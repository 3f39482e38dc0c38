"""Amortization schedule computation with time-scoped adjustments.

Decimal in, dataclass out. No I/O.
"""

import logging
from dataclasses import fields
from decimal import Decimal, InvalidOperation, ROUND_FLOOR
from typing import Any, Mapping

from loan_calculator.config import settings
from loan_calculator.engine.adjustments import Adjustment, AdjustmentRegistry, FeeAdjustment
from loan_calculator.engine.context import merge_context, resolve_context
from loan_calculator.engine.financial import pmt
from loan_calculator.exceptions import ConfigurationError, DomainError
from loan_calculator.models.loan import (
    AmortizationResult,
    Frequency,
    LoanContext,
    LoanSummaryItem,
    LoanTotals,
)

logger = logging.getLogger(__name__)

_CONTEXT_FIELDS = frozenset(f.name for f in fields(LoanContext))


def _build_context(context: LoanContext | Mapping[str, Any] | None, options: dict) -> LoanContext:
    """Base context from a LoanContext or a partial mapping, plus keyword overrides."""
    if isinstance(context, LoanContext):
        values = {f.name: getattr(context, f.name) for f in fields(LoanContext)}
    else:
        values = dict(context or {})
    values.update(options)

    unknown = set(values) - _CONTEXT_FIELDS
    if unknown:
        raise ConfigurationError(
            "Unknown loan fields", context={"fields": ", ".join(sorted(unknown))}
        )
    try:
        return LoanContext(**values)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid loan value: {e}") from e


def number_of_periods(context: LoanContext) -> int:
    """Whole repayment periods in the loan term.

    A fractional term is rounded down, so a final partial period is dropped
    and the schedule may end with a small residual balance.
    """
    eff_term = context.eff_term()
    if not eff_term.is_finite():
        raise DomainError("Loan term is not finite", context={"eff_term": eff_term})

    periods = int(eff_term.to_integral_value(rounding=ROUND_FLOOR))
    if periods > settings.max_periods:
        raise DomainError(
            "Loan spans too many repayment periods",
            context={"periods": periods, "max_periods": settings.max_periods},
        )
    return periods


class LoanCalculator:
    """Loan amortization engine.

    Holds a base loan context and an ordered registry of adjustments. Each
    period of the schedule is computed against the context resolved for that
    period.

    Example:
        >>> results = (
        ...     LoanCalculator(principal=100000, interest_rate=Decimal("0.1"), term=10)
        ...     .fee(upfront_fee=100, ongoing_fee=100)
        ...     .calculate()
        ... )
    """

    def __init__(
        self,
        context: LoanContext | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> None:
        self._base_context = _build_context(context, options)
        # Zero base frequencies would otherwise surface only in calculate()
        self._base_context.eff_interest_rate()
        self._base_context.eff_term()
        self._registry = AdjustmentRegistry()

    @property
    def base_context(self) -> LoanContext:
        """Copy of the base context; the engine's own copy is never exposed."""
        return merge_context(LoanContext(), self._base_context)

    @property
    def adjustments(self) -> list[Adjustment]:
        return list(self._registry)

    def add_adjustment(self, adjustment: Adjustment) -> "LoanCalculator":
        self._registry.add(adjustment)
        return self

    def fee(
        self,
        upfront_fee=None,
        ongoing_fee=None,
        start_period: int = 1,
        end_period: int | None = None,
        ongoing_fee_frequency: int = Frequency.MONTHLY,
    ) -> "LoanCalculator":
        """Register an upfront fee, an ongoing fee, or both.

        The upfront fee applies to period 1 only, at the repayment frequency.
        The ongoing fee applies over [start_period, end_period] and is quoted
        per ``ongoing_fee_frequency``. Calling with neither registers nothing.
        """
        if not upfront_fee and not ongoing_fee:
            logger.warning("fee() called without upfront_fee or ongoing_fee; nothing registered")
            return self

        if upfront_fee:
            self.add_adjustment(FeeAdjustment(
                start_period=1,
                end_period=1,
                fee=upfront_fee,
                fee_frequency=self._base_context.repayment_frequency,
            ))

        if ongoing_fee:
            self.add_adjustment(FeeAdjustment(
                start_period=start_period,
                end_period=end_period,
                fee=ongoing_fee,
                fee_frequency=ongoing_fee_frequency,
            ))

        return self

    def adjustments_at(self, period: int) -> list[Adjustment]:
        """Adjustments active at ``period``, in registration order."""
        return self._registry.active_at(period)

    def context_at(self, period: int) -> LoanContext:
        """Effective context for ``period`` with all active adjustments applied."""
        return resolve_context(self._base_context, self.adjustments_at(period), period)

    def calculate(self) -> AmortizationResult:
        """Compute the amortization schedule and totals.

        Does not modify the engine; repeated calls return equal results.
        """
        n_periods = number_of_periods(self._base_context)

        summary_list: list[LoanSummaryItem] = []
        balance = self._base_context.principal

        for period in range(1, n_periods + 1):
            context = self.context_at(period)
            rate = context.eff_interest_rate()

            payment = pmt(balance, rate, n_periods - period + 1)
            interest = balance * rate
            principal_paid = payment - interest

            summary_list.append(LoanSummaryItem(
                period=period,
                principal_initial_balance=balance,
                principal_final_balance=balance - principal_paid,
                interest_paid=interest,
                principal_paid=principal_paid,
                pmt=payment,
                fee=context.fee,
            ))
            balance = summary_list[-1].principal_final_balance

        totals = LoanTotals(
            pmt=sum((item.pmt for item in summary_list), Decimal("0")),
            interest_paid=sum((item.interest_paid for item in summary_list), Decimal("0")),
            fee=sum((item.fee for item in summary_list), Decimal("0")),
        )

        logger.debug(
            "Calculated %d-period schedule with %d adjustments", n_periods, len(self._registry)
        )
        return AmortizationResult(summary_list=tuple(summary_list), totals=totals)


def yearly_summary(result: AmortizationResult, periods_per_year: int) -> list[dict[str, Decimal]]:
    """Aggregate a schedule by year.

    Returns list of dicts with keys: year, principal, interest, pmt, fee, ending_balance
    """
    if periods_per_year <= 0:
        raise DomainError(
            "Periods per year must be positive", context={"periods_per_year": periods_per_year}
        )

    yearly: list[dict[str, Decimal]] = []
    year_principal = Decimal("0")
    year_interest = Decimal("0")
    year_pmt = Decimal("0")
    year_fee = Decimal("0")

    for item in result.summary_list:
        year_principal += item.principal_paid
        year_interest += item.interest_paid
        year_pmt += item.pmt
        year_fee += item.fee

        if item.period % periods_per_year == 0 or item.period == len(result.summary_list):
            year_num = (item.period - 1) // periods_per_year + 1
            yearly.append({
                "year": Decimal(str(year_num)),
                "principal": year_principal,
                "interest": year_interest,
                "pmt": year_pmt,
                "fee": year_fee,
                "ending_balance": item.principal_final_balance,
            })
            year_principal = Decimal("0")
            year_interest = Decimal("0")
            year_pmt = Decimal("0")
            year_fee = Decimal("0")

    return yearly
