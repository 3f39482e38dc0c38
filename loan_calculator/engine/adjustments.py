"""Time-scoped adjustments to the loan context and their registry."""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from loan_calculator.engine.financial import to_decimal
from loan_calculator.exceptions import ConfigurationError, DomainError
from loan_calculator.models.loan import CONFIGURATION_FIELDS, Frequency, LoanContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Adjustment:
    """A change applied to the loan context over an inclusive period window.

    ``context`` holds configuration overrides (e.g. a new ``interest_rate``)
    that replace the matching fields of the effective context while the
    adjustment is active. Subclasses accumulate into additive fields by
    overriding ``process``.
    """
    start_period: int = 1
    end_period: int | None = None  # None = open-ended
    context: Mapping[str, Any] = field(default_factory=dict)
    kind: str = "override"

    def __post_init__(self) -> None:
        if self.start_period < 1:
            raise DomainError(
                "Adjustment must start at period 1 or later",
                context={"kind": self.kind, "start_period": self.start_period},
            )
        if self.end_period is not None and self.end_period < self.start_period:
            raise DomainError(
                "Adjustment end period precedes its start period",
                context={
                    "kind": self.kind,
                    "start_period": self.start_period,
                    "end_period": self.end_period,
                },
            )

        unknown = set(self.context) - CONFIGURATION_FIELDS
        if unknown:
            raise ConfigurationError(
                "Adjustment overrides unknown loan fields",
                context={"kind": self.kind, "fields": ", ".join(sorted(unknown))},
            )
        # Surface invalid override values now rather than mid-schedule
        try:
            replace(LoanContext(), **self.context)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid adjustment override: {e}", context={"kind": self.kind}
            ) from e
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    def is_active_at(self, period: int) -> bool:
        if period < self.start_period:
            return False
        return self.end_period is None or period <= self.end_period

    def process(self, period: int, context: LoanContext) -> None:
        """Accumulate into additive fields of an already merged context."""


@dataclass(frozen=True)
class FeeAdjustment(Adjustment):
    """Adds a fee, converted to the repayment frequency, to each active period."""
    fee: Decimal = Decimal("0")
    fee_frequency: int = Frequency.MONTHLY
    kind: str = field(default="fee", init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "fee", to_decimal(self.fee))
        if self.fee_frequency < 0:
            raise DomainError(
                "Fee frequency must not be negative",
                context={"fee_frequency": self.fee_frequency},
            )

    def process(self, period: int, context: LoanContext) -> None:
        if context.repayment_frequency == 0:
            raise DomainError(
                "Repayment frequency must be non-zero",
                context={"period": period, "repayment_frequency": 0},
            )
        context.fee += self.fee * self.fee_frequency / context.repayment_frequency


class AdjustmentRegistry:
    """Adjustments in registration order."""

    def __init__(self) -> None:
        self._adjustments: list[Adjustment] = []

    def add(self, adjustment: Adjustment) -> None:
        if not isinstance(adjustment, Adjustment):
            raise ConfigurationError(
                "Only Adjustment instances can be registered",
                context={"type": type(adjustment).__name__},
            )
        self._adjustments.append(adjustment)
        logger.debug(
            "Registered %s adjustment for periods %s-%s",
            adjustment.kind,
            adjustment.start_period,
            adjustment.end_period if adjustment.end_period is not None else "end",
        )

    def active_at(self, period: int) -> list[Adjustment]:
        return [a for a in self._adjustments if a.is_active_at(period)]

    def __iter__(self) -> Iterator[Adjustment]:
        return iter(self._adjustments)

    def __len__(self) -> int:
        return len(self._adjustments)
