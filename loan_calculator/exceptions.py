"""Exception hierarchy for the loan calculator.

Every error raised by the engine derives from ``LoanCalculatorError`` so that
callers (the API layer in particular) can catch a single type.
"""

from typing import Any


class LoanCalculatorError(Exception):
    """Base exception for loan calculator errors.

    Attributes:
        message: Human-readable error description
        context: Additional values describing the failing input
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class DomainError(LoanCalculatorError):
    """Arithmetic domain violation.

    Raised for:
    - A zero frequency used as a divisor
    - Negative principal or term
    - An adjustment window with start_period < 1 or end_period < start_period
    - A period count that is not finite or exceeds the configured maximum

    Example:
        >>> raise DomainError(
        ...     "Repayment frequency must be non-zero",
        ...     context={"repayment_frequency": 0}
        ... )
    """


class ConfigurationError(LoanCalculatorError):
    """Malformed configuration, e.g. an adjustment overriding an unknown field."""
