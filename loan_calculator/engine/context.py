"""Effective per-period loan context.

The effective context for a period is built in two steps:

1. Merge: start from a default ``LoanContext``, overwrite every field with the
   base context, then overwrite with the ``context`` overrides of each active
   adjustment in registration order. A field set by a later source replaces
   the value from an earlier one; values are never combined.
2. Process: call ``process`` on each active adjustment, again in
   registration order, so adjustments can accumulate into additive fields
   such as ``fee``.
"""

from dataclasses import fields, replace
from typing import Any, Iterable, Mapping

from loan_calculator.engine.adjustments import Adjustment
from loan_calculator.exceptions import ConfigurationError
from loan_calculator.models.loan import CONFIGURATION_FIELDS, LoanContext


def merge_context(
    target: LoanContext, overrides: LoanContext | Mapping[str, Any]
) -> LoanContext:
    """Return a copy of ``target`` with the fields in ``overrides`` replaced.

    A ``LoanContext`` source overwrites every field; a mapping overwrites only
    the keys it holds, which must be configuration fields.
    """
    if isinstance(overrides, LoanContext):
        values = {f.name: getattr(overrides, f.name) for f in fields(LoanContext)}
    else:
        unknown = set(overrides) - CONFIGURATION_FIELDS
        if unknown:
            raise ConfigurationError(
                "Cannot override unknown loan fields",
                context={"fields": ", ".join(sorted(unknown))},
            )
        values = dict(overrides)
    return replace(target, **values)


def resolve_context(
    base: LoanContext, adjustments: Iterable[Adjustment], period: int
) -> LoanContext:
    """Build the effective context for ``period`` from the active ``adjustments``.

    ``adjustments`` must already be filtered to those active at ``period``
    and be in registration order. ``base`` is left untouched.
    """
    adjustments = list(adjustments)

    context = merge_context(LoanContext(), base)
    for adjustment in adjustments:
        context = merge_context(context, adjustment.context)

    for adjustment in adjustments:
        adjustment.process(period, context)

    return context
