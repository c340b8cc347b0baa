"""
Resolve — the discount decision for one cart snapshot.

    from referral_discount import resolve as R

    decision = R.resolve_tiered(ctx)            # app > cart metafield > attribute
    decision = R.resolve_one_time_code(otc)     # single one-time code source

Both are pure and total: malformed input degrades to defaults or to an
empty decision, never to an exception.
"""

from referral_discount.resolve._decision import (
    Percentage,
    FixedAmount,
    CandidateValue,
    OrderSubtotalTarget,
    SelectionStrategy,
    AssociatedDiscountCode,
    OrderDiscountOperation,
    DiscountDecision,
)
from referral_discount.resolve._build import (
    build_value,
    render_message,
    build_operation,
)
from referral_discount.resolve._tiered import resolve_tiered
from referral_discount.resolve._single import resolve_one_time_code

__all__ = (
    "Percentage",
    "FixedAmount",
    "CandidateValue",
    "OrderSubtotalTarget",
    "SelectionStrategy",
    "AssociatedDiscountCode",
    "OrderDiscountOperation",
    "DiscountDecision",
    "build_value",
    "render_message",
    "build_operation",
    "resolve_tiered",
    "resolve_one_time_code",
)
