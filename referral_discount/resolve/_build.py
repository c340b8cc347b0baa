"""
Value construction and operation assembly, shared by both strategies.
"""

from __future__ import annotations

from decimal import Decimal

from referral_discount._types import DiscountKind
from referral_discount.config import ResolverSettings
from referral_discount.resolve._decision import (
    AssociatedDiscountCode,
    CandidateValue,
    FixedAmount,
    OrderDiscountOperation,
    Percentage,
)


def build_value(kind: DiscountKind, percentage: Decimal, cart_total: Decimal) -> CandidateValue:
    """
    Percentages pass through unclamped. A fixed amount reuses the percentage
    number as currency and is capped at the cart total.
    """
    if kind is DiscountKind.PERCENTAGE:
        return Percentage(percentage)
    return FixedAmount(min(percentage, cart_total))


def render_message(percentage: Decimal, settings: ResolverSettings) -> str:
    return settings.message_template.format(percentage=percentage)


def build_operation(
    percentage: Decimal,
    value: CandidateValue,
    code: str,
    settings: ResolverSettings,
) -> OrderDiscountOperation:
    """One operation on the order subtotal; the code is attached only if non-empty."""
    return OrderDiscountOperation(
        message=render_message(percentage, settings),
        value=value,
        associated_discount_code=AssociatedDiscountCode(code) if code else None,
    )


__all__ = ("build_value", "render_message", "build_operation")
