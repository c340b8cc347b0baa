"""
Single-source strategy — one one-time code, no tier fallback.

The code only proves eligibility; it is never attached to the operation.
"""

from __future__ import annotations

import logging

from referral_discount._types import DiscountClass, normalize_kind
from referral_discount.config import DEFAULTS, ResolverSettings
from referral_discount.resolve._build import build_operation, build_value
from referral_discount.resolve._decision import DiscountDecision
from referral_discount.signals import (
    OneTimeCodeContext,
    SignalOrigin,
    TierSignals,
    first_present,
    optional_text,
    parse_amount,
    parse_percentage,
)

logger = logging.getLogger(__name__)


def resolve_one_time_code(
    context: OneTimeCodeContext,
    settings: ResolverSettings = DEFAULTS,
) -> DiscountDecision:
    if DiscountClass.ORDER not in context.discount_classes:
        return DiscountDecision.empty()

    if not context.code:
        logger.debug("No one-time code on the cart")
        return DiscountDecision.empty()

    source = (
        TierSignals(
            origin=SignalOrigin.ONE_TIME_CODE,
            percentage=parse_percentage(context.percentage),
            type=optional_text(context.type),
        ),
    )
    percentage = first_present(source, lambda t: t.percentage, settings.default_percentage)
    kind = first_present(source, lambda t: t.type, "")

    if settings.log_signal_usage:
        logger.debug(
            "Resolved one-time code percentage=%s (%s), type=%r (%s)",
            percentage.value,
            percentage.origin,
            kind.value,
            kind.origin,
        )

    value = build_value(
        normalize_kind(kind.value),
        percentage.value,
        parse_amount(context.cart_total),
    )
    return DiscountDecision.single(build_operation(percentage.value, value, "", settings))


__all__ = ("resolve_one_time_code",)
