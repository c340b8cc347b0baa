"""
Three-tier strategy.

App discount metafields > cart metafields > cart attributes > defaults,
resolved independently per field. Applies when the app discount supplied a
percentage, or when a non-empty code was found in the cart.
"""

from __future__ import annotations

import logging

from kungfu import Some

from referral_discount._types import DiscountClass, normalize_kind
from referral_discount.config import DEFAULTS, ResolverSettings
from referral_discount.resolve._build import build_operation, build_value
from referral_discount.resolve._decision import DiscountDecision
from referral_discount.signals import (
    CartDiscountContext,
    extract_tiers,
    first_present,
    parse_amount,
)

logger = logging.getLogger(__name__)


def resolve_tiered(
    context: CartDiscountContext,
    settings: ResolverSettings = DEFAULTS,
) -> DiscountDecision:
    if DiscountClass.ORDER not in context.discount_classes:
        return DiscountDecision.empty()

    tiers = extract_tiers(context, settings)
    app_tier = tiers[0]
    is_app_discount = isinstance(app_tier.percentage, Some)

    percentage = first_present(tiers, lambda t: t.percentage, settings.default_percentage)
    kind = first_present(tiers, lambda t: t.type, "")
    # the app tier code is always Nothing
    code = first_present(tiers, lambda t: t.code, "")

    if settings.log_signal_usage:
        logger.debug(
            "Resolved percentage=%s (%s), type=%r (%s), code=%r (%s), app_discount=%s",
            percentage.value,
            percentage.origin,
            kind.value,
            kind.origin,
            code.value,
            code.origin,
            is_app_discount,
        )

    if not (is_app_discount or code.value):
        logger.debug("No app discount and no cart code; nothing to apply")
        return DiscountDecision.empty()

    value = build_value(
        normalize_kind(kind.value),
        percentage.value,
        parse_amount(context.cart_total),
    )
    return DiscountDecision.single(
        build_operation(percentage.value, value, code.value, settings)
    )


__all__ = ("resolve_tiered",)
