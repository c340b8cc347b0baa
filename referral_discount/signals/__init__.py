"""
Signals — the layered discount configuration read at checkout.

    from referral_discount import signals as S

    ctx = S.CartDiscountContext(
        discount_classes=frozenset({DiscountClass.ORDER}),
        cart_total=Decimal("100"),
        app_discount=S.AppDiscountTier(percentage="15"),
    )
    tiers = S.extract_tiers(ctx, settings)
    pct = S.first_present(tiers, lambda t: t.percentage, Decimal("10.0"))
"""

from referral_discount.signals._types import (
    RawDecimal,
    AppDiscountTier,
    CartTier,
    CartDiscountContext,
    OneTimeCodeContext,
    SignalOrigin,
    TierSignals,
)
from referral_discount.signals._parse import (
    MAX_EXPONENT,
    parse_percentage,
    parse_amount,
    optional_text,
    extract_app_tier,
    extract_cart_tier,
    extract_tiers,
)
from referral_discount.signals._priority import Pick, first_present

__all__ = (
    "RawDecimal",
    "AppDiscountTier",
    "CartTier",
    "CartDiscountContext",
    "OneTimeCodeContext",
    "SignalOrigin",
    "TierSignals",
    "MAX_EXPONENT",
    "parse_percentage",
    "parse_amount",
    "optional_text",
    "extract_app_tier",
    "extract_cart_tier",
    "extract_tiers",
    "Pick",
    "first_present",
)
