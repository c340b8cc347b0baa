"""
Parsing — turn raw tier fields into Options.

Nothing here raises: a field that cannot be read is absent.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from kungfu import Option, Some, Nothing

from referral_discount.config import ResolverSettings
from referral_discount.signals._types import (
    AppDiscountTier,
    CartDiscountContext,
    CartTier,
    RawDecimal,
    SignalOrigin,
    TierSignals,
)

# plain or scientific decimal notation, nothing else
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
# a double overflows past this exponent
MAX_EXPONENT = 308


def parse_percentage(raw: RawDecimal) -> Option[Decimal]:
    """
    Parse a decimal string. Unparsable, non-finite or out-of-range values
    are Nothing.
    """
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, str) and _NUMBER.fullmatch(raw):
        try:
            value = Decimal(raw)
        except InvalidOperation:
            return Nothing()
    else:
        return Nothing()
    if not value.is_finite() or value.adjusted() > MAX_EXPONENT:
        return Nothing()
    return Some(value)


def parse_amount(raw: RawDecimal) -> Decimal:
    """Cart total; anything unreadable is zero."""
    match parse_percentage(raw):
        case Some(value):
            return value
        case _:
            return Decimal("0")


def optional_text(raw: str | None) -> Option[str]:
    return Nothing() if raw is None else Some(raw)


# ═══════════════════════════════════════════════════════════════════════════════
# Tier extraction
# ═══════════════════════════════════════════════════════════════════════════════


def extract_app_tier(tier: AppDiscountTier) -> TierSignals:
    return TierSignals(
        origin=SignalOrigin.APP_DISCOUNT,
        percentage=parse_percentage(tier.percentage),
        type=optional_text(tier.type),
    )


def extract_cart_tier(origin: SignalOrigin, tier: CartTier) -> TierSignals:
    return TierSignals(
        origin=origin,
        code=optional_text(tier.code),
        percentage=parse_percentage(tier.percentage),
        type=optional_text(tier.type),
    )


def extract_tiers(
    context: CartDiscountContext,
    settings: ResolverSettings,
) -> tuple[TierSignals, ...]:
    """Extract every tier independently, highest priority first."""
    tiers = [
        extract_app_tier(context.app_discount),
        extract_cart_tier(SignalOrigin.CART_METAFIELD, context.cart_metafield),
    ]
    if not settings.metafields_only:
        tiers.append(
            extract_cart_tier(SignalOrigin.CART_ATTRIBUTE, context.cart_attribute)
        )
    return tuple(tiers)


__all__ = (
    "MAX_EXPONENT",
    "parse_percentage",
    "parse_amount",
    "optional_text",
    "extract_app_tier",
    "extract_cart_tier",
    "extract_tiers",
)
