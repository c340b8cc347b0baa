"""
Signal types — the immutable input snapshot and its extracted tiers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum

from kungfu import Option, Nothing

from referral_discount._types import DiscountClass

# Raw numeric fields arrive as strings from the platform; callers may also
# hand over an already parsed Decimal.
type RawDecimal = str | Decimal | None


# ═══════════════════════════════════════════════════════════════════════════════
# Input tiers
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class AppDiscountTier:
    """Metafields on the app-created discount. Never carries a code."""

    percentage: RawDecimal = None
    type: str | None = None


@dataclass(frozen=True, slots=True)
class CartTier:
    """Cart metafields or legacy cart attributes."""

    code: str | None = None
    percentage: RawDecimal = None
    type: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Contexts
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CartDiscountContext:
    """Snapshot for the three-tier strategy."""

    discount_classes: frozenset[DiscountClass] = frozenset()
    cart_total: Decimal | str = Decimal("0")
    app_discount: AppDiscountTier = field(default_factory=AppDiscountTier)
    cart_metafield: CartTier = field(default_factory=CartTier)
    cart_attribute: CartTier = field(default_factory=CartTier)


@dataclass(frozen=True, slots=True)
class OneTimeCodeContext:
    """Snapshot for the single-source strategy: one code, its own attributes."""

    discount_classes: frozenset[DiscountClass] = frozenset()
    cart_total: Decimal | str = Decimal("0")
    code: str | None = None
    percentage: RawDecimal = None
    type: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Extracted tiers
# ═══════════════════════════════════════════════════════════════════════════════


class SignalOrigin(StrEnum):
    APP_DISCOUNT = "app_discount"
    CART_METAFIELD = "cart_metafield"
    CART_ATTRIBUTE = "cart_attribute"
    ONE_TIME_CODE = "one_time_code"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class TierSignals:
    origin: SignalOrigin
    code: Option[str] = field(default_factory=Nothing)
    percentage: Option[Decimal] = field(default_factory=Nothing)
    type: Option[str] = field(default_factory=Nothing)


__all__ = (
    "RawDecimal",
    "AppDiscountTier",
    "CartTier",
    "CartDiscountContext",
    "OneTimeCodeContext",
    "SignalOrigin",
    "TierSignals",
)
