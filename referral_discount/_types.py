"""
Core types for referral_discount.

Re-exports from kungfu + the two enumerations every layer shares.
"""

from __future__ import annotations

from enum import StrEnum

# Re-export from kungfu
from kungfu import Result, Ok, Error, Option, Some, Nothing, LazyCoroResult

# ═══════════════════════════════════════════════════════════════════════════════
# Discount classes
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountClass(StrEnum):
    """Eligibility tags attached to the active discount (platform spelling)."""

    ORDER = "ORDER"
    PRODUCT = "PRODUCT"
    SHIPPING = "SHIPPING"


# ═══════════════════════════════════════════════════════════════════════════════
# Discount kind
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountKind(StrEnum):
    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"


def normalize_kind(raw: str | None) -> DiscountKind:
    """
    Convert the legacy ``type`` string into a DiscountKind.

    Missing, empty and ``"percentage"`` select PERCENTAGE. Any other string
    selects FIXED_AMOUNT, whatever it spells.
    """
    if raw is None or raw == "" or raw == DiscountKind.PERCENTAGE.value:
        return DiscountKind.PERCENTAGE
    return DiscountKind.FIXED_AMOUNT


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "LazyCoroResult",
    # Enumerations
    "DiscountClass",
    "DiscountKind",
    "normalize_kind",
)
