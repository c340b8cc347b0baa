"""
referral_discount — order-level referral discounts at checkout.

    from referral_discount import signals as S   # Input snapshot + tier priority
    from referral_discount import resolve as R   # The two resolution strategies
    from referral_discount import ops as O       # Dispatch for invoking harnesses

    decision = R.resolve_tiered(S.CartDiscountContext(...))
"""

__version__ = "0.1.0"

from referral_discount import signals
from referral_discount import resolve
from referral_discount import ops
from referral_discount._types import (
    Option,
    Some,
    Nothing,
    Result,
    Ok,
    Error,
    DiscountClass,
    DiscountKind,
    normalize_kind,
)
from referral_discount.config import ResolverSettings, Variant, load_settings
from referral_discount.resolve import DiscountDecision, resolve_tiered, resolve_one_time_code
from referral_discount.signals import CartDiscountContext, OneTimeCodeContext

__all__ = (
    "signals",
    "resolve",
    "ops",
    "Option",
    "Some",
    "Nothing",
    "Result",
    "Ok",
    "Error",
    "DiscountClass",
    "DiscountKind",
    "normalize_kind",
    "ResolverSettings",
    "Variant",
    "load_settings",
    "DiscountDecision",
    "resolve_tiered",
    "resolve_one_time_code",
    "CartDiscountContext",
    "OneTimeCodeContext",
)
