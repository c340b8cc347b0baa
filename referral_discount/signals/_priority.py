"""
Priority — first present value wins, per field.

    percentage = first_present(tiers, lambda t: t.percentage, Decimal("10.0"))
    percentage.value   # Decimal
    percentage.origin  # SignalOrigin of the tier that supplied it
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from kungfu import Option, Some

from referral_discount.signals._types import SignalOrigin, TierSignals


@dataclass(frozen=True, slots=True)
class Pick[T]:
    """A resolved field and the tier it came from."""

    value: T
    origin: SignalOrigin


def first_present[T](
    tiers: Iterable[TierSignals],
    field: Callable[[TierSignals], Option[T]],
    default: T,
) -> Pick[T]:
    """
    Walk tiers in order; the first ``Some`` wins even if it wraps ``""``.

    Falls back to ``default`` tagged with SignalOrigin.DEFAULT.
    """
    for tier in tiers:
        match field(tier):
            case Some(value):
                return Pick(value, tier.origin)
            case _:
                continue
    return Pick(default, SignalOrigin.DEFAULT)


__all__ = ("Pick", "first_present")
