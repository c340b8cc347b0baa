from decimal import Decimal

from kungfu import Option, Some

from referral_discount import DiscountClass
from referral_discount.signals import (
    AppDiscountTier,
    CartDiscountContext,
    CartTier,
    OneTimeCodeContext,
)

ORDER = frozenset({DiscountClass.ORDER})


def some_value[T](opt: Option[T]) -> T:
    match opt:
        case Some(value):
            return value
        case _:
            raise AssertionError(f"expected Some, got {opt!r}")


def tiered(
    *,
    classes: frozenset[DiscountClass] = ORDER,
    total: Decimal | str = Decimal("100"),
    app: AppDiscountTier | None = None,
    metafield: CartTier | None = None,
    attribute: CartTier | None = None,
) -> CartDiscountContext:
    return CartDiscountContext(
        discount_classes=classes,
        cart_total=total,
        app_discount=app or AppDiscountTier(),
        cart_metafield=metafield or CartTier(),
        cart_attribute=attribute or CartTier(),
    )


def one_time(
    *,
    classes: frozenset[DiscountClass] = ORDER,
    total: Decimal | str = Decimal("100"),
    code: str | None = "GACHI-ALICE-1X2Y",
    percentage: str | None = None,
    type: str | None = None,
) -> OneTimeCodeContext:
    return OneTimeCodeContext(
        discount_classes=classes,
        cart_total=total,
        code=code,
        percentage=percentage,
        type=type,
    )
