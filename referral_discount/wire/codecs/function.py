"""
Function payloads — the platform's discount function input and output JSON.

Input is read leniently: every object may be null or missing, numbers are
accepted where the platform sends strings, unknown keys and unknown discount
classes are dropped. Output mirrors the platform's camelCase shape.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Literal

from kungfu import Error, Ok, Result
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from referral_discount._types import DiscountClass
from referral_discount.ops import ResolveOneTimeCode, ResolveTiered
from referral_discount.resolve import (
    DiscountDecision,
    FixedAmount,
    OrderDiscountOperation,
    Percentage,
)
from referral_discount.signals import (
    AppDiscountTier,
    CartDiscountContext,
    CartTier,
    OneTimeCodeContext,
)
from referral_discount.wire.codecs.rrc import FunctionInputError, RequestResponseCodec

logger = logging.getLogger(__name__)


class _Wire(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Input
# ═══════════════════════════════════════════════════════════════════════════════


class ValueField(_Wire):
    """A metafield or cart attribute: ``{"value": ...}``."""

    value: Any = None

    def text(self) -> str | None:
        match self.value:
            case bool():
                return None
            case str() as s:
                return s
            case int() if self.value.bit_length() > 1024:
                # past a double's range
                return None
            case int() | float() | Decimal():
                return str(self.value)
            case _:
                return None


def _text(field: ValueField | None) -> str | None:
    return field.text() if field is not None else None


class MoneyV2(_Wire):
    amount: Any = None


class CartCost(_Wire):
    total_amount: MoneyV2 | None = None


class DiscountIn(_Wire):
    discount_classes: list[DiscountClass] = Field(default_factory=list)
    metafield_discount_percentage: ValueField | None = None
    metafield_discount_type: ValueField | None = None

    @field_validator("discount_classes", mode="before")
    @classmethod
    def _known_classes(cls, raw: object) -> list[DiscountClass]:
        if not isinstance(raw, list):
            return []
        known = {c.value for c in DiscountClass}
        return [DiscountClass(c) for c in raw if isinstance(c, str) and c in known]


class CartIn(_Wire):
    cost: CartCost | None = None
    metafield_shopify_discount_code: ValueField | None = None
    metafield_discount_percentage: ValueField | None = None
    metafield_discount_type: ValueField | None = None
    referral_shopify_discount_code: ValueField | None = None
    referral_discount_percentage: ValueField | None = None
    referral_discount_type: ValueField | None = None
    referral_one_time_code: ValueField | None = None

    def total(self) -> str | None:
        if self.cost is None or self.cost.total_amount is None:
            return None
        return ValueField(value=self.cost.total_amount.amount).text()


class _FunctionInput(_Wire):
    discount: DiscountIn = Field(default_factory=DiscountIn)
    cart: CartIn = Field(default_factory=CartIn)

    @field_validator("discount", "cart", mode="before")
    @classmethod
    def _null_is_empty(cls, raw: object) -> object:
        return {} if raw is None else raw

    @property
    def discount_classes(self) -> frozenset[DiscountClass]:
        return frozenset(self.discount.discount_classes)


class TieredFunctionInput(_FunctionInput):
    def to_domain(self) -> ResolveTiered:
        cart = self.cart
        return ResolveTiered(
            CartDiscountContext(
                discount_classes=self.discount_classes,
                cart_total=cart.total() or "0",
                app_discount=AppDiscountTier(
                    percentage=_text(self.discount.metafield_discount_percentage),
                    type=_text(self.discount.metafield_discount_type),
                ),
                cart_metafield=CartTier(
                    code=_text(cart.metafield_shopify_discount_code),
                    percentage=_text(cart.metafield_discount_percentage),
                    type=_text(cart.metafield_discount_type),
                ),
                cart_attribute=CartTier(
                    code=_text(cart.referral_shopify_discount_code),
                    percentage=_text(cart.referral_discount_percentage),
                    type=_text(cart.referral_discount_type),
                ),
            )
        )


class OneTimeCodeFunctionInput(_FunctionInput):
    def to_domain(self) -> ResolveOneTimeCode:
        cart = self.cart
        return ResolveOneTimeCode(
            OneTimeCodeContext(
                discount_classes=self.discount_classes,
                cart_total=cart.total() or "0",
                code=_text(cart.referral_one_time_code),
                percentage=_text(cart.referral_discount_percentage),
                type=_text(cart.referral_discount_type),
            )
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Output
# ═══════════════════════════════════════════════════════════════════════════════


class PercentageOut(_Wire):
    value: Decimal


class FixedAmountOut(_Wire):
    amount: Decimal


class PercentageValueOut(_Wire):
    percentage: PercentageOut


class FixedAmountValueOut(_Wire):
    fixed_amount: FixedAmountOut


type ValueOut = PercentageValueOut | FixedAmountValueOut


class OrderSubtotalOut(_Wire):
    excluded_cart_line_ids: list[str] = Field(default_factory=list)


class TargetOut(_Wire):
    order_subtotal: OrderSubtotalOut


class AssociatedDiscountCodeOut(_Wire):
    code: str


class CandidateOut(_Wire):
    targets: list[TargetOut]
    message: str | None
    value: PercentageValueOut | FixedAmountValueOut
    conditions: None = None
    associated_discount_code: AssociatedDiscountCodeOut | None = None


class OrderDiscountsAddOut(_Wire):
    selection_strategy: Literal["FIRST"] = "FIRST"
    candidates: list[CandidateOut]


class OperationOut(_Wire):
    order_discounts_add: OrderDiscountsAddOut


def _value_out(op: OrderDiscountOperation) -> ValueOut:
    match op.value:
        case Percentage(value):
            return PercentageValueOut(percentage=PercentageOut(value=value))
        case FixedAmount(amount):
            return FixedAmountValueOut(fixed_amount=FixedAmountOut(amount=amount))


def _operation_out(op: OrderDiscountOperation) -> OperationOut:
    code = op.associated_discount_code
    return OperationOut(
        order_discounts_add=OrderDiscountsAddOut(
            selection_strategy=op.selection_strategy.value,
            candidates=[
                CandidateOut(
                    targets=[
                        TargetOut(
                            order_subtotal=OrderSubtotalOut(
                                excluded_cart_line_ids=list(t.excluded_cart_line_ids)
                            )
                        )
                        for t in op.targets
                    ],
                    message=op.message,
                    value=_value_out(op),
                    associated_discount_code=(
                        AssociatedDiscountCodeOut(code=code.code) if code else None
                    ),
                )
            ],
        )
    )


class FunctionResult(_Wire):
    operations: list[OperationOut] = Field(default_factory=list)

    @classmethod
    def from_decision(cls, decision: DiscountDecision) -> FunctionResult:
        return cls(operations=[_operation_out(op) for op in decision.operations])

    @classmethod
    def from_domain(cls, dom: Result[DiscountDecision, Any]) -> FunctionResult:
        match dom:
            case Ok(decision):
                return cls.from_decision(decision)
            case Error(e):
                logger.error("Discount resolution failed: %s", e)
                return cls()

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=False)


# ═══════════════════════════════════════════════════════════════════════════════
# Codecs
# ═══════════════════════════════════════════════════════════════════════════════

TIERED_CODEC = RequestResponseCodec(TieredFunctionInput, FunctionResult)
ONE_TIME_CODE_CODEC = RequestResponseCodec(OneTimeCodeFunctionInput, FunctionResult)


__all__ = (
    "FunctionInputError",
    "ValueField",
    "TieredFunctionInput",
    "OneTimeCodeFunctionInput",
    "FunctionResult",
    "TIERED_CODEC",
    "ONE_TIME_CODE_CODEC",
)
