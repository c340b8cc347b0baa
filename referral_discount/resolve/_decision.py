"""
Decision — what the engine hands back to the platform.

Zero or one order discount operation. Percentages are raw numbers
(``Decimal("10")`` is 10%), never fractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from kungfu import Option, Some, Nothing


# ═══════════════════════════════════════════════════════════════════════════════
# Candidate values
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Percentage:
    value: Decimal


@dataclass(frozen=True, slots=True)
class FixedAmount:
    amount: Decimal


type CandidateValue = Percentage | FixedAmount


# ═══════════════════════════════════════════════════════════════════════════════
# Operation
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class OrderSubtotalTarget:
    excluded_cart_line_ids: tuple[str, ...] = ()


class SelectionStrategy(StrEnum):
    FIRST = "FIRST"


@dataclass(frozen=True, slots=True)
class AssociatedDiscountCode:
    code: str


@dataclass(frozen=True, slots=True)
class OrderDiscountOperation:
    message: str
    value: CandidateValue
    targets: tuple[OrderSubtotalTarget, ...] = (OrderSubtotalTarget(),)
    selection_strategy: SelectionStrategy = SelectionStrategy.FIRST
    associated_discount_code: AssociatedDiscountCode | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Decision
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DiscountDecision:
    operations: tuple[OrderDiscountOperation, ...] = ()

    def __post_init__(self) -> None:
        if len(self.operations) > 1:
            raise ValueError("a discount decision carries at most one operation")

    @classmethod
    def empty(cls) -> DiscountDecision:
        return cls()

    @classmethod
    def single(cls, operation: OrderDiscountOperation) -> DiscountDecision:
        return cls((operation,))

    @property
    def is_empty(self) -> bool:
        return not self.operations

    @property
    def operation(self) -> Option[OrderDiscountOperation]:
        if self.operations:
            return Some(self.operations[0])
        return Nothing()


__all__ = (
    "Percentage",
    "FixedAmount",
    "CandidateValue",
    "OrderSubtotalTarget",
    "SelectionStrategy",
    "AssociatedDiscountCode",
    "OrderDiscountOperation",
    "DiscountDecision",
)
