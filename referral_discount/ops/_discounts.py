"""
Discount ops — the two resolution strategies as dispatchable operations.

The invoking harness picks a strategy by the op it sends:

    runner = discount_runner(settings)
    await runner.run(ResolveTiered(ctx))
    await runner.run(ResolveOneTimeCode(otc))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Never

from kungfu import Ok, Result

from referral_discount.config import ResolverSettings, load_settings
from referral_discount.ops._graph import Returning, Runner, ops
from referral_discount.resolve import (
    DiscountDecision,
    resolve_one_time_code,
    resolve_tiered,
)
from referral_discount.signals import CartDiscountContext, OneTimeCodeContext


# ═══════════════════════════════════════════════════════════════════════════════
# Operations
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ResolveTiered(Returning[DiscountDecision, Never]):
    context: CartDiscountContext


@dataclass(frozen=True, slots=True)
class ResolveOneTimeCode(Returning[DiscountDecision, Never]):
    context: OneTimeCodeContext


# ═══════════════════════════════════════════════════════════════════════════════
# Handlers
# ═══════════════════════════════════════════════════════════════════════════════


async def handle_tiered(
    req: ResolveTiered,
    settings: ResolverSettings,
) -> Result[DiscountDecision, Never]:
    return Ok(resolve_tiered(req.context, settings))


async def handle_one_time_code(
    req: ResolveOneTimeCode,
    settings: ResolverSettings,
) -> Result[DiscountDecision, Never]:
    return Ok(resolve_one_time_code(req.context, settings))


# ═══════════════════════════════════════════════════════════════════════════════
# Runner
# ═══════════════════════════════════════════════════════════════════════════════


def discount_runner(settings: ResolverSettings | None = None) -> Runner:
    return (
        ops()
        .on(ResolveTiered, handle_tiered)
        .on(ResolveOneTimeCode, handle_one_time_code)
        .compile()
        .inject(ResolverSettings, settings if settings is not None else load_settings())
    )


__all__ = (
    "ResolveTiered",
    "ResolveOneTimeCode",
    "handle_tiered",
    "handle_one_time_code",
    "discount_runner",
)
