"""
Ops — data-driven dispatch of the resolution strategies.

    from referral_discount import ops as O

    runner = O.discount_runner(settings)
    match await runner.run(O.ResolveTiered(ctx)):
        case Ok(decision): ...

Custom operations register the same way:
    runner = O.ops().on(MyOp, my_handler).compile().inject(Dep, dep)
"""

from referral_discount.ops._graph import (
    Op,
    Returns,
    Returning,
    OpsBuilder,
    Runner,
    ops,
)
from referral_discount.ops._discounts import (
    ResolveTiered,
    ResolveOneTimeCode,
    handle_tiered,
    handle_one_time_code,
    discount_runner,
)

__all__ = (
    "Op",
    "Returns",
    "Returning",
    "OpsBuilder",
    "Runner",
    "ops",
    "ResolveTiered",
    "ResolveOneTimeCode",
    "handle_tiered",
    "handle_one_time_code",
    "discount_runner",
)
