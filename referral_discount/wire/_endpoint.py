"""
Endpoints — a runner plus the HTTP routes that reach it.

    endp = endpoint(discount_runner()).expose(
        HTTPRouteTrigger("POST", "/discounts/tiered"), TIERED_CODEC
    )
    app = application().mount(endp)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Self

from referral_discount.ops import Runner
from referral_discount.wire.codecs.rrc import RequestResponseCodec


type Method = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]


@dataclass(frozen=True, slots=True)
class HTTPRouteTrigger:
    method: Method
    path: str
    summary: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"route path must start with '/': {self.path!r}")


type Exposure = tuple[HTTPRouteTrigger, RequestResponseCodec]


@dataclass(slots=True)
class Endpoint:
    """A runner plus the ways it is reachable from outside."""

    runner: Runner
    exposures: list[Exposure] = field(default_factory=list[Exposure])

    def expose(self, trigger: HTTPRouteTrigger, codec: RequestResponseCodec) -> Endpoint:
        """
        Add an exposure. A codec whose request decodes into an op the runner
        does not handle is rejected here, at wiring time.
        """
        op_type = codec.op_type
        if op_type is not None and not self.runner.handles(op_type):
            raise ValueError(
                f"{codec.request.__name__} decodes to {op_type.__name__}, "
                "which the runner does not handle"
            )
        return Endpoint(
            runner=self.runner, exposures=[*self.exposures, (trigger, codec)]
        )


def endpoint(runner: Runner) -> Endpoint:
    return Endpoint(runner=runner)


# ═══════════════════════════════════════════════════════════════════════════════
# Application
# ═══════════════════════════════════════════════════════════════════════════════


class Application:
    def __init__(self) -> None:
        self.endpoints: list[Endpoint] = []

    def mount(self, *endps: Endpoint) -> Self:
        self.endpoints.extend(endps)
        return self

    def routes(self) -> list[tuple[str, str]]:
        """(method, path) of every exposure, in mount order."""
        return [
            (trigger.method, trigger.path)
            for endp in self.endpoints
            for trigger, _ in endp.exposures
        ]


def application() -> Application:
    return Application()
