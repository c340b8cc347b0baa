"""
Compile an Application into a FastAPI app, one route per exposure.

    fapp = from_application(application().mount(endp), title="referral-discount")
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import fastapi

from referral_discount.ops import Runner
from referral_discount.wire._endpoint import Application, Endpoint
from referral_discount.wire.codecs.rrc import RequestResponseCodec

logger = logging.getLogger(__name__)

type RouteHandler = Callable[[Any], Awaitable[Any]]


def make_handler(codec: RequestResponseCodec, runner: Runner) -> RouteHandler:
    async def handle(req: Any) -> Any:
        return codec.encode(await runner.run(req.to_domain()))

    # FastAPI reads the body model and response model from these
    handle.__annotations__ = {"req": codec.request, "return": codec.response}
    return handle


def add_endpoint_to_app(app: fastapi.FastAPI, endp: Endpoint) -> None:
    for trigger, codec in endp.exposures:
        logger.debug("Route %s %s -> %s", trigger.method, trigger.path, codec.request.__name__)
        app.add_api_route(
            trigger.path,
            make_handler(codec, endp.runner),
            methods=[trigger.method],
            summary=trigger.summary or None,
            tags=list(trigger.tags) or None,
            response_model_by_alias=True,
        )


def from_application(app: Application, **fastapi_kwargs: Any) -> fastapi.FastAPI:
    f_app = fastapi.FastAPI(**fastapi_kwargs)
    for endp in app.endpoints:
        add_endpoint_to_app(f_app, endp)
    return f_app


__all__ = ("make_handler", "add_endpoint_to_app", "from_application")
