"""
HTTP service — both strategies behind FastAPI.

    uvicorn referral_discount.service:create_app --factory
"""

from __future__ import annotations

import logging

import fastapi

from referral_discount import __version__
from referral_discount.config import ResolverSettings, load_settings
from referral_discount.log import configure_logging
from referral_discount.ops import discount_runner
from referral_discount.wire import HTTPRouteTrigger, application, endpoint, from_application
from referral_discount.wire.codecs.function import ONE_TIME_CODE_CODEC, TIERED_CODEC

logger = logging.getLogger(__name__)

TIERED_PATH = "/discounts/tiered"
ONE_TIME_CODE_PATH = "/discounts/one-time-code"


def create_app(settings: ResolverSettings | None = None) -> fastapi.FastAPI:
    settings = settings if settings is not None else load_settings()
    configure_logging(settings.log_level)

    endp = (
        endpoint(discount_runner(settings))
        .expose(
            HTTPRouteTrigger(
                "POST", TIERED_PATH, summary="Resolve app, cart metafield and attribute signals"
            ),
            TIERED_CODEC,
        )
        .expose(
            HTTPRouteTrigger(
                "POST", ONE_TIME_CODE_PATH, summary="Resolve a one-time code cart"
            ),
            ONE_TIME_CODE_CODEC,
        )
    )
    logger.info("Serving discount resolution (metafields_only=%s)", settings.metafields_only)
    return from_application(
        application().mount(endp),
        title="referral-discount",
        version=__version__,
    )


__all__ = ("TIERED_PATH", "ONE_TIME_CODE_PATH", "create_app")
