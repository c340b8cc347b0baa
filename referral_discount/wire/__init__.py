"""
Wire — expose the discount runner over HTTP.

    from referral_discount import ops as O
    from referral_discount.wire import HTTPRouteTrigger, application, endpoint, from_application
    from referral_discount.wire.codecs.function import TIERED_CODEC

    endp = endpoint(O.discount_runner()).expose(
        HTTPRouteTrigger("POST", "/discounts/tiered"), TIERED_CODEC
    )
    fapp = from_application(application().mount(endp))
"""

from referral_discount.wire._endpoint import (
    Application,
    Endpoint,
    Exposure,
    HTTPRouteTrigger,
    Method,
    application,
    endpoint,
)
from referral_discount.wire.codecs.rrc import FunctionInputError, RequestResponseCodec
from referral_discount.wire.http import from_application

# Subpackages
from referral_discount.wire import codecs

__all__ = (
    "Endpoint",
    "endpoint",
    "Application",
    "application",
    "Exposure",
    "HTTPRouteTrigger",
    "Method",
    "RequestResponseCodec",
    "FunctionInputError",
    "from_application",
    "codecs",
)
