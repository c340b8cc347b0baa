"""
Codecs — convert transport payloads to domain ops and back.

    from referral_discount.wire.codecs import RequestResponseCodec, function

    codec = function.TIERED_CODEC
    op = codec.decode(raw_json)
"""

from referral_discount.wire.codecs.rrc import (
    RequestResponseCodec,
    FunctionInputError,
    ToDomain,
    FromDomain,
)
from referral_discount.wire.codecs import function

__all__ = (
    "RequestResponseCodec",
    "FunctionInputError",
    "ToDomain",
    "FromDomain",
    "function",
)
