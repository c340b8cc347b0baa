"""
Settings — one frozen object, loaded once from the environment.

    settings = load_settings()                 # REFERRAL_DISCOUNT_* variables
    settings = ResolverSettings(metafields_only=True)
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

ENV_PREFIX = "REFERRAL_DISCOUNT_"


class Variant(StrEnum):
    """Which resolution strategy the invocation glue runs."""

    TIERED = "tiered"
    ONE_TIME_CODE = "one_time_code"


class ResolverSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, frozen=True, extra="ignore")

    default_percentage: Decimal = Field(default=Decimal("10.0"), allow_inf_nan=False)
    message_template: str = "Referral Discount ({percentage:.0f}%)"
    # drop the legacy cart-attribute tier from the priority list
    metafields_only: bool = False
    log_signal_usage: bool = True
    log_level: str = "INFO"
    variant: Variant = Variant.TIERED

    @field_validator("message_template")
    @classmethod
    def _renders_percentage(cls, value: str) -> str:
        try:
            value.format(percentage=Decimal("10"))
        except (ValueError, KeyError, IndexError, AttributeError, TypeError) as exc:
            raise ValueError(f"cannot render a percentage: {exc!r}") from None
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _known_level(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @field_validator("variant", mode="before")
    @classmethod
    def _fold_variant(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value


# field defaults only; the environment is not read
DEFAULTS = ResolverSettings.model_construct()


def load_settings(prefix: str = ENV_PREFIX, **overrides: Any) -> ResolverSettings:
    """
    Build settings from ``{prefix}{FIELD}`` variables, then keyword overrides.

    A malformed value is logged and the field keeps its default.
    """
    try:
        return ResolverSettings(_env_prefix=prefix, **overrides)
    except ValidationError as exc:
        errors = exc.errors()

    fallback: dict[str, Any] = {}
    for err in errors:
        name = str(err["loc"][0])
        if name in fallback:
            continue
        logger.warning(
            "Ignoring %s%s=%r: %s", prefix, name.upper(), err.get("input"), err["msg"]
        )
        fallback[name] = ResolverSettings.model_fields[name].default
    return ResolverSettings(_env_prefix=prefix, **{**overrides, **fallback})


__all__ = ("ENV_PREFIX", "DEFAULTS", "Variant", "ResolverSettings", "load_settings")
