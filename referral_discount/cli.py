"""
Function entry point — one input document in, one result document out.

    python -m referral_discount < input.json
    python -m referral_discount --variant one_time_code --input input.json

Malformed documents answer with no operations: a broken signal never
blocks checkout.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO, TextIO

from referral_discount.config import Variant, load_settings
from referral_discount.log import configure_logging
from referral_discount.ops import Runner, discount_runner
from referral_discount.wire.codecs import FunctionInputError, RequestResponseCodec
from referral_discount.wire.codecs.function import (
    ONE_TIME_CODE_CODEC,
    TIERED_CODEC,
    FunctionResult,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNREADABLE = 2

CODECS: dict[Variant, RequestResponseCodec] = {
    Variant.TIERED: TIERED_CODEC,
    Variant.ONE_TIME_CODE: ONE_TIME_CODE_CODEC,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="referral-discount",
        description="Resolve the order discount for one cart snapshot.",
    )
    parser.add_argument(
        "--variant",
        choices=[v.value for v in Variant],
        default=None,
        help="Resolution strategy (default: REFERRAL_DISCOUNT_VARIANT or tiered)",
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Input JSON file (default: stdin)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: REFERRAL_DISCOUNT_LOG_LEVEL or INFO)",
    )
    return parser


async def run_document(runner: Runner, variant: Variant, raw: bytes | str) -> FunctionResult:
    codec = CODECS[variant]
    try:
        op = codec.decode(raw)
    except FunctionInputError as exc:
        logger.error("Rejected function input [%s]: %s", exc.code, exc.message)
        return FunctionResult()
    return codec.encode(await runner.run(op))


def main(
    argv: Sequence[str] | None = None,
    stdin: BinaryIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    overrides: dict[str, object] = {}
    if args.variant is not None:
        overrides["variant"] = Variant(args.variant)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    settings = load_settings(**overrides)
    configure_logging(settings.log_level)

    if args.input is not None:
        try:
            raw = args.input.read_bytes()
        except OSError as exc:
            logger.error("Cannot read %s: %s", args.input, exc)
            return EXIT_UNREADABLE
    else:
        raw = (stdin or sys.stdin.buffer).read()

    result = asyncio.run(run_document(discount_runner(settings), settings.variant, raw))
    out = stdout or sys.stdout
    out.write(result.to_json())
    out.write("\n")
    return EXIT_OK


__all__ = ("EXIT_OK", "EXIT_UNREADABLE", "CODECS", "build_parser", "run_document", "main")
