#!/usr/bin/env python3
"""Print the current TOTP code for a base32 secret."""

from __future__ import annotations

import argparse
import locale
import logging
import sys
from typing import Sequence

from totp_stack.api import generate
from totp_stack.config import TOTPConfig
from totp_stack.errors import InvalidInput, TOTPError
from totp_stack.models import ExecutionContext
from totp_stack.services import supported_services

logger = logging.getLogger("totp_cli")


class _UsageError(Exception):
    pass


class _ParserExit(Exception):
    def __init__(self, status: int):
        super().__init__(status)
        self.status = status


class _Parser(argparse.ArgumentParser):
    """Keeps help on the diagnostic stream and never calls sys.exit."""

    def __init__(self, *args, stream=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.stream = stream or sys.stderr

    def _print_message(self, message, file=None):
        if message:
            self.stream.write(message)

    def exit(self, status=0, message=None):
        if message:
            self._print_message(message)
        raise _ParserExit(status)

    # argparse exits with 2 on bad usage; 2 belongs to secret decode failures here.
    def error(self, message):
        raise _UsageError(message)


def build_parser(cfg: TOTPConfig, stream=None) -> argparse.ArgumentParser:
    parser = _Parser(
        stream=stream,
        prog="totp",
        description="Generate the current 6-digit TOTP code (RFC 6238, HMAC-SHA1) from a base32 secret.",
        epilog="Only the code is written to stdout; help and errors go to stderr.",
    )
    parser.add_argument("secret", help="Base32-encoded shared secret (whitespace is ignored)")
    parser.add_argument(
        "service",
        nargs="?",
        default=cfg.default_service,
        help=f"Target service: {'|'.join(supported_services())} (default: {cfg.default_service})",
    )
    parser.add_argument(
        "interval",
        nargs="?",
        default=str(cfg.default_interval),
        help=f"Update interval in seconds (default: {cfg.default_interval})",
    )
    parser.add_argument("--at", type=int, default=None, metavar="UNIX_TIME", help="Compute the code for this Unix time instead of now")
    parser.add_argument("--show-remaining", action="store_true", help="Report seconds until the code rolls over on stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def _force_locale(name: str) -> None:
    try:
        locale.setlocale(locale.LC_ALL, name)
    except locale.Error as exc:
        logger.warning(f"Could not switch to locale {name}: {exc}")


def main(argv: Sequence[str] | None = None, ctx: ExecutionContext | None = None) -> int:
    ctx = ctx or ExecutionContext()
    cfg = TOTPConfig()
    parser = build_parser(cfg, ctx.err)

    try:
        args = parser.parse_args(argv)
    except _ParserExit as exc:
        return exc.status
    except _UsageError as exc:
        parser.print_help()
        print(f"\nerror: {exc}", file=ctx.err)
        return InvalidInput.exit_code

    level = logging.DEBUG if args.verbose else getattr(logging, cfg.log_level)
    logging.basicConfig(stream=ctx.err, level=level, force=True)
    _force_locale(cfg.locale_name)

    if args.at is not None:
        fixed = args.at
        ctx = ExecutionContext(out=ctx.out, err=ctx.err, clock=lambda: fixed)

    try:
        result = generate(args.secret, args.service, args.interval, ctx=ctx, cfg=cfg)
    except InvalidInput as exc:
        parser.print_help()
        print(f"\nerror: {exc}", file=ctx.err)
        return exc.exit_code
    except TOTPError as exc:
        print(f"error: {exc}", file=ctx.err)
        return exc.exit_code

    print(result.code, file=ctx.out)
    if args.show_remaining:
        print(f"valid for {result.remaining_seconds}s", file=ctx.err)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
