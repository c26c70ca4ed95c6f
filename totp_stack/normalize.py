from __future__ import annotations

import re

from .config import TOTPConfig
from .errors import InvalidInput
from .models import NormalizedInput
from .services import Service, parse_service

_WHITESPACE = re.compile(r"\s+")
_ASCII_DIGITS = re.compile(r"[0-9]+")


def normalize_secret(text: str) -> str:
    cleaned = _WHITESPACE.sub("", text or "")
    if not cleaned:
        raise InvalidInput("Secret is empty", field="secret")
    return cleaned


def parse_interval(value: str | int) -> int:
    # bool is an int subclass; True is not an interval.
    if isinstance(value, bool):
        raise InvalidInput(f"Interval must be a positive integer, got {value!r}", field="interval")
    if isinstance(value, int):
        interval = value
    else:
        text = (value or "").strip()
        if not _ASCII_DIGITS.fullmatch(text):
            raise InvalidInput(f"Interval must be a positive integer, got {value!r}", field="interval")
        digits = text.lstrip("0")
        interval = int(digits) if digits else 0
    if interval <= 0:
        raise InvalidInput(f"Interval must be a positive integer, got {value!r}", field="interval")
    return interval


def normalize_inputs(
    secret: str,
    service: str | Service | None = None,
    interval: str | int | None = None,
    cfg: TOTPConfig | None = None,
) -> NormalizedInput:
    cfg = cfg or TOTPConfig()
    return NormalizedInput(
        secret=normalize_secret(secret),
        service=parse_service(cfg.default_service if service is None else service),
        interval=parse_interval(cfg.default_interval if interval is None else interval),
    )
