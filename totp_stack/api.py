from __future__ import annotations

import hmac
import logging

from .config import TOTPConfig
from .models import ExecutionContext, TOTPCode
from .normalize import normalize_inputs
from .otp import decode_secret, derive_counter, hotp, totp
from .services import Service

logger = logging.getLogger(__name__)


def generate(
    secret: str,
    service: str | Service | None = None,
    interval: str | int | None = None,
    *,
    ctx: ExecutionContext | None = None,
    cfg: TOTPConfig | None = None,
) -> TOTPCode:
    ctx = ctx or ExecutionContext()
    normalized = normalize_inputs(secret, service, interval, cfg)
    logger.debug(f"service={normalized.service.value} interval={normalized.interval}s")
    return totp(normalized.secret, ctx.now(), normalized.interval, normalized.service.profile)


def verify(
    code: str,
    secret: str,
    service: str | Service | None = None,
    interval: str | int | None = None,
    *,
    window: int = 1,
    ctx: ExecutionContext | None = None,
    cfg: TOTPConfig | None = None,
) -> bool:
    """Check a submitted code against the current window and +/- `window` neighbours."""
    ctx = ctx or ExecutionContext()
    normalized = normalize_inputs(secret, service, interval, cfg)
    profile = normalized.service.profile

    candidate = (code or "").strip().replace(" ", "")
    if len(candidate) != profile.digits or not candidate.isascii() or not candidate.isdigit():
        return False

    key = decode_secret(normalized.secret)
    counter = derive_counter(ctx.now(), normalized.interval)
    matched = False
    for off in range(-max(0, window), max(0, window) + 1):
        if counter + off < 0:
            continue
        # Evaluate every step so timing does not depend on which one matched.
        if hmac.compare_digest(hotp(key, counter + off, profile), candidate):
            matched = True
    return matched
