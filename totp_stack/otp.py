"""RFC 6238 time-based one-time passwords on top of RFC 4226 HOTP.

The pipeline is: unix time -> counter -> HMAC over the 8-byte big-endian
counter -> dynamic truncation -> zero-padded decimal code.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import logging
import struct

from .config import BASE32_ALPHABET, GOOGLE_AUTHENTICATOR_PROFILE, SECRET_GROUP_SEPARATORS, AlgorithmProfile
from .errors import CryptoBackendError, DecodeError, DigestLengthError, InvalidInput, TruncationOffsetError
from .models import TOTPCode

logger = logging.getLogger(__name__)

_MAX_COUNTER = 2**64 - 1
_BASE32_CHARS = frozenset(BASE32_ALPHABET)


def derive_counter(unix_time: int | float, interval: int) -> int:
    """Number of whole intervals elapsed since the Unix epoch."""
    if interval <= 0:
        raise InvalidInput(f"Interval must be positive, got {interval}", field="interval")
    seconds = int(unix_time)
    if seconds < 0:
        raise InvalidInput(f"Time before the Unix epoch: {unix_time}", field="timestamp")
    counter = seconds // interval
    if counter > _MAX_COUNTER:
        raise InvalidInput(f"Counter {counter} does not fit in 64 bits", field="timestamp")
    return counter


def decode_secret(secret: str) -> bytes:
    """Decode a base32 secret, with or without padding, into raw key bytes."""
    foreign = sorted({ch for ch in secret if not ch.isascii()})
    if foreign:
        # Unicode case mapping would fold these onto base32 letters.
        raise DecodeError(f"Secret contains characters outside the base32 alphabet: {''.join(foreign)!r}")

    text = secret.upper()
    for separator in SECRET_GROUP_SEPARATORS:
        text = text.replace(separator, "")
    text = text.rstrip("=")

    bad = sorted(set(text) - _BASE32_CHARS)
    if bad:
        raise DecodeError(f"Secret contains characters outside the base32 alphabet: {''.join(bad)!r}")

    padded = text + "=" * ((-len(text)) % 8)
    try:
        key = base64.b32decode(padded, casefold=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Secret is not valid base32: {exc}") from exc

    if not key:
        raise DecodeError("Secret decodes to an empty key")
    return key


def counter_bytes(counter: int) -> bytes:
    return struct.pack(">Q", counter)


def compute_digest(key: bytes, counter: int, profile: AlgorithmProfile = GOOGLE_AUTHENTICATOR_PROFILE) -> bytes:
    try:
        return hmac.new(key, counter_bytes(counter), profile.hash_name).digest()
    except (ValueError, TypeError) as exc:
        raise CryptoBackendError(f"HMAC-{profile.hash_name.upper()} failed: {exc}") from exc


def dynamic_truncate(digest: bytes, profile: AlgorithmProfile = GOOGLE_AUTHENTICATOR_PROFILE) -> int:
    """RFC 4226 section 5.3 truncation of an HMAC digest to a decimal code."""
    if len(digest) != profile.digest_size:
        raise DigestLengthError(profile.digest_size, len(digest))

    offset = digest[-1] & 0x0F
    if offset + 4 > len(digest):
        raise TruncationOffsetError(offset, len(digest))

    p = struct.unpack(">I", digest[offset : offset + 4])[0]
    return (p & 0x7FFFFFFF) % (10**profile.digits)


def format_code(code: int, digits: int = GOOGLE_AUTHENTICATOR_PROFILE.digits) -> str:
    return str(code).zfill(digits)


def hotp(key: bytes, counter: int, profile: AlgorithmProfile = GOOGLE_AUTHENTICATOR_PROFILE) -> str:
    digest = compute_digest(key, counter, profile)
    return format_code(dynamic_truncate(digest, profile), profile.digits)


def totp(
    secret: str,
    unix_time: int | float,
    interval: int = 30,
    profile: AlgorithmProfile = GOOGLE_AUTHENTICATOR_PROFILE,
) -> TOTPCode:
    counter = derive_counter(unix_time, interval)
    key = decode_secret(secret)
    logger.debug(f"Generating code for counter={counter} interval={interval}s")
    return TOTPCode(
        code=hotp(key, counter, profile),
        counter=counter,
        interval=interval,
        generated_at=int(unix_time),
    )
