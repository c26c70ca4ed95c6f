from __future__ import annotations


class TOTPError(Exception):
    """Base class for failures while producing a one-time code."""

    exit_code = 1


class InvalidInput(TOTPError):
    """Missing secret, bad interval or unsupported service."""

    exit_code = 1

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DecodeError(TOTPError):
    """Secret is not base32 or decodes to zero bytes."""

    exit_code = 2


class DigestLengthError(TOTPError):
    exit_code = 3

    def __init__(self, expected: int, actual: int):
        super().__init__(f"HMAC digest is {actual} bytes, expected {expected}")
        self.expected = expected
        self.actual = actual


class TruncationOffsetError(TOTPError):
    exit_code = 4

    def __init__(self, offset: int, digest_size: int):
        super().__init__(f"Truncation offset {offset} out of range for a {digest_size}-byte digest")
        self.offset = offset
        self.digest_size = digest_size


class CryptoBackendError(TOTPError):
    """HMAC primitive is unavailable or raised."""

    exit_code = 5
