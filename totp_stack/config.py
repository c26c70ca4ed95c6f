from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AlgorithmProfile:
    hash_name: str = "sha1"
    digits: int = 6
    digest_size: int = 20  # bytes produced by hash_name


# SHA-1, 6 digits. Every supported service accepts this profile.
GOOGLE_AUTHENTICATOR_PROFILE = AlgorithmProfile()


@dataclass(frozen=True)
class TOTPConfig:
    default_service: str = "google"
    default_interval: int = 30

    # Forced by the CLI so that text and number handling is byte-exact.
    locale_name: str = "C"
    log_level: str = "WARNING"


BASE32_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
SECRET_GROUP_SEPARATORS: tuple[str, ...] = ("-",)
