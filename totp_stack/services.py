from __future__ import annotations

from enum import Enum

from .config import GOOGLE_AUTHENTICATOR_PROFILE, AlgorithmProfile
from .errors import InvalidInput


class Service(str, Enum):
    GOOGLE = "google"
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"

    @property
    def profile(self) -> AlgorithmProfile:
        return SERVICE_PROFILES[self]


SERVICE_PROFILES: dict[Service, AlgorithmProfile] = {
    Service.GOOGLE: GOOGLE_AUTHENTICATOR_PROFILE,
    Service.GITHUB: GOOGLE_AUTHENTICATOR_PROFILE,
    Service.GITLAB: GOOGLE_AUTHENTICATOR_PROFILE,
    Service.BITBUCKET: GOOGLE_AUTHENTICATOR_PROFILE,
}


def supported_services() -> tuple[str, ...]:
    return tuple(service.value for service in Service)


def parse_service(text: str | Service) -> Service:
    if isinstance(text, Service):
        return text
    raw = (text or "").strip()
    if not raw.isascii():
        raise InvalidInput(f"Unsupported service: {text!r}", field="service")
    name = raw.lower()
    if not name:
        raise InvalidInput("Service name is empty", field="service")
    try:
        return Service(name)
    except ValueError as exc:
        raise InvalidInput(
            f"Unsupported service: {text!r} (choose from {', '.join(supported_services())})",
            field="service",
        ) from exc
