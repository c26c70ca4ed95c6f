from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from typing import Callable, TextIO

from .services import Service


@dataclass(frozen=True)
class NormalizedInput:
    secret: str
    service: Service
    interval: int


@dataclass(frozen=True)
class TOTPCode:
    code: str
    counter: int
    interval: int
    generated_at: int

    @property
    def valid_until(self) -> int:
        return (self.counter + 1) * self.interval

    @property
    def remaining_seconds(self) -> int:
        return self.valid_until - self.generated_at

    def __str__(self) -> str:
        return self.code


@dataclass
class ExecutionContext:
    """Output sink, diagnostic sink and clock for one run."""

    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)
    clock: Callable[[], float] = time.time

    def now(self) -> int:
        return int(self.clock())
