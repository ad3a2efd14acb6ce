"""Pacing policies for courtesy pauses between upstream requests."""
from __future__ import annotations

import time
from typing import Protocol

from .config import setup_logger

log = setup_logger(__name__)


class Pacer(Protocol):
    def pause(self, reason: str = "") -> None: ...


class FixedPacer:
    """Sleeps a fixed duration on every pause."""

    def __init__(self, seconds: float) -> None:
        self.seconds = float(max(seconds, 0))

    def pause(self, reason: str = "") -> None:
        if self.seconds <= 0:
            return
        log.debug("pace reason=%s sleep_s=%.2f", reason or "-", self.seconds)
        time.sleep(self.seconds)


class NoopPacer:
    """Never sleeps; counts pauses so tests can assert on them."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def pause(self, reason: str = "") -> None:
        self.calls.append(reason)
