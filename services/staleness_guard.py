"""
services/staleness_guard.py – Tracks the most recently issued search job.

A job is superseded as soon as a later job *starts*, regardless of which one
finishes first. The guard is a single-writer cell owned by the orchestrator;
the clock is injectable so tests can drive it with fixed values.
"""

import time
from typing import Callable

Clock = Callable[[], int]


class StalenessGuard:
    """Hands out job tokens and reports whether a token is still the latest."""

    def __init__(self, clock: Clock = time.monotonic_ns) -> None:
        self._clock = clock
        self._latest = 0

    @property
    def latest_issued_at(self) -> int:
        return self._latest

    def begin_job(self) -> int:
        """Stamp a new job as the latest and return its token."""
        issued = self._clock()
        # Two jobs must never share a token.
        if issued <= self._latest:
            issued = self._latest + 1
        self._latest = issued
        return issued

    def is_superseded(self, token: int) -> bool:
        return token < self._latest
