"""Pacing policies applied between ledger calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from aiolimiter import AsyncLimiter


class Pacer(Protocol):
    """Awaited before each paced operation; returns once the call may proceed."""

    async def wait(self) -> None: ...


@dataclass(slots=True)
class IntervalPacer:
    """Let at most one operation through per ``interval_seconds``.

    The first call returns immediately, so pacing only ever applies between
    operations and never after the last one.
    """

    interval_seconds: float
    _limiter: AsyncLimiter = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._limiter = AsyncLimiter(1, self.interval_seconds)

    async def wait(self) -> None:
        await self._limiter.acquire()


class NoPacing:
    async def wait(self) -> None:
        return None


def pacer_for_interval(interval_seconds: float) -> Pacer:
    if interval_seconds <= 0:
        return NoPacing()
    return IntervalPacer(interval_seconds)
