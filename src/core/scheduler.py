"""Fixed-interval scheduler.

Runs one async job forever on a fixed grid: `start + n * interval`. Runs
never overlap; a run that overruns its slot makes the scheduler skip the
missed slots. Exceptions raised by the job are not caught here.
"""

from __future__ import annotations

import asyncio
import re
from datetime import timedelta
from typing import Any, Awaitable, Callable

from core.errors import IntervalError
from core.logging_setup import get_logger

Job = Callable[[], Awaitable[object]]
Sleep = Callable[[float], Awaitable[object]]
Clock = Callable[[], float]

_UNIT_SECONDS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_UNIT = r"(?:ns|us|µs|μs|ms|s|m|h)"
_DURATION_RE = re.compile(rf"(?:{_NUMBER}{_UNIT})+")
_PART_RE = re.compile(rf"({_NUMBER})({_UNIT})")


def parse_interval(text: str) -> timedelta:
    """Parse '90s', '5m', '1h30m', '1.5h', '250ms' or a bare number of seconds."""

    value = (text or "").strip()
    if not value:
        raise IntervalError("interval must not be empty")

    if value.isdigit():
        seconds = float(value)
    elif _DURATION_RE.fullmatch(value):
        seconds = sum(float(number) * _UNIT_SECONDS[unit] for number, unit in _PART_RE.findall(value))
    else:
        raise IntervalError(f"invalid interval: {text!r}")

    if seconds <= 0:
        raise IntervalError(f"interval must be positive: {text!r}")
    return timedelta(seconds=seconds)


class IntervalScheduler:
    def __init__(
        self,
        interval: timedelta,
        job: Job,
        *,
        run_on_start: bool = False,
        sleep: Sleep = asyncio.sleep,
        clock: Clock | None = None,
        logger: Any = None,
    ) -> None:
        if interval.total_seconds() <= 0:
            raise IntervalError("interval must be positive")
        self._period = interval.total_seconds()
        self._job = job
        self._run_on_start = run_on_start
        self._sleep = sleep
        self._clock = clock
        self._log = logger or get_logger(__name__)

    async def run(self, *, max_runs: int | None = None) -> None:
        """Run the job until `max_runs` runs are done (forever when None)."""

        clock = self._clock or asyncio.get_running_loop().time
        next_run = clock() + (0.0 if self._run_on_start else self._period)
        runs = 0

        while max_runs is None or runs < max_runs:
            delay = next_run - clock()
            if delay > 0:
                await self._sleep(delay)

            await self._job()
            runs += 1

            next_run += self._period
            now = clock()
            if next_run <= now:
                skipped = int((now - next_run) // self._period) + 1
                next_run += skipped * self._period
                self._log.warning("job overran its interval", skipped_runs=skipped)
