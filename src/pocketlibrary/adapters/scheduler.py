"""Asyncio-based periodic trigger for background work.

Jobs are registered under a unique name; registering a name that is already
scheduled keeps the existing registration. Each run is gated on connectivity.
A failed run is retried at the next regular interval only.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from pocketlibrary.config.sync import MIN_SYNC_INTERVAL_MINUTES
from pocketlibrary.domain.errors import RemoteMirrorFault

from .connectivity import always_connected

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from pocketlibrary.domain.ports import ConnectivityProbe, PeriodicJob

log = getLogger(__name__)

MIN_INTERVAL_SECONDS = MIN_SYNC_INTERVAL_MINUTES * 60.0


class RunOutcome(StrEnum):
    SUCCEEDED = "succeeded"
    SKIPPED_OFFLINE = "skipped_offline"
    FAILED = "failed"


@dataclass(slots=True)
class _Registration:
    name: str
    interval_seconds: float
    job: PeriodicJob
    task: asyncio.Task[None] | None = None
    runs: int = 0
    last_outcome: RunOutcome | None = None


class PeriodicTaskScheduler:
    def __init__(
        self,
        *,
        connectivity: ConnectivityProbe | None = None,
        min_interval_seconds: float = MIN_INTERVAL_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._connectivity = connectivity or always_connected
        self._min_interval_seconds = min_interval_seconds
        self._sleep = sleep
        self._registrations: dict[str, _Registration] = {}

    def enqueue_unique_periodic(
        self,
        name: str,
        *,
        interval_seconds: float,
        job: PeriodicJob,
    ) -> bool:
        """Schedule ``job`` under ``name``; return ``False`` if it already exists.

        Must be called from a running event loop.
        """

        if interval_seconds < self._min_interval_seconds:
            raise ValueError(
                f"Interval {interval_seconds}s is below the minimum of "
                f"{self._min_interval_seconds}s"
            )
        if name in self._registrations:
            log.debug("Periodic task %s already scheduled, keeping existing one", name)
            return False

        registration = _Registration(name=name, interval_seconds=interval_seconds, job=job)
        loop = asyncio.get_running_loop()
        registration.task = loop.create_task(self._run_forever(registration), name=name)
        self._registrations[name] = registration
        log.info("Scheduled periodic task %s every %ss", name, interval_seconds)
        return True

    def is_scheduled(self, name: str) -> bool:
        return name in self._registrations

    def last_outcome(self, name: str) -> RunOutcome | None:
        registration = self._registrations.get(name)
        return registration.last_outcome if registration else None

    def cancel(self, name: str) -> bool:
        registration = self._registrations.pop(name, None)
        if registration is None:
            return False
        if registration.task is not None:
            registration.task.cancel()
        log.info("Cancelled periodic task %s", name)
        return True

    async def trigger(self, name: str) -> RunOutcome:
        """Run one gated invocation of a registered job immediately."""

        registration = self._registrations.get(name)
        if registration is None:
            raise KeyError(f"No periodic task named {name!r}")
        return await self._invoke(registration)

    async def shutdown(self) -> None:
        tasks = [r.task for r in self._registrations.values() if r.task is not None]
        for name in list(self._registrations):
            self.cancel(name)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run_forever(self, registration: _Registration) -> None:
        while True:
            await self._invoke(registration)
            await self._sleep(registration.interval_seconds)

    async def _invoke(self, registration: _Registration) -> RunOutcome:
        outcome = await self._attempt(registration)
        registration.runs += 1
        registration.last_outcome = outcome
        return outcome

    async def _attempt(self, registration: _Registration) -> RunOutcome:
        try:
            online = await self._connectivity()
        except Exception:
            log.exception("Connectivity check for %s failed", registration.name)
            return RunOutcome.FAILED
        if not online:
            log.info("Skipping %s: no network connectivity", registration.name)
            return RunOutcome.SKIPPED_OFFLINE
        try:
            await registration.job()
        except RemoteMirrorFault as exc:
            log.warning(
                "Periodic task %s failed, retrying next interval: %s", registration.name, exc
            )
            return RunOutcome.FAILED
        except Exception:
            log.exception("Periodic task %s raised unexpectedly", registration.name)
            return RunOutcome.FAILED
        return RunOutcome.SUCCEEDED


if TYPE_CHECKING:
    from pocketlibrary.domain.ports import PeriodicScheduler

    _scheduler_check: PeriodicScheduler = PeriodicTaskScheduler()
