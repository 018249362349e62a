"""Ports for background scheduling."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

type PeriodicJob = Callable[[], Awaitable[object]]


@runtime_checkable
class ConnectivityProbe(Protocol):
    """Answers whether the device currently has network connectivity."""

    async def __call__(self) -> bool: ...


@runtime_checkable
class PeriodicScheduler(Protocol):
    """Runs named jobs on a fixed interval, one registration per name."""

    def enqueue_unique_periodic(
        self,
        name: str,
        *,
        interval_seconds: float,
        job: PeriodicJob,
    ) -> bool: ...

    def is_scheduled(self, name: str) -> bool: ...

    def cancel(self, name: str) -> bool: ...
