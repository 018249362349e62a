"""Live queries over the local record store.

A ``LiveQuery`` re-runs its fetch function whenever the owning store reports a
write and pushes the fresh snapshot to every subscribed listener. Subscribing
delivers the current snapshot immediately, then every later change until the
subscription is closed.
"""

from __future__ import annotations

import threading
from logging import getLogger
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from .model import BookRecord

    type Snapshot = list[BookRecord]
    type Listener = Callable[[Snapshot], None]
    type Fetch = Callable[[], Snapshot]

log = getLogger(__name__)


class Subscription:
    """Handle returned by ``LiveQuery.subscribe``; close it to stop deliveries."""

    def __init__(self, hub: LiveQueryHub, query: LiveQuery, listener: Listener) -> None:
        self._hub = hub
        self.query = query
        self.listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._hub.discard(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        self.unsubscribe()
        return False

    def deliver(self, snapshot: Snapshot) -> None:
        if not self._active:
            return
        try:
            self.listener(snapshot)
        except Exception:
            # The write that triggered this delivery is already committed.
            log.exception("Live query listener failed for %s", self.query.description)


class LiveQuery:
    """A re-emitting read of the local store."""

    def __init__(self, hub: LiveQueryHub, fetch: Fetch, *, description: str = "") -> None:
        self._hub = hub
        self._fetch = fetch
        self.description = description or "query"

    def snapshot(self) -> Snapshot:
        return self._fetch()

    def subscribe(self, listener: Listener) -> Subscription:
        subscription = Subscription(self._hub, self, listener)
        with self._hub.lock:
            self._hub.register(subscription)
            subscription.deliver(self.snapshot())
        return subscription


class LiveQueryHub:
    """Registry of active subscriptions for one store."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._subscriptions: list[Subscription] = []

    def query(self, fetch: Fetch, *, description: str = "") -> LiveQuery:
        return LiveQuery(self, fetch, description=description)

    def register(self, subscription: Subscription) -> None:
        with self.lock:
            self._subscriptions.append(subscription)

    def discard(self, subscription: Subscription) -> None:
        with self.lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        with self.lock:
            return len(self._subscriptions)

    def notify(self) -> None:
        """Re-run every subscribed query once and push the results."""

        with self.lock:
            subscriptions = list(self._subscriptions)
            snapshots: dict[int, Snapshot | None] = {}
            for subscription in subscriptions:
                key = id(subscription.query)
                if key not in snapshots:
                    snapshots[key] = self._refresh(subscription.query)
                snapshot = snapshots[key]
                if snapshot is not None:
                    subscription.deliver(snapshot)

    def _refresh(self, query: LiveQuery) -> Snapshot | None:
        try:
            return query.snapshot()
        except Exception:
            # The write that triggered this refresh is already committed.
            log.exception("Live query refresh failed for %s", query.description)
            return None
