"""Synchronous publish/subscribe for viewport notifications.

Goals:
 - Decouple the viewport adapter from the UI code reacting to it
 - Every subscribe returns a `Subscription` handle that can be unsubscribed,
   so re-mounted components never leak duplicate registrations
 - Error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Optional, Protocol

__all__ = [
    "ResponsiveEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class ResponsiveEvent(str, Enum):  # str subclass for easy payload/UI usage
    VIEWPORT_CHANGED = "viewport_changed"
    ORIENTATION_CHANGED = "orientation_changed"
    BREAKPOINT_CHANGED = "breakpoint_changed"


@dataclass
class Event:
    name: str  # ResponsiveEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True
    bus: Optional["EventBus"] = field(default=None, repr=False, compare=False)

    def cancel(self) -> None:
        """Remove this subscription from its bus."""
        if self.bus is not None:
            self.bus.unsubscribe(self)
        self.active = False


def _key(name: str | ResponsiveEvent) -> str:
    return name.value if isinstance(name, ResponsiveEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Subscriber lists are guarded by a re-entrant lock. Handlers run while the
    lock is NOT held (copy-first) so they may subscribe or unsubscribe from
    inside a callback.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, Exception]] = []

    def subscribe(
        self, name: str | ResponsiveEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once, bus=self)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                for i, existing in enumerate(bucket):
                    if existing is sub:
                        bucket.pop(i)
                        break
                if not bucket:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | ResponsiveEvent, payload: Any = None) -> Event:
        evt = Event(name=_key(name), payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(evt.name, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _logger.warning("handler for %s failed: %s", evt.name, exc)
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | ResponsiveEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, Exception]]:
        with self._lock:
            return list(self._errors)

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()
