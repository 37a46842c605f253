"""Process-wide registry for the responsive adapter objects.

The viewport snapshot must have exactly one owner per process, so lookups
that lazily create a service go through `get_or_create`, which checks and
registers under one lock.

Usage pattern:
    from responsive.services.service_locator import services
    svc = services.get_or_create("viewport", make_viewport_service)

In tests:
    with services.override_context(event_bus=EventBus()):
        ...
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Callable, Dict, Generator, TypeVar

T = TypeVar("T")

__all__ = ["ServiceLocator", "services", "ServiceAlreadyRegisteredError", "ServiceNotFoundError"]

_MISSING = object()


class ServiceAlreadyRegisteredError(RuntimeError):
    """Raised when attempting to register an existing key without allow_override."""


class ServiceNotFoundError(KeyError):
    """Raised when a requested service key is not present."""


class ServiceLocator:
    def __init__(self) -> None:
        self._lock = RLock()
        self._values: Dict[str, Any] = {}

    def register(self, key: str, value: Any, *, allow_override: bool = False) -> None:
        with self._lock:
            if key in self._values and not allow_override:
                raise ServiceAlreadyRegisteredError(f"Service '{key}' already registered")
            self._values[key] = value

    def get(self, key: str) -> Any:
        with self._lock:
            if key not in self._values:
                raise ServiceNotFoundError(key)
            return self._values[key]

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def get_or_create(self, key: str, factory: Callable[[], T]) -> T:
        """Return the service under ``key``, building it with ``factory`` once.

        The factory runs while the lock is held; it may read other services
        (the lock is re-entrant) but must not block on another thread.
        """
        with self._lock:
            value = self._values.get(key, _MISSING)
            if value is _MISSING:
                value = factory()
                self._values[key] = value
            return value

    @contextmanager
    def override_context(self, **overrides: Any) -> Generator[None, None, None]:
        """Swap services for the duration of a ``with`` block, then restore."""
        with self._lock:
            previous = {key: self._values.get(key, _MISSING) for key in overrides}
            self._values.update(overrides)
        try:
            yield
        finally:
            with self._lock:
                for key, prior in previous.items():
                    if prior is _MISSING:
                        self._values.pop(key, None)
                    else:
                        self._values[key] = prior

    def clear(self) -> None:
        with self._lock:
            self._values.clear()


services = ServiceLocator()
