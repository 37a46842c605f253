"""Viewport service: owner of the current viewport snapshot.

The conversion engine is pure; something still has to remember what the
screen looks like right now and tell interested views when that changes.
This service is that something.

Responsibilities:
 - Hold the single current `Viewport` snapshot (width, height, pixel ratio,
   platform) and replace it atomically on `update`.
 - Recompute a fresh `ResponsiveState` for every new snapshot.
 - Publish `viewport_changed`, `orientation_changed` and `breakpoint_changed`
   events on the EventBus.
 - Offer a paired `listen_orientation_change` / `remove_orientation_listener`
   API. Registering the same callback twice returns the existing
   subscription, so re-mounted views cannot stack duplicate listeners.

Feeding the service is the job of a platform source (see
`qt_viewport_source`) or of tests calling `update` directly.
"""

from __future__ import annotations

import logging
import math
from threading import RLock
from typing import Callable, Dict, Optional

from responsive.design import (
    DEFAULT_CONFIG,
    Platform,
    ResponsiveConfig,
    ResponsiveState,
    Viewport,
    compute_state,
)
from .event_bus import Event, EventBus, ResponsiveEvent, Subscription
from .service_locator import services

__all__ = ["ViewportService", "get_viewport_service", "OrientationListener"]

_logger = logging.getLogger(__name__)

OrientationListener = Callable[[str], None]


def _check_dimension(label: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Viewport {label} must be a number, got {value!r}")
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"Viewport {label} must be positive and finite, got {value!r}")


class ViewportService:
    def __init__(
        self,
        width: float,
        height: float,
        *,
        pixel_ratio: float = 1.0,
        platform: Platform | str = Platform.UNKNOWN,
        config: ResponsiveConfig = DEFAULT_CONFIG,
        bus: EventBus | None = None,
    ) -> None:
        _check_dimension("width", width)
        _check_dimension("height", height)
        self._lock = RLock()
        self._config = config
        self._bus = bus or services.try_get("event_bus") or EventBus()
        self._state = compute_state(
            Viewport(width, height, pixel_ratio, self._coerce_platform(platform)), config
        )
        self._orientation_subs: Dict[OrientationListener, Subscription] = {}

    @staticmethod
    def _coerce_platform(platform: Platform | str | None) -> Platform:
        if isinstance(platform, Platform):
            return platform
        return Platform.from_identifier(platform)

    # Snapshot ---------------------------------------------------------
    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def config(self) -> ResponsiveConfig:
        return self._config

    def viewport(self) -> Viewport:
        with self._lock:
            return self._state.viewport

    def state(self) -> ResponsiveState:
        with self._lock:
            return self._state

    def update(
        self,
        width: float,
        height: float,
        *,
        pixel_ratio: float | None = None,
        platform: Platform | str | None = None,
    ) -> bool:
        """Replace the snapshot; returns False when nothing changed.

        Omitted ``pixel_ratio`` / ``platform`` keep their current values.
        """
        _check_dimension("width", width)
        _check_dimension("height", height)
        with self._lock:
            previous = self._state
            old = previous.viewport
            new = Viewport(
                width=width,
                height=height,
                pixel_ratio=old.pixel_ratio if pixel_ratio is None else pixel_ratio,
                platform=old.platform if platform is None else self._coerce_platform(platform),
            )
            if new == old:
                return False
            current = compute_state(new, self._config)
            self._state = current
        _logger.debug(
            "viewport %sx%s@%s -> %sx%s@%s (%s, %s)",
            old.width,
            old.height,
            old.pixel_ratio,
            new.width,
            new.height,
            new.pixel_ratio,
            current.orientation,
            current.breakpoint_group,
        )
        if current.breakpoint_group is None:
            _logger.warning("no breakpoint matches width %s; check configuration", new.width)
        self._bus.publish(
            ResponsiveEvent.VIEWPORT_CHANGED, {"state": current, "previous": previous}
        )
        if current.orientation != previous.orientation:
            self._bus.publish(
                ResponsiveEvent.ORIENTATION_CHANGED,
                {"orientation": current.orientation, "previous": previous.orientation},
            )
        if current.breakpoint_group != previous.breakpoint_group:
            self._bus.publish(
                ResponsiveEvent.BREAKPOINT_CHANGED,
                {"group": current.breakpoint_group, "previous": previous.breakpoint_group},
            )
        return True

    # Orientation listeners ------------------------------------------
    def listen_orientation_change(self, callback: OrientationListener) -> Subscription:
        """Call ``callback(orientation)`` whenever the orientation label changes."""
        with self._lock:
            self._prune_cancelled()
            existing = self._orientation_subs.get(callback)
            if existing is not None:
                return existing

            def _handler(evt: Event) -> None:
                callback(evt.payload["orientation"])

            sub = self._bus.subscribe(ResponsiveEvent.ORIENTATION_CHANGED, _handler)
            self._orientation_subs[callback] = sub
            return sub

    def remove_orientation_listener(self, target: Subscription | OrientationListener) -> None:
        """Unregister by subscription handle or by the original callback."""
        with self._lock:
            if isinstance(target, Subscription):
                sub: Optional[Subscription] = target
                for cb, s in list(self._orientation_subs.items()):
                    if s is target:
                        del self._orientation_subs[cb]
            else:
                sub = self._orientation_subs.pop(target, None)
        if sub is not None:
            self._bus.unsubscribe(sub)

    def orientation_listener_count(self) -> int:
        with self._lock:
            self._prune_cancelled()
            return len(self._orientation_subs)

    def _prune_cancelled(self) -> None:
        # handles cancelled directly via Subscription.cancel()
        for cb, sub in list(self._orientation_subs.items()):
            if not sub.active:
                del self._orientation_subs[cb]


def get_viewport_service() -> ViewportService:
    """Return the registered service, creating one sized to the reference device."""
    device = DEFAULT_CONFIG.base_device
    return services.get_or_create("viewport", lambda: ViewportService(device.width, device.height))
