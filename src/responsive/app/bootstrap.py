"""Bootstrap helpers wiring configuration and services together.

Responsibilities:
 - Load (and validate) the responsive configuration once at startup
 - Register the event bus and viewport service in the service locator
 - Optionally attach the Qt viewport source when running with a GUI

PyQt6 is imported lazily so headless callers and tests never need a display.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from responsive.design import ResponsiveConfig, load_config
from responsive.services.event_bus import EventBus
from responsive.services.service_locator import ServiceLocator, services
from responsive.services.viewport_service import ViewportService

__all__ = ["ResponsiveContext", "create_context"]

_logger = logging.getLogger(__name__)


@dataclass
class ResponsiveContext:
    """References created during bootstrap.

    Attributes
    ----------
    config: Validated configuration.
    bus: Shared event bus.
    viewport: Viewport service holding the current snapshot.
    qt_source: Qt source feeding the service (None when headless).
    services: Service locator after registration.
    duration_s: Elapsed bootstrap time.
    """

    config: ResponsiveConfig
    bus: EventBus
    viewport: ViewportService
    qt_source: Optional[Any]
    services: ServiceLocator
    duration_s: float


def create_context(
    *,
    headless: bool = True,
    config_path: str | Path | None = None,
    width: float | None = None,
    height: float | None = None,
) -> ResponsiveContext:
    """Load configuration and register the responsive services.

    Raises ``ConfigurationError`` for a malformed configuration; nothing is
    registered in that case.
    """
    started = time.perf_counter()
    cfg = load_config(config_path)
    bus = EventBus()
    svc = ViewportService(
        width if width is not None else cfg.base_device.width,
        height if height is not None else cfg.base_device.height,
        config=cfg,
        bus=bus,
    )
    services.register("responsive_config", cfg, allow_override=True)
    services.register("event_bus", bus, allow_override=True)
    services.register("viewport", svc, allow_override=True)
    qt_source = None
    if not headless:
        from responsive.services.qt_viewport_source import QtViewportSource

        qt_source = QtViewportSource(svc)
        services.register("qt_viewport_source", qt_source, allow_override=True)
    duration = time.perf_counter() - started
    _logger.debug("responsive context ready in %.2fms (headless=%s)", duration * 1000, headless)
    return ResponsiveContext(
        config=cfg,
        bus=bus,
        viewport=svc,
        qt_source=qt_source,
        services=services,
        duration_s=duration,
    )
