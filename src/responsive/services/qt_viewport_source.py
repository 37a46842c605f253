"""Qt viewport source: feeds `ViewportService` from the primary screen.

Responsibilities:
 - Query the primary screen's available geometry (logical dp), device pixel
   ratio and the platform product type.
 - Install an application event filter for screen changes and listen to
   `primaryScreenChanged` / geometry signals.
 - Debounce bursts (window drags between monitors, rotation animations) and
   push one consistent snapshot into the service.

Metrics gathering is injectable so tests can drive `_sync` deterministically
with fake values; a QApplication instance is still required for the QTimer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from PyQt6.QtCore import QEvent, QObject, QSysInfo, QTimer
from PyQt6.QtGui import QGuiApplication

from .service_locator import services
from .viewport_service import ViewportService, get_viewport_service

DEBOUNCE_MS = 120

__all__ = ["ScreenMetrics", "QtViewportSource", "install_qt_viewport_source"]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScreenMetrics:
    width: float
    height: float
    pixel_ratio: float
    platform: str


def _current_metrics() -> Optional[ScreenMetrics]:
    app = QGuiApplication.instance()
    if not app:  # pragma: no cover - should not happen under normal runtime
        return None
    screen = app.primaryScreen()
    if not screen:  # pragma: no cover
        return None
    geo = screen.availableGeometry()
    return ScreenMetrics(
        width=float(geo.width()),
        height=float(geo.height()),
        pixel_ratio=float(screen.devicePixelRatio() or 1.0),
        platform=QSysInfo.productType(),
    )


class QtViewportSource(QObject):  # type: ignore[misc]
    def __init__(
        self,
        service: ViewportService,
        get_metrics: Callable[[], Optional[ScreenMetrics]] = _current_metrics,
    ) -> None:
        super().__init__()
        self._service = service
        self._get_metrics = get_metrics
        self._detached = False
        self._screens: list = []
        self._debounce = QTimer(self)
        self._debounce.setInterval(DEBOUNCE_MS)
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self._sync)  # type: ignore
        app = QGuiApplication.instance()
        if app:
            app.installEventFilter(self)
            app.primaryScreenChanged.connect(self._on_primary_screen_changed)  # type: ignore
            screen = app.primaryScreen()
            if screen is not None:
                self._watch_screen(screen)
        self._sync()

    # Qt hooks -----------------------------------------------------------------
    def eventFilter(self, watched: QObject, event: QEvent):  # noqa: D401
        if event.type() == QEvent.Type.ScreenChangeInternal:
            self._schedule()
        return super().eventFilter(watched, event)

    def _watch_screen(self, screen) -> None:
        self._screens.append(screen)
        screen.availableGeometryChanged.connect(self._schedule)  # type: ignore
        screen.orientationChanged.connect(self._schedule)  # type: ignore

    def _on_primary_screen_changed(self, screen):  # noqa: D401
        if screen is not None:
            self._watch_screen(screen)
        self._schedule()

    def _schedule(self, *_args) -> None:
        if not self._detached:
            self._debounce.start()

    # Public API ---------------------------------------------------------------
    @property
    def service(self) -> ViewportService:
        return self._service

    def detach(self) -> None:
        """Stop listening; the service keeps its last snapshot."""
        if self._detached:
            return
        self._detached = True
        self._debounce.stop()
        self._debounce.timeout.disconnect(self._sync)  # type: ignore
        app = QGuiApplication.instance()
        if app:
            app.removeEventFilter(self)
            app.primaryScreenChanged.disconnect(self._on_primary_screen_changed)  # type: ignore
        for screen in self._screens:
            screen.availableGeometryChanged.disconnect(self._schedule)  # type: ignore
            screen.orientationChanged.disconnect(self._schedule)  # type: ignore
        self._screens.clear()

    # Internal -----------------------------------------------------------------
    def _sync(self) -> bool:
        if self._detached:
            return False
        metrics = self._get_metrics()
        if metrics is None or metrics.width <= 0 or metrics.height <= 0:
            _logger.debug("skipping viewport sync; no usable screen metrics (%s)", metrics)
            return False
        return self._service.update(
            metrics.width,
            metrics.height,
            pixel_ratio=metrics.pixel_ratio,
            platform=metrics.platform,
        )


def install_qt_viewport_source() -> QtViewportSource:
    src = QtViewportSource(get_viewport_service())
    services.register("qt_viewport_source", src, allow_override=True)
    return src
