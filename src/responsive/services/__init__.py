"""Adapter services: snapshot ownership, notifications and registry.

Qt-backed modules (``qt_viewport_source``) are not imported here so the rest
of the package stays importable headless.
"""

from .event_bus import Event, EventBus, ResponsiveEvent, Subscription  # noqa: F401
from .service_locator import services, ServiceLocator  # noqa: F401
from .viewport_service import ViewportService, get_viewport_service  # noqa: F401
