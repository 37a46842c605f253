"""Application wiring for responsive services."""

from .bootstrap import ResponsiveContext, create_context  # noqa: F401
