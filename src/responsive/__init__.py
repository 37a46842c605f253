"""Responsive viewport units.

Converts viewport snapshots into proportionate layout and typography units
(wp/hp, vw/vh, rem, rf) and breakpoint tiers.
"""

from responsive.design import (  # noqa: F401
    DEFAULT_CONFIG,
    ConfigurationError,
    Platform,
    ResponsiveConfig,
    ResponsiveState,
    Viewport,
    compute_state,
    load_config,
)

__version__ = "0.1.0"
