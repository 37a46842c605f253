"""Conversion engine package.

Contains the static configuration model, breakpoint table and the pure unit
conversion functions. No Qt dependency.
"""

from .breakpoints import (  # noqa: F401
    Breakpoint,
    ConfigurationError,
    build_breakpoints,
    classify_width,
    validate_breakpoints,
)
from .config_loader import (  # noqa: F401
    DEFAULT_CONFIG,
    BaseDevice,
    ResponsiveConfig,
    default_config,
    load_config,
    validate_config,
)
from .platform import Platform  # noqa: F401
from .units import (  # noqa: F401
    ResponsiveState,
    Viewport,
    breakpoint_group,
    compute_state,
    hp,
    orientation_of,
    parse_numeric,
    rem,
    rf,
    round_to_nearest_pixel,
    vh,
    vw,
    wp,
)
