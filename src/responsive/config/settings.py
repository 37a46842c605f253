"""Global defaults for responsive unit conversion."""

from __future__ import annotations

import math
from typing import Final, Tuple

# Reference (design-time) device, in dp
BASE_DEVICE_WIDTH: Final = 375
BASE_DEVICE_HEIGHT: Final = 812

BASE_FONT_SIZE: Final = 16
MAX_FONT_SCALE_FACTOR: Final = 2

# (name, inclusive low, inclusive high) in definition order
DEFAULT_BREAKPOINTS: Final[Tuple[Tuple[str, float, float], ...]] = (
    ("group1", 0, 399),
    ("group2", 400, 599),
    ("group3", 600, 767),
    ("group4", 768, 1007),
    ("group5", 1008, 1279),
    ("group6", 1280, math.inf),
)

# The open-ended tier must reach at least this width
MAX_REALISTIC_WIDTH: Final = 8192

CONFIG_FILE_ENV: Final = "RESPONSIVE_CONFIG_FILE"
