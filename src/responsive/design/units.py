"""Viewport unit conversion engine.

Pure functions turning a viewport snapshot into layout and typography units:

 - ``wp`` / ``hp``: percentage of width / height as dp, snapped to the nearest
   whole physical pixel for the snapshot's pixel ratio.
 - ``vw`` / ``vh``: percentage of width / height floored to an integer, not
   density aware (web-style viewport units; intentionally distinct from wp/hp).
 - ``rem``: font size scaled against the reference device width, with a 0.9
   discount on devices whose long edge is shorter than the reference height.
 - ``rf``: font size clamped to ``base_font_size * max_font_scale_factor``.
 - ``breakpoint_group``: name of the breakpoint tier containing the width.

Inputs may be numbers or numeric strings (``"50%"``). Strings are normalized
by `parse_numeric` using the leading-numeric-prefix rule; unparseable input
yields NaN which then propagates through every conversion. Nothing here raises
for bad arithmetic input.

No function reads global mutable state: the caller passes the snapshot (and
optionally a configuration) on every call. `ResponsiveState` bundles the
derived values for one snapshot.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .breakpoints import Breakpoint, classify_width
from .config_loader import DEFAULT_CONFIG, ResponsiveConfig
from .platform import Platform

__all__ = [
    "NumericInput",
    "Viewport",
    "ResponsiveState",
    "parse_numeric",
    "round_to_nearest_pixel",
    "wp",
    "hp",
    "vw",
    "vh",
    "rem",
    "rf",
    "orientation_of",
    "breakpoint_of",
    "breakpoint_group",
    "compute_state",
    "width_percentage_to_dp",
    "height_percentage_to_dp",
    "viewport_width_percentage",
    "viewport_height_percentage",
    "rem_unit",
    "responsive_font",
]

NumericInput = Union[int, float, str, None]

# Leading numeric prefix, same grammar as a lenient float parser: optional
# sign, Infinity or decimal digits with optional fraction and exponent.
_NUMERIC_PREFIX = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")

ORIENTATION_PORTRAIT = "portrait"
ORIENTATION_LANDSCAPE = "landscape"
ORIENTATION_SQUARE = "square"

SMALL_DEVICE_FONT_MULTIPLIER = 0.9


@dataclass(frozen=True)
class Viewport:
    """Consistent width/height snapshot in dp plus device metadata."""

    width: float
    height: float
    pixel_ratio: float = 1.0
    platform: Platform = Platform.UNKNOWN

    @property
    def is_landscape(self) -> bool:
        return self.width > self.height

    @property
    def is_portrait(self) -> bool:
        return self.width < self.height

    @property
    def long_edge(self) -> float:
        return max(self.height, self.width)


def parse_numeric(value: Any) -> float:
    """Normalize a number or numeric string; NaN when nothing parses.

    >>> parse_numeric("50%")
    50.0
    >>> math.isnan(parse_numeric("abc"))
    True
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # int beyond float range
            return math.inf if value > 0 else -math.inf
    if not isinstance(value, str):
        return math.nan
    match = _NUMERIC_PREFIX.match(value)
    if match is None:
        return math.nan
    return float(match.group(1))


def _floor(value: float) -> float:
    # NaN / inf pass through unchanged
    if not math.isfinite(value):
        return value
    return math.floor(value)


def round_to_nearest_pixel(size: float, pixel_ratio: float = 1.0) -> float:
    """Snap a dp size to the closest value covering a whole number of pixels.

    Halves round up. A missing or non-positive ratio falls back to 1.
    """
    if not math.isfinite(size):
        return size
    ratio = pixel_ratio if pixel_ratio and pixel_ratio > 0 else 1.0
    if not math.isfinite(ratio):
        ratio = 1.0
    return math.floor(size * ratio + 0.5) / ratio


def wp(viewport: Viewport, width_percent: NumericInput) -> float:
    percent = parse_numeric(width_percent)
    return round_to_nearest_pixel(viewport.width * percent / 100, viewport.pixel_ratio)


def hp(viewport: Viewport, height_percent: NumericInput) -> float:
    percent = parse_numeric(height_percent)
    return round_to_nearest_pixel(viewport.height * percent / 100, viewport.pixel_ratio)


def vw(viewport: Viewport, width_percent: NumericInput) -> float:
    percent = parse_numeric(width_percent)
    return _floor((viewport.width / 100) * percent)


def vh(viewport: Viewport, height_percent: NumericInput) -> float:
    percent = parse_numeric(height_percent)
    return _floor((viewport.height / 100) * percent)


def rem(
    viewport: Viewport, size: NumericInput = 0, config: ResponsiveConfig = DEFAULT_CONFIG
) -> float:
    """Scale a font size against the reference device width.

    The base axis is the height in landscape and the width otherwise (square
    counts as not landscape).
    """
    elem_size = parse_numeric(size)
    base = viewport.height if viewport.is_landscape else viewport.width
    multiplier = 1.0
    if viewport.long_edge < config.base_device.height:
        multiplier = SMALL_DEVICE_FONT_MULTIPLIER
    return _floor((base / config.base_device.width) * elem_size * multiplier)


def rf(size: NumericInput = 0, config: ResponsiveConfig = DEFAULT_CONFIG) -> float:
    """Clamp a font size to the configured maximum; no lower bound."""
    elem_size = parse_numeric(size)
    if math.isnan(elem_size):
        return elem_size
    return min(config.max_font_size, elem_size)


def orientation_of(viewport: Viewport) -> str:
    if viewport.is_landscape:
        return ORIENTATION_LANDSCAPE
    if viewport.is_portrait:
        return ORIENTATION_PORTRAIT
    return ORIENTATION_SQUARE


def breakpoint_of(
    viewport: Viewport, config: ResponsiveConfig = DEFAULT_CONFIG
) -> Optional[Breakpoint]:
    return classify_width(viewport.width, config.breakpoints)


def breakpoint_group(
    viewport: Viewport, config: ResponsiveConfig = DEFAULT_CONFIG
) -> Optional[str]:
    bp = breakpoint_of(viewport, config)
    return bp.name if bp is not None else None


# Long-form aliases
width_percentage_to_dp = wp
height_percentage_to_dp = hp
viewport_width_percentage = vw
viewport_height_percentage = vh
rem_unit = rem
responsive_font = rf


@dataclass(frozen=True)
class ResponsiveState:
    """Derived values for a single viewport snapshot.

    Flags are computed once at construction; conversion methods delegate to
    the module functions bound to this snapshot and configuration.
    """

    viewport: Viewport
    config: ResponsiveConfig = field(default=DEFAULT_CONFIG, repr=False)
    is_landscape: bool = field(init=False)
    is_portrait: bool = field(init=False)
    is_ios: bool = field(init=False)
    is_android: bool = field(init=False)
    orientation: str = field(init=False)
    breakpoint_group: Optional[str] = field(init=False)

    def __post_init__(self) -> None:
        # frozen dataclass: derived fields are assigned through object.__setattr__
        vp = self.viewport
        object.__setattr__(self, "is_landscape", vp.is_landscape)
        object.__setattr__(self, "is_portrait", vp.is_portrait)
        object.__setattr__(self, "is_ios", vp.platform is Platform.IOS)
        object.__setattr__(self, "is_android", vp.platform is Platform.ANDROID)
        object.__setattr__(self, "orientation", orientation_of(vp))
        object.__setattr__(self, "breakpoint_group", breakpoint_group(vp, self.config))

    def wp(self, width_percent: NumericInput) -> float:
        return wp(self.viewport, width_percent)

    def hp(self, height_percent: NumericInput) -> float:
        return hp(self.viewport, height_percent)

    def vw(self, width_percent: NumericInput) -> float:
        return vw(self.viewport, width_percent)

    def vh(self, height_percent: NumericInput) -> float:
        return vh(self.viewport, height_percent)

    def rem(self, size: NumericInput = 0) -> float:
        return rem(self.viewport, size, self.config)

    def rf(self, size: NumericInput = 0) -> float:
        return rf(size, self.config)


def compute_state(
    viewport: Viewport, config: ResponsiveConfig = DEFAULT_CONFIG
) -> ResponsiveState:
    return ResponsiveState(viewport=viewport, config=config)
