"""Responsive configuration loading.

Responsibilities:
- Expose the four static inputs of unit conversion (reference device, base
  font size, max font scale factor, breakpoint table) as one frozen value.
- Load optional overrides from a JSON file, validate, and fail fast.

Usage:
    from responsive.design import load_config
    cfg = load_config()            # defaults, or $RESPONSIVE_CONFIG_FILE
    cfg = load_config("ui.json")   # explicit override file

Override file shape (every key optional)::

    {
      "baseDevice": {"width": 375, "height": 812},
      "baseFontSize": 16,
      "maxFontScaleFactor": 2,
      "breakpoints": {"small": [0, 599], "large": [600, null]}
    }

``null`` as an upper bound means open-ended. Breakpoints may also be given as
a list of ``[name, low, high]`` rows; object key order is preserved.
"""

from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Mapping, Tuple

from responsive.config import settings
from .breakpoints import (
    Breakpoint,
    ConfigurationError,
    build_breakpoints,
    validate_breakpoints,
)

__all__ = [
    "BaseDevice",
    "ResponsiveConfig",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "default_config",
    "load_config",
    "validate_config",
]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaseDevice:
    width: float
    height: float


@dataclass(frozen=True)
class ResponsiveConfig:
    """Immutable conversion configuration.

    Attributes
    ----------
    base_device: Reference device dimensions in dp.
    base_font_size: Unscaled reference font size.
    max_font_scale_factor: Upper bound multiplier applied by ``rf``.
    breakpoints: Ordered breakpoint table.
    """

    base_device: BaseDevice = field(
        default_factory=lambda: BaseDevice(settings.BASE_DEVICE_WIDTH, settings.BASE_DEVICE_HEIGHT)
    )
    base_font_size: float = settings.BASE_FONT_SIZE
    max_font_scale_factor: float = settings.MAX_FONT_SCALE_FACTOR
    breakpoints: Tuple[Breakpoint, ...] = field(default_factory=build_breakpoints)

    @property
    def max_font_size(self) -> float:
        return self.base_font_size * self.max_font_scale_factor


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(cfg: ResponsiveConfig) -> ResponsiveConfig:
    """Validate structural invariants; returns ``cfg`` for chaining."""
    dev = cfg.base_device
    for label, value in (("width", dev.width), ("height", dev.height)):
        if not _is_number(value) or not value > 0:
            raise ConfigurationError(f"baseDevice.{label} must be a positive number, got {value!r}")
    if not _is_number(cfg.base_font_size) or not cfg.base_font_size > 0:
        raise ConfigurationError(
            f"baseFontSize must be a positive number, got {cfg.base_font_size!r}"
        )
    if not _is_number(cfg.max_font_scale_factor) or not cfg.max_font_scale_factor >= 1:
        raise ConfigurationError(
            f"maxFontScaleFactor must be a number >= 1, got {cfg.max_font_scale_factor!r}"
        )
    validate_breakpoints(cfg.breakpoints)
    return cfg


def default_config() -> ResponsiveConfig:
    return validate_config(ResponsiveConfig())


def _parse_bound(name: str, value: Any, *, upper: bool) -> float:
    if value is None and upper:
        return math.inf
    if not _is_number(value):
        raise ConfigurationError(f"Breakpoint {name} bound must be a number, got {value!r}")
    return value


def _parse_breakpoints(raw: Any) -> Tuple[Breakpoint, ...]:
    rows: list[tuple[str, float, float]] = []
    if isinstance(raw, Mapping):
        items = [(name, bounds) for name, bounds in raw.items()]
    elif isinstance(raw, list):
        items = []
        for row in raw:
            if not isinstance(row, (list, tuple)) or len(row) != 3:
                raise ConfigurationError(f"Breakpoint row must be [name, low, high], got {row!r}")
            items.append((row[0], row[1:]))
    else:
        raise ConfigurationError("breakpoints must be an object or a list of rows")
    for name, bounds in items:
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise ConfigurationError(f"Breakpoint {name} must be a [low, high] pair")
        low = _parse_bound(name, bounds[0], upper=False)
        high = _parse_bound(name, bounds[1], upper=True)
        rows.append((str(name), low, high))
    return build_breakpoints(rows)


def _from_mapping(data: Mapping[str, Any]) -> ResponsiveConfig:
    base = ResponsiveConfig()
    device = base.base_device
    if "baseDevice" in data:
        raw_dev = data["baseDevice"]
        if not isinstance(raw_dev, Mapping):
            raise ConfigurationError("baseDevice must be an object with width and height")
        device = BaseDevice(
            width=raw_dev.get("width", device.width),
            height=raw_dev.get("height", device.height),
        )
    breakpoints = base.breakpoints
    if "breakpoints" in data:
        breakpoints = _parse_breakpoints(data["breakpoints"])
    return ResponsiveConfig(
        base_device=device,
        base_font_size=data.get("baseFontSize", base.base_font_size),
        max_font_scale_factor=data.get("maxFontScaleFactor", base.max_font_scale_factor),
        breakpoints=breakpoints,
    )


def load_config(path: str | Path | None = None) -> ResponsiveConfig:
    """Load configuration, applying overrides from a JSON file when present.

    Parameters
    ----------
    path: Override file; defaults to ``$RESPONSIVE_CONFIG_FILE`` when unset.

    Raises
    ------
    ConfigurationError
        When the file is unreadable JSON or any value breaks an invariant.
    """
    if path is None:
        path = os.environ.get(settings.CONFIG_FILE_ENV) or None
    if path is None:
        return default_config()
    file = Path(path)
    if not file.exists():
        _logger.warning("responsive config file %s not found; using defaults", file)
        return default_config()
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(f"Cannot read responsive config {file}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Responsive config {file} must contain a JSON object")
    cfg = validate_config(_from_mapping(data))
    _logger.debug(
        "loaded responsive config from %s (%d breakpoints)", file, len(cfg.breakpoints)
    )
    return cfg


# Loaded once at import; never mutated
DEFAULT_CONFIG: Final = default_config()
