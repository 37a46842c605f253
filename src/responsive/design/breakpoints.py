"""Width breakpoint table and classification.

Breakpoints partition the non-negative width axis (in dp) into named tiers
used for breakpoint-based styling. The table is an explicit ordered sequence
of `Breakpoint` records; classification scans it in definition order and
returns the first record whose closed interval contains the width.

Default scale (see `responsive.config.settings.DEFAULT_BREAKPOINTS`):
 - group1: 0 - 399
 - group2: 400 - 599
 - group3: 600 - 767
 - group4: 768 - 1007
 - group5: 1008 - 1279
 - group6: 1280+

Bounds are inclusive on both ends and contiguous on the whole-dp grid
(`next.low == prev.high + 1`). Fractional widths are floored to whole dp
before lookup so a width such as 399.5 still lands in group1.

The table is validated once when configuration loads; a malformed table is a
`ConfigurationError`, never something `classify_width` papers over with a
default tier.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from responsive.config.settings import DEFAULT_BREAKPOINTS, MAX_REALISTIC_WIDTH

__all__ = [
    "Breakpoint",
    "ConfigurationError",
    "build_breakpoints",
    "validate_breakpoints",
    "classify_width",
]


class ConfigurationError(RuntimeError):
    """Raised when responsive configuration is missing fields or malformed."""


@dataclass(frozen=True)
class Breakpoint:
    """Named closed width interval.

    Attributes
    ----------
    name: str
        Tier identifier (group1..group6 by default).
    low: float
        Inclusive lower bound in dp.
    high: float
        Inclusive upper bound in dp (``math.inf`` for the open-ended tier).
    """

    name: str
    low: float
    high: float

    def contains(self, width: float) -> bool:
        return self.low <= width <= self.high


def build_breakpoints(
    rows: Iterable[Tuple[str, float, float]] = DEFAULT_BREAKPOINTS,
) -> Tuple[Breakpoint, ...]:
    """Create and validate an ordered breakpoint table from raw rows."""
    table = tuple(Breakpoint(name=str(n), low=low, high=high) for n, low, high in rows)
    validate_breakpoints(table)
    return table


def validate_breakpoints(table: Sequence[Breakpoint]) -> None:
    """Fail fast if the table leaves gaps, overlaps or stops short.

    Raises
    ------
    ConfigurationError
        On an empty table, duplicate names, inverted intervals, a first tier
        not starting at 0, neighbours that overlap or leave a gap, or a last
        tier ending below ``MAX_REALISTIC_WIDTH``.
    """
    if not table:
        raise ConfigurationError("Breakpoint table must not be empty")
    seen: set[str] = set()
    for bp in table:
        if not bp.name:
            raise ConfigurationError("Breakpoint name must be non-empty")
        if bp.name in seen:
            raise ConfigurationError(f"Duplicate breakpoint name: {bp.name}")
        seen.add(bp.name)
        if not isinstance(bp.low, (int, float)) or not isinstance(bp.high, (int, float)):
            raise ConfigurationError(f"Breakpoint {bp.name} bounds must be numeric")
        if math.isnan(bp.low) or math.isnan(bp.high):
            raise ConfigurationError(f"Breakpoint {bp.name} bounds must not be NaN")
        if bp.low > bp.high:
            raise ConfigurationError(
                f"Breakpoint {bp.name} has low {bp.low} greater than high {bp.high}"
            )
    if table[0].low != 0:
        raise ConfigurationError(f"First breakpoint must start at 0, got {table[0].low}")
    for prev, nxt in zip(table, table[1:]):
        expected = prev.high + 1
        if nxt.low < expected:
            raise ConfigurationError(f"Breakpoints {prev.name} and {nxt.name} overlap")
        if nxt.low > expected:
            raise ConfigurationError(
                f"Gap between breakpoints {prev.name} and {nxt.name} "
                f"({prev.high} -> {nxt.low})"
            )
    if table[-1].high < MAX_REALISTIC_WIDTH:
        raise ConfigurationError(
            f"Last breakpoint {table[-1].name} must reach at least {MAX_REALISTIC_WIDTH}"
        )


def classify_width(width: float, table: Sequence[Breakpoint]) -> Optional[Breakpoint]:
    """Return the first breakpoint containing ``width``.

    ``None`` means no classification (negative or NaN width, or a table that
    bypassed validation); callers treat it as a configuration problem rather
    than substituting a tier.
    """
    if math.isnan(width):
        return None
    if math.isfinite(width):
        width = math.floor(width)
    for bp in table:
        if bp.contains(width):
            return bp
    return None
