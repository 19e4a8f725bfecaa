"""
Color helpers shared by the area and bar renderers.
"""

import math
import re
from typing import Tuple

from matplotlib.colors import to_rgba

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")

# Each series' default area color keeps its hand-picked darker line color.
# Keys are compared exactly, so "#14B8A6" uses the formula.
LINE_COLOR_OVERRIDES = {
    1: {"#14b8a6": "#0d9488", "#0d9488": "#0d9488"},
    2: {"#ef4444": "#dc2626", "#dc2626": "#dc2626"},
}

# The area legend only special-cases the default colors themselves
LEGEND_LINE_COLOR_OVERRIDES = {
    1: {"#14b8a6": "#0d9488"},
    2: {"#ef4444": "#dc2626"},
}

OUTLINE_BRIGHTNESS_PERCENT = -20


def is_hex_color(color: str) -> bool:
    """Return True for a '#rrggbb' color string."""
    return isinstance(color, str) and bool(HEX_COLOR_PATTERN.match(color))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def adjust_color_brightness(color: str, percent: float) -> str:
    """
    Shift every RGB channel of a hex color by round(2.55 * percent).

    Channels are clamped to [0, 255].

    Args:
        color: '#rrggbb' color
        percent: Brightness change, negative to darken

    Returns:
        str: The adjusted color as lowercase '#rrggbb'

    Raises:
        ValueError: If color is not a '#rrggbb' string
    """
    if not is_hex_color(color):
        raise ValueError(f"Expected a #rrggbb color, got {color!r}")

    num = int(color[1:], 16)
    amount = _round_half_up(2.55 * percent)
    channels = ((num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF)
    adjusted = [min(255, max(0, channel + amount)) for channel in channels]
    return "#{:02x}{:02x}{:02x}".format(*adjusted)


def outline_color_for(color: str) -> str:
    """Bar outline and legend swatch border color."""
    return adjust_color_brightness(color, OUTLINE_BRIGHTNESS_PERCENT)


def line_color_for(color: str, series: int) -> str:
    """Stroke color drawn on top of series 1 or 2's area fill."""
    override = LINE_COLOR_OVERRIDES.get(series, {}).get(color)
    if override:
        return override
    return adjust_color_brightness(color, OUTLINE_BRIGHTNESS_PERCENT)


def legend_line_color_for(color: str, series: int) -> str:
    """Line swatch color for series 1 or 2 in the area chart legend."""
    override = LEGEND_LINE_COLOR_OVERRIDES.get(series, {}).get(color)
    if override:
        return override
    return adjust_color_brightness(color, OUTLINE_BRIGHTNESS_PERCENT)


def with_alpha(color: str, alpha: float) -> Tuple[float, float, float, float]:
    """Convert a hex color to a matplotlib RGBA tuple with the given opacity."""
    return to_rgba(color, alpha)
