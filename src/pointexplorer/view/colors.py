"""
Colour Schemes
==============
Maps a normalised value in [0, 1] to an RGB colour.

The ramps come from matplotlib's colormap registry; this module only adds the
scheme list, clamping, string formatting and contrast helpers used by the
scatter plot and by exporters.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

import matplotlib

from pointexplorer.config import DEFAULT_COLOR_SCHEME
from pointexplorer.utils import clamp

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class SchemeInfo:
    value: str
    label: str
    description: str


AVAILABLE_SCHEMES: Tuple[SchemeInfo, ...] = (
    SchemeInfo("viridis", "Viridis", "Perceptually uniform"),
    SchemeInfo("plasma", "Plasma", "Purple to pink gradient"),
    SchemeInfo("coolwarm", "Cool-Warm", "Blue to red contrast"),
    SchemeInfo("rainbow", "Rainbow", "Rainbow hues"),
    SchemeInfo("turbo", "Turbo", "Improved rainbow"),
    SchemeInfo("inferno", "Inferno", "Black, red, yellow"),
    SchemeInfo("magma", "Magma", "Black, purple, pink"),
    SchemeInfo("cividis", "Cividis", "Colour-blind friendly"),
)
_SCHEME_NAMES = {s.value for s in AVAILABLE_SCHEMES}


def available_schemes() -> List[SchemeInfo]:
    return list(AVAILABLE_SCHEMES)


def get_color(t: float, scheme: str = DEFAULT_COLOR_SCHEME) -> RGB:
    """
    Colour for a normalised value.

    Args:
        t: Value in [0, 1]; values outside are clamped.
        scheme: Scheme name. Unknown names fall back to viridis.

    Returns:
        (r, g, b) with components in 0..255.
    """
    if scheme not in _SCHEME_NAMES:
        logger.debug(f"Unknown colour scheme '{scheme}', using {DEFAULT_COLOR_SCHEME}.")
        scheme = DEFAULT_COLOR_SCHEME
    cmap = matplotlib.colormaps[scheme]
    r, g, b, _ = cmap(clamp(float(t), 0.0, 1.0))
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def to_rgb_string(rgb: RGB) -> str:
    return f"rgb({rgb[0]}, {rgb[1]}, {rgb[2]})"


def to_rgba_string(rgb: RGB, alpha: float = 1.0) -> str:
    return f"rgba({rgb[0]}, {rgb[1]}, {rgb[2]}, {alpha})"


def parse_rgb_string(color: str) -> RGB:
    components = [int(c) for c in re.findall(r"\d+", color)[:3]]
    if len(components) != 3:
        raise ValueError(f"Not an rgb() colour: {color!r}")
    return components[0], components[1], components[2]


def generate_palette(count: int, scheme: str = DEFAULT_COLOR_SCHEME) -> List[RGB]:
    """`count` evenly spaced colours from the scheme, end points included."""
    if count <= 0:
        return []
    if count == 1:
        return [get_color(0.0, scheme)]
    return [get_color(i / (count - 1), scheme) for i in range(count)]


def create_color_mapper(vmin: float, vmax: float, scheme: str = DEFAULT_COLOR_SCHEME) -> Callable[[float], RGB]:
    """Returns a function mapping raw values in [vmin, vmax] to colours."""
    span = vmax - vmin
    if span == 0:
        return lambda _value: get_color(0.5, scheme)
    return lambda value: get_color((value - vmin) / span, scheme)


def luminance(rgb: Sequence[int]) -> float:
    """Relative luminance (WCAG 2.x)."""
    def channel(val: int) -> float:
        c = val / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(v) for v in rgb[:3])
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast(color1: Sequence[int], color2: Sequence[int]) -> float:
    """Contrast ratio between two colours, 1.0 to 21.0."""
    lum1, lum2 = luminance(color1), luminance(color2)
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)
