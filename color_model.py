#!/usr/bin/env python3
"""
Normalized RGB colors, hex strings and the HSL / HSV conversions used by the
adjustment stage.

Hue is kept in the unit interval [0, 1) throughout (degrees / 360).
"""

import math
import re
from dataclasses import dataclass

from errors import InvalidHexFormat


HEX_PATTERN = re.compile(r"#?([0-9A-Fa-f]{6})")


def clamp01(value: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0."""
    if value != value:
        return 0.0
    return max(0.0, min(1.0, value))


def quantize(value: float) -> int:
    """Map a [0, 1] channel to 0-255, rounding halves up."""
    return int(math.floor(clamp01(value) * 255 + 0.5))


@dataclass(frozen=True)
class Color:
    """Display-referred RGB color, every channel in [0, 1]."""
    r: float
    g: float
    b: float

    def __post_init__(self):
        # Out-of-range input is clamped so stored values always stay in range
        object.__setattr__(self, 'r', clamp01(float(self.r)))
        object.__setattr__(self, 'g', clamp01(float(self.g)))
        object.__setattr__(self, 'b', clamp01(float(self.b)))

    @classmethod
    def from_bytes(cls, r: int, g: int, b: int) -> "Color":
        return cls(r / 255.0, g / 255.0, b / 255.0)

    def to_bytes(self) -> tuple[int, int, int]:
        return (quantize(self.r), quantize(self.g), quantize(self.b))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


# =============================================================================
# Hex
# =============================================================================

def to_hex(color: Color) -> str:
    """Convert a color to an uppercase #RRGGBB string."""
    return "#{:02X}{:02X}{:02X}".format(*color.to_bytes())


def from_hex(text: str) -> Color:
    """
    Parse #RRGGBB or RRGGBB.

    Raises:
        InvalidHexFormat: If the string is not exactly six hex digits
            (after an optional leading '#').
    """
    match = HEX_PATTERN.fullmatch(text.strip()) if isinstance(text, str) else None
    if match is None:
        raise InvalidHexFormat(f"Not a #RRGGBB color: {text!r}")

    value = int(match.group(1), 16)
    return Color.from_bytes((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


# =============================================================================
# HSL
# =============================================================================

def _hue(r: float, g: float, b: float, cmax: float, delta: float) -> float:
    """Six-piece hue formula, returned in [0, 1)."""
    if cmax == r:
        h = ((g - b) / delta) % 6
    elif cmax == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4
    return (h / 6.0) % 1.0


def rgb_to_hsl(color: Color) -> tuple[float, float, float]:
    """Convert to (hue, saturation, lightness), all in [0, 1]."""
    r, g, b = color.as_tuple()
    cmax, cmin = max(r, g, b), min(r, g, b)
    l = (cmax + cmin) / 2

    if cmax == cmin:
        return 0.0, 0.0, l

    delta = cmax - cmin
    if l > 0.5:
        s = delta / (2 - cmax - cmin)
    else:
        s = delta / (cmax + cmin)

    return _hue(r, g, b, cmax, delta), s, l


def _hue_to_channel(p: float, q: float, t: float) -> float:
    t = t % 1.0
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Color:
    """Inverse of rgb_to_hsl; the hue wraps into the unit interval."""
    if s == 0:
        return Color(l, l, l)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return Color(
        _hue_to_channel(p, q, h + 1 / 3),
        _hue_to_channel(p, q, h),
        _hue_to_channel(p, q, h - 1 / 3),
    )


# =============================================================================
# HSV
# =============================================================================

def rgb_to_hsv(color: Color) -> tuple[float, float, float]:
    """Convert to (hue, saturation, value), all in [0, 1]."""
    r, g, b = color.as_tuple()
    cmax, cmin = max(r, g, b), min(r, g, b)
    delta = cmax - cmin

    s = delta / cmax if cmax > 0 else 0.0
    h = _hue(r, g, b, cmax, delta) if delta > 0 else 0.0
    return h, s, cmax


def hsv_to_rgb(h: float, s: float, v: float) -> Color:
    """Inverse of rgb_to_hsv."""
    hh = (h % 1.0) * 6
    c = v * s
    x = c * (1 - abs(hh % 2 - 1))
    m = v - c

    sector = int(hh) % 6
    if sector == 0:
        rp, gp, bp = c, x, 0.0
    elif sector == 1:
        rp, gp, bp = x, c, 0.0
    elif sector == 2:
        rp, gp, bp = 0.0, c, x
    elif sector == 3:
        rp, gp, bp = 0.0, x, c
    elif sector == 4:
        rp, gp, bp = x, 0.0, c
    else:
        rp, gp, bp = c, 0.0, x

    return Color(rp + m, gp + m, bp + m)
