#!/usr/bin/env python3
"""
Per-color saturation / gamma / stretch adjustment.

Two modes, each flag having a single meaning within a mode:

  hsv  saturation scales HSV saturation, gamma is applied to the value
       channel (v ** gamma, gamma > 1 darkens), stretch is a contrast factor
       around the 0.5 midtone of the value channel.
  hsl  saturation scales HSL saturation, gamma is applied per channel
       (c ** (1 / gamma), gamma > 1 brightens), auto_stretch remaps the
       color's channel range to fill [0, 1].

Steps whose parameter is the no-op value are skipped, so neutral settings
return the input color unchanged.
"""

from dataclasses import dataclass, replace

from color_model import (
    Color, clamp01, hsl_to_rgb, hsv_to_rgb, rgb_to_hsl, rgb_to_hsv,
)


MODES = ('hsv', 'hsl')
STRETCH_EPSILON = 1e-6  # Minimum channel range for auto stretch


@dataclass(frozen=True)
class AdjustmentSettings:
    """Adjustment parameters; defaults are all no-ops."""
    saturation: float = 1.0  # Saturation multiplier
    gamma: float = 1.0  # Gamma exponent
    stretch: float = 1.0  # Midtone contrast factor (hsv mode)
    auto_stretch: bool = False  # Channel range stretch (hsl mode)
    mode: str = 'hsv'

    @property
    def is_identity(self) -> bool:
        return (self.saturation == 1.0 and self.gamma == 1.0
                and self.stretch == 1.0 and not self.auto_stretch)


# =============================================================================
# HSV mode
# =============================================================================

def _hsv_saturation(color: Color, multiplier: float) -> Color:
    h, s, v = rgb_to_hsv(color)
    return hsv_to_rgb(h, clamp01(s * multiplier), v)


def _hsv_gamma(color: Color, gamma: float) -> Color:
    h, s, v = rgb_to_hsv(color)
    return hsv_to_rgb(h, s, clamp01(v ** gamma))


def _hsv_stretch(color: Color, factor: float) -> Color:
    h, s, v = rgb_to_hsv(color)
    return hsv_to_rgb(h, s, clamp01(0.5 + (v - 0.5) * factor))


# =============================================================================
# HSL mode
# =============================================================================

def _hsl_saturation(color: Color, multiplier: float) -> Color:
    h, s, l = rgb_to_hsl(color)
    return hsl_to_rgb(h, clamp01(s * multiplier), l)


def _channel_gamma(color: Color, gamma: float) -> Color:
    inv_gamma = 1.0 / gamma
    return Color(
        clamp01(color.r) ** inv_gamma,
        clamp01(color.g) ** inv_gamma,
        clamp01(color.b) ** inv_gamma,
    )


def _auto_stretch(color: Color) -> Color:
    """Remap min..max of the channels to 0..1; near-gray colors pass through."""
    lo = min(color.as_tuple())
    hi = max(color.as_tuple())
    span = hi - lo
    if span < STRETCH_EPSILON:
        return color
    return Color((color.r - lo) / span, (color.g - lo) / span, (color.b - lo) / span)


# =============================================================================
# Public API
# =============================================================================

def adjust(color: Color, settings: AdjustmentSettings) -> Color:
    """
    Apply saturation, then gamma, then stretch to a single color.

    Pure function: the input color is never modified and the order in which
    stops are adjusted does not matter.

    Raises:
        ValueError: If the settings name an unknown mode, a gamma that is
            not positive, or a stretch option the mode does not have.
    """
    if settings.mode not in MODES:
        raise ValueError(f"Unknown adjustment mode: {settings.mode!r}")
    if settings.gamma <= 0:
        raise ValueError(f"Gamma must be positive, got {settings.gamma}")
    if settings.mode == 'hsv' and settings.auto_stretch:
        raise ValueError("auto_stretch is only available in hsl mode")
    if settings.mode == 'hsl' and settings.stretch != 1.0:
        raise ValueError("A stretch factor is only available in hsv mode")

    if settings.mode == 'hsv':
        if settings.saturation != 1.0:
            color = _hsv_saturation(color, settings.saturation)
        if settings.gamma != 1.0:
            color = _hsv_gamma(color, settings.gamma)
        if settings.stretch != 1.0:
            color = _hsv_stretch(color, settings.stretch)
    else:
        if settings.saturation != 1.0:
            color = _hsl_saturation(color, settings.saturation)
        if settings.gamma != 1.0:
            color = _channel_gamma(color, settings.gamma)
        if settings.auto_stretch:
            color = _auto_stretch(color)

    return color


def adjust_stops(stops: list, settings: AdjustmentSettings) -> list:
    """Adjust the color of every stop, keeping order and positions."""
    return [replace(stop, color=adjust(stop.color, settings)) for stop in stops]
