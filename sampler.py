#!/usr/bin/env python3
"""
Sample evenly spaced colors along the middle row or column of a pixel buffer.
"""

import numpy as np
from dataclasses import dataclass

from color_model import Color, to_hex
from errors import InvalidDimensions


@dataclass(frozen=True)
class PixelBuffer:
    """RGBA pixels as a (height, width, 4) uint8 array, row-major."""
    pixels: np.ndarray

    def __post_init__(self):
        pixels = np.asarray(self.pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise InvalidDimensions(
                f"Pixel buffer must have shape (height, width, 4), got {pixels.shape}"
            )
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise InvalidDimensions(
                f"Pixel buffer has invalid dimensions {pixels.shape[1]}x{pixels.shape[0]}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"Pixel buffer must hold uint8 values, got {pixels.dtype}")
        object.__setattr__(self, 'pixels', pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def color_at(self, x: int, y: int) -> Color:
        """RGB color at (x, y); alpha is ignored."""
        r, g, b = self.pixels[y, x, :3]
        return Color.from_bytes(int(r), int(g), int(b))


@dataclass(frozen=True)
class Stop:
    """One palette entry: position t in [0, 1] and its color."""
    t: float
    color: Color

    @property
    def hex(self) -> str:
        return to_hex(self.color)


def sample_positions(steps: int) -> list[float]:
    """Evenly spaced positions i / (steps - 1), exactly 0.0 and 1.0 at the ends."""
    last = steps - 1
    return [i / last for i in range(steps)]


def sample_indices(steps: int, length: int) -> np.ndarray:
    """Pixel index along an axis of `length` pixels for each of `steps` samples."""
    positions = np.arange(steps, dtype=np.float64) / (steps - 1)
    # floor(x + 0.5) rounds halves up; np.round would round them to even
    indices = np.floor(positions * max(length - 1, 0) + 0.5).astype(np.int64)
    return np.clip(indices, 0, max(length - 1, 0))


def sample(buffer: PixelBuffer, steps: int, vertical: bool = False) -> list[Stop]:
    """
    Read `steps` colors from the buffer's middle row (or middle column when
    vertical) at evenly spaced positions.

    Returns:
        Stops in sampling order, t strictly increasing from 0.0 to 1.0.
        A sampled axis one pixel long gives a flat palette.

    Raises:
        ValueError: If steps < 2.
    """
    if steps < 2:
        raise ValueError(f"Need at least 2 steps, got {steps}")

    width, height = buffer.width, buffer.height
    positions = sample_positions(steps)

    if vertical:
        x = max(0, min(width - 1, width // 2))
        rows = buffer.pixels[sample_indices(steps, height), x, :3]
    else:
        y = max(0, min(height - 1, height // 2))
        rows = buffer.pixels[y, sample_indices(steps, width), :3]

    return [
        Stop(t, Color.from_bytes(int(r), int(g), int(b)))
        for t, (r, g, b) in zip(positions, rows)
    ]
