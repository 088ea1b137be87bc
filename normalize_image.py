#!/usr/bin/env python3
"""
Decode an image file and turn it into an 8-bit RGBA pixel buffer ready for
sampling.
"""

import math

import numpy as np
from PIL import Image

from errors import DecodeError, InvalidDimensions
from sampler import PixelBuffer


# Image size limits (security: prevent decompression bombs)
MAX_IMAGE_PIXELS = 50_000_000  # 50 megapixels
MAX_IMAGE_DIMENSION = 10_000  # 10k pixels per side

SIXTEEN_BIT_MODES = {'I', 'I;16', 'I;16B', 'I;16L', 'I;16N'}


def check_dimensions(width: int, height: int):
    """
    Raises:
        InvalidDimensions: If either side is not positive or the image
            exceeds the size limits.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Image has invalid dimensions {width}x{height}")
    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise InvalidDimensions(
            f"Image dimensions {width}x{height} exceed maximum "
            f"{MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION}"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise InvalidDimensions(
            f"Image has {width * height:,} pixels, exceeding maximum {MAX_IMAGE_PIXELS:,}"
        )


def load_image(image_path: str) -> Image.Image:
    """
    Open and fully decode an image file.

    Raises:
        DecodeError: If the file is missing, unreadable or not an image.
        InvalidDimensions: If the image is empty or too large.
    """
    try:
        with Image.open(image_path) as img:
            check_dimensions(*img.size)
            img.load()
            return img.copy()
    except FileNotFoundError as e:
        raise DecodeError(f"Image not found: {image_path}") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Refusing to decode {image_path}: {e}") from e
    except (OSError, SyntaxError) as e:
        raise DecodeError(f"Could not open image {image_path}: {e}") from e


def _to_rgba(img: Image.Image) -> Image.Image:
    """Convert any mode to RGBA with 8 bits per channel."""
    if img.mode in SIXTEEN_BIT_MODES:
        # Pillow clips 16-bit gray instead of scaling it
        values = np.asarray(img, dtype=np.float64) / 257.0
        img = Image.fromarray(np.clip(np.round(values), 0, 255).astype(np.uint8))
    return img.convert('RGBA')


def flatten_alpha(img: Image.Image) -> Image.Image:
    """Composite an RGBA image over opaque black."""
    background = Image.new('RGBA', img.size, (0, 0, 0, 255))
    return Image.alpha_composite(background, img)


def resized_dimensions(width: int, height: int, steps: int, vertical: bool) -> tuple[int, int]:
    """Size giving the sampled axis `steps` pixels, keeping the aspect ratio."""
    if vertical:
        return max(1, int(math.floor(width * steps / height + 0.5))), steps
    return steps, max(1, int(math.floor(height * steps / width + 0.5)))


def normalize(img: Image.Image, steps: int, vertical: bool = False,
              resample: bool = True) -> PixelBuffer:
    """
    Produce the RGBA pixel buffer the sampler walks.

    Transparent areas are flattened onto black. With `resample`, an image
    whose sampled axis has fewer pixels than `steps` is resized up so that
    axis has exactly `steps` pixels, avoiding runs of repeated samples.

    Raises:
        InvalidDimensions: If the image has zero width or height, or the
            resized image would exceed the size limits.
    """
    width, height = img.size
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"Image has invalid dimensions {width}x{height}")

    rgba = flatten_alpha(_to_rgba(img))

    sampled_length = height if vertical else width
    if resample and steps > sampled_length:
        target = resized_dimensions(width, height, steps, vertical)
        check_dimensions(*target)
        rgba = rgba.resize(target, Image.Resampling.BILINEAR)

    return PixelBuffer(np.asarray(rgba))
