"""
Error types raised by the palette pipeline.

All of them derive from ValueError, so code that guards the pipeline with
`except ValueError` keeps working.
"""


class ConfigError(ValueError):
    """Invalid or missing command-line configuration."""


class DecodeError(ValueError):
    """Source file could not be read or is not a recognized image."""


class InvalidDimensions(ValueError):
    """Image (or pixel buffer) has an unusable width or height."""


class InvalidHexFormat(ValueError):
    """String is not a #RRGGBB / RRGGBB color."""
