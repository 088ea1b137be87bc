"""Run configuration: defaults, the immutable record and its validation."""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from adjust import MODES, AdjustmentSettings
from errors import ConfigError
from render_palette import resolve_format


DEFAULT_NAME = "Imported Palette"
DEFAULT_STEPS = 512
DEFAULT_FORMAT = 'code'
DEFAULT_MODE = 'hsv'


@dataclass(frozen=True)
class PaletteConfig:
    """Everything one run needs; built once from the command line."""
    image_path: str
    name: str = DEFAULT_NAME
    steps: int = DEFAULT_STEPS
    vertical: bool = False
    format: str = DEFAULT_FORMAT
    saturation: float = 1.0
    gamma: float = 1.0
    stretch: float = 1.0
    auto_stretch: bool = False
    mode: str = DEFAULT_MODE
    resample: bool = True
    output: Optional[str] = None  # None writes to stdout
    verbose: bool = False

    @property
    def adjustment(self) -> AdjustmentSettings:
        return AdjustmentSettings(
            saturation=self.saturation,
            gamma=self.gamma,
            stretch=self.stretch,
            auto_stretch=self.auto_stretch,
            mode=self.mode,
        )

    def validate(self) -> "PaletteConfig":
        """
        Check every field; returns self so it can be chained.

        Raises:
            ConfigError: On the first invalid field.
        """
        if not self.image_path:
            raise ConfigError("Missing required --image <path>")
        if not Path(self.image_path).is_file():
            raise ConfigError(f"Image not found: {self.image_path}")
        if self.steps <= 1:
            raise ConfigError(f"--steps must be greater than 1, got {self.steps}")

        try:
            resolve_format(self.format)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if self.mode not in MODES:
            raise ConfigError(f"Unknown mode: {self.mode!r} (expected one of {', '.join(MODES)})")

        for label, value in (('--sat', self.saturation), ('--gamma', self.gamma),
                             ('--stretch', self.stretch)):
            if not math.isfinite(value):
                raise ConfigError(f"{label} must be a finite number, got {value}")
        if self.gamma <= 0:
            raise ConfigError(f"--gamma must be positive, got {self.gamma}")
        if self.saturation < 0:
            raise ConfigError(f"--sat must not be negative, got {self.saturation}")
        if self.stretch < 0:
            raise ConfigError(f"--stretch must not be negative, got {self.stretch}")

        if self.mode == 'hsl' and self.stretch != 1.0:
            raise ConfigError("--stretch is a midtone factor for --mode hsv; use --auto-stretch with --mode hsl")
        if self.mode == 'hsv' and self.auto_stretch:
            raise ConfigError("--auto-stretch requires --mode hsl")

        return self
