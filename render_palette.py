#!/usr/bin/env python3
"""
Render a sampled palette as a Swift registration snippet ("code") or as a
JSON palette file ("data") for the companion renderer.
"""

import json
from dataclasses import dataclass

from color_model import from_hex


COLOR_SPACE = "display-p3"
SCHEMA_VERSION = 1

FORMATS = ('code', 'data')
FORMAT_ALIASES = {'swift': 'code', 'json': 'data'}


@dataclass(frozen=True)
class Palette:
    """Named, ordered stop sequence plus the metadata written with it."""
    name: str
    stops: tuple  # Stop, t ascending
    color_space: str = COLOR_SPACE
    schema_version: int = SCHEMA_VERSION


def resolve_format(fmt: str) -> str:
    """Canonical format name, or raise ValueError for an unknown one."""
    key = fmt.strip().lower()
    key = FORMAT_ALIASES.get(key, key)
    if key not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")
    return key


def _swift_string(text: str) -> str:
    escaped = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
    return f'"{escaped}"'


def render_code(palette: Palette) -> str:
    """Swift snippet registering the palette, one (t, color) tuple per line."""
    lines = [
        "// Paste into PaletteOption.swift (inside init or registration area)",
        "self.registerCustom(",
        f"    name: {_swift_string(palette.name)},",
        "    stops: [",
    ]

    last = len(palette.stops) - 1
    for i, stop in enumerate(palette.stops):
        comma = "" if i == last else ","
        lines.append(f'            ({stop.t:.5f}, UIColor(hex: "{stop.hex}")){comma}')

    lines.append("    ]")
    lines.append(")")
    return "\n".join(lines)


def palette_to_dict(palette: Palette) -> dict:
    """
    JSON-ready palette. Channel values are decoded back from each stop's
    hex string, so they carry the same 8-bit quantization as the code output.

    Raises:
        InvalidHexFormat: If a stop's hex string does not decode.
    """
    stops = []
    for stop in palette.stops:
        rgb = from_hex(stop.hex)
        stops.append({"r": rgb.r, "g": rgb.g, "b": rgb.b, "t": stop.t})

    return {
        "colorSpace": palette.color_space,
        "name": palette.name,
        "schemaVersion": palette.schema_version,
        "stops": stops,
        "type": "palette",
    }


def render_data(palette: Palette) -> str:
    return json.dumps(palette_to_dict(palette), indent=2, sort_keys=True)


def render(palette: Palette, fmt: str) -> str:
    """Render in the given format ('code' / 'data', or 'swift' / 'json')."""
    if resolve_format(fmt) == 'data':
        return render_data(palette)
    return render_code(palette)
