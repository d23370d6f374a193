# pixelmap/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass, field
from typing import List, Literal, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .constants import EDGE_STRENGTHS
from .errors import ParameterError

# Basic aliases

RGBTuple = Tuple[int, int, int]
ColorRGB = Tuple[float, float, float]  # each channel in [0,1]
HexStr = str
EdgeMode = Literal["none", "soft", "strong", "selective"]

F32Image = NDArray[np.float32]  # (H, W, 4) RGBA in [0,1]
F32Colors = NDArray[np.float32]  # (N, 3) RGB rows in [0,1]
U8Image = NDArray[np.uint8]  # (H, W, 4)

# Value objects


@dataclass(frozen=True)
class CropRect:
    """Integer crop rectangle inside a source image."""

    origin_x: int
    origin_y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, upper, right, lower) as used by Pillow."""
        return (
            self.origin_x,
            self.origin_y,
            self.origin_x + self.width,
            self.origin_y + self.height,
        )


@dataclass(frozen=True)
class ThemePalette:
    """Named, ordered theme palette. Order decides ties."""

    id: str
    name: str
    palette: Tuple[HexStr, ...]
    description: str = ""

    @property
    def colors(self) -> F32Colors:
        return hex_list_to_float_rgb_array(self.palette)

    def __len__(self) -> int:
        return len(self.palette)


@dataclass(frozen=True)
class ProcessingOptions:
    """User-selected export options. Validated, never clamped."""

    pixelation_size: int = 32
    output_resolution: int = 1024
    aspect_ratio: float = 1.0
    dither_intensity: float = 0.4
    edge_mode: EdgeMode = "none"
    contrast: float = 1.0
    saturation: float = 1.0

    @property
    def edge_strength(self) -> float:
        return EDGE_STRENGTHS[self.edge_mode]

    def validate(self) -> "ProcessingOptions":
        """Raise ParameterError for any out-of-range value; return self otherwise."""
        if self.pixelation_size <= 0:
            raise ParameterError(f"pixelation_size must be positive, got {self.pixelation_size}")
        if self.output_resolution <= 0:
            raise ParameterError(
                f"output_resolution must be positive, got {self.output_resolution}"
            )
        if not self.aspect_ratio > 0:
            raise ParameterError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if not 0.0 <= self.dither_intensity <= 1.0:
            raise ParameterError(
                f"dither_intensity must be within [0, 1], got {self.dither_intensity}"
            )
        if self.edge_mode not in EDGE_STRENGTHS:
            raise ParameterError(f"unknown edge_mode {self.edge_mode!r}")
        if not self.contrast > 0:
            raise ParameterError(f"contrast must be positive, got {self.contrast}")
        if not self.saturation >= 0:
            raise ParameterError(f"saturation must be non-negative, got {self.saturation}")
        return self


@dataclass(frozen=True, eq=False)
class ColorMapping:
    """
    Posterised source colour -> theme colour pairs, in extraction order.

    sources, targets: float32 [K,3]
    """

    sources: F32Colors
    targets: F32Colors
    target_indices: Tuple[int, ...] = field(default=())

    def __len__(self) -> int:
        return int(self.sources.shape[0])

    def pairs(self) -> List[Tuple[ColorRGB, ColorRGB]]:
        return [
            (_row_to_color(s), _row_to_color(t))
            for s, t in zip(self.sources, self.targets)
        ]


# Small helpers


def _row_to_color(row: np.ndarray) -> ColorRGB:
    return (float(row[0]), float(row[1]), float(row[2]))


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive, '#' optional) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        s = f"#{s}"
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ParameterError(f"hex must be '#rrggbb' or '#rgb', got {hex_str!r}")
    try:
        return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))
    except ValueError as e:
        raise ParameterError(f"invalid hex colour {hex_str!r}") from e


def hex_list_to_float_rgb_array(hex_list: Sequence[str]) -> F32Colors:
    """Convert hex strings to an (N,3) float32 array of channel/255 values."""
    out = np.empty((len(hex_list), 3), dtype=np.float32)
    for i, hx in enumerate(hex_list):
        r, g, b = hex_to_rgb(hx)
        out[i, 0] = r / 255.0
        out[i, 1] = g / 255.0
        out[i, 2] = b / 255.0
    return out


def float_rgb_to_hex(row: np.ndarray) -> HexStr:
    """[0,1] RGB row to '#rrggbb', rounding to the nearest byte."""
    r, g, b = (int(round(float(c) * 255.0)) for c in row[:3])
    return rgb_to_hex((r, g, b))


def parse_aspect_ratio(text: str) -> float:
    """Parse 'W:H' or a plain number into a positive float."""
    s = str(text).strip()
    try:
        if ":" in s:
            w_str, h_str = s.split(":", 1)
            ratio = float(w_str) / float(h_str)
        else:
            ratio = float(s)
    except (ValueError, ZeroDivisionError) as e:
        raise ParameterError(f"invalid aspect ratio {text!r}") from e
    if not ratio > 0:
        raise ParameterError(f"aspect ratio must be positive, got {text!r}")
    return ratio


__all__ = [
    # aliases / types
    "RGBTuple",
    "ColorRGB",
    "HexStr",
    "EdgeMode",
    "F32Image",
    "F32Colors",
    "U8Image",
    # value objects
    "CropRect",
    "ThemePalette",
    "ProcessingOptions",
    "ColorMapping",
    # helpers
    "rgb_to_hex",
    "hex_to_rgb",
    "hex_list_to_float_rgb_array",
    "float_rgb_to_hex",
    "parse_aspect_ratio",
]
