# pixelmap/posterize.py
from __future__ import annotations

"""
Ordered-dither posterisation to POSTERIZE_LEVELS levels per channel.

Per pixel (x, y) and RGB channel c:
  d  = (BAYER_4X4[y % 4][x % 4] - 0.5) * dither_intensity
  c' = clamp(floor((c + d) * L + 0.5) / L, 0, 1)

Alpha is copied unchanged. dither_intensity = 0 is plain posterisation.
"""

import numpy as np

from .constants import BAYER_4X4, POSTERIZE_LEVELS
from .core_types import F32Image
from .errors import ParameterError
from .image_io import allocate_buffer


def bayer_bias(height: int, width: int, dither_intensity: float) -> np.ndarray:
    """Tiled (H,W) dither bias in [-0.5, 0.5) * dither_intensity."""
    th, tw = BAYER_4X4.shape
    tiled = np.tile(BAYER_4X4, ((height + th - 1) // th, (width + tw - 1) // tw))
    tiled = tiled[:height, :width]
    return ((tiled - np.float32(0.5)) * np.float32(dither_intensity)).astype(
        np.float32, copy=False
    )


def posterize(
    buffer: F32Image, dither_intensity: float, levels: int = POSTERIZE_LEVELS
) -> F32Image:
    """Quantise RGB to `levels` steps with Bayer 4x4 ordered dithering."""
    if not 0.0 <= dither_intensity <= 1.0:
        raise ParameterError(
            f"dither_intensity must be within [0, 1], got {dither_intensity}"
        )
    if levels <= 0:
        raise ParameterError(f"levels must be positive, got {levels}")

    h, w = buffer.shape[0], buffer.shape[1]
    bias = bayer_bias(h, w, dither_intensity)[..., None]
    lv = np.float32(levels)

    quantised = np.floor((buffer[..., :3] + bias) * lv + np.float32(0.5)) / lv

    out = allocate_buffer(h, w, 4)
    out[..., :3] = np.clip(quantised, 0.0, 1.0)
    out[..., 3] = buffer[..., 3]
    return out


__all__ = ["bayer_bias", "posterize"]
