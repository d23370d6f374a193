# pixelmap/tone.py
from __future__ import annotations

"""Contrast and saturation adjustment."""

import numpy as np

from .constants import LUMA_WEIGHTS
from .core_types import F32Image
from .image_io import allocate_buffer


def is_identity_tone(contrast: float, saturation: float) -> bool:
    return contrast == 1.0 and saturation == 1.0


def adjust_tone(buffer: F32Image, contrast: float, saturation: float) -> F32Image:
    """
    Per pixel:
      adjusted = (rgb - 0.5) * contrast + 0.5
      gray     = dot(adjusted, LUMA_WEIGHTS)
      rgb'     = clamp(gray + (adjusted - gray) * saturation, 0, 1)
    Alpha is copied. Returns the input untouched when both factors are 1.0.
    """
    if is_identity_tone(contrast, saturation):
        return buffer

    rgb = buffer[..., :3]
    adjusted = (rgb - np.float32(0.5)) * np.float32(contrast) + np.float32(0.5)
    gray = (adjusted @ LUMA_WEIGHTS)[..., None]
    mixed = gray + (adjusted - gray) * np.float32(saturation)

    out = allocate_buffer(buffer.shape[0], buffer.shape[1], 4)
    out[..., :3] = np.clip(mixed, 0.0, 1.0)
    out[..., 3] = buffer[..., 3]
    return out


__all__ = ["is_identity_tone", "adjust_tone"]
