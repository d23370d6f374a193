# pixelmap/thumbnails.py
from __future__ import annotations

"""
Preview thumbnails for projects and exports.

Exports:
  generate_thumbnail(image, size=256) -> bytes
  generate_thumbnail_with_aspect(image, max_size=256, aspect_ratio=1.0) -> bytes
  generate_themed_thumbnail(image, theme, size=256, options=None) -> bytes
"""

from typing import Optional

import numpy as np
from PIL import Image

from .constants import THUMBNAIL_SIZE
from .core_types import ProcessingOptions, ThemePalette
from .errors import ParameterError
from .image_io import decode_image, encode_png, float_to_u8, u8_to_float
from .pipeline import apply_theme


def pillow_resample_from_name(name: str) -> Image.Resampling:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    return Image.Resampling.BILINEAR  # default


def _resize_encoded(image: bytes, width: int, height: int, resample: str) -> bytes:
    if width <= 0 or height <= 0:
        raise ParameterError(f"thumbnail size must be positive, got {width}x{height}")
    rgba = float_to_u8(decode_image(image))
    im = Image.fromarray(rgba).resize(
        (width, height), resample=pillow_resample_from_name(resample)
    )
    return encode_png(u8_to_float(np.array(im.convert("RGBA"), dtype=np.uint8)))


def generate_thumbnail(
    image: bytes, size: int = THUMBNAIL_SIZE, resample: str = "bilinear"
) -> bytes:
    """Square size x size thumbnail."""
    return _resize_encoded(image, size, size, resample)


def generate_thumbnail_with_aspect(
    image: bytes,
    max_size: int = THUMBNAIL_SIZE,
    aspect_ratio: float = 1.0,
    resample: str = "bilinear",
) -> bytes:
    """
    Thumbnail whose longer side is max_size.
    Landscape/square: width = max_size. Portrait: height = max_size.
    """
    if not aspect_ratio > 0:
        raise ParameterError(f"aspect_ratio must be positive, got {aspect_ratio}")
    if aspect_ratio >= 1:
        width, height = max_size, max_size / aspect_ratio
    else:
        width, height = max_size * aspect_ratio, max_size
    return _resize_encoded(image, int(round(width)), int(round(height)), resample)


def generate_themed_thumbnail(
    image: bytes,
    theme: ThemePalette,
    size: int = THUMBNAIL_SIZE,
    options: Optional[ProcessingOptions] = None,
    *,
    workers: int = 1,
) -> bytes:
    """Square thumbnail recoloured to the theme palette."""
    options = options or ProcessingOptions()
    thumb = _resize_encoded(image, size, size, "nearest")
    return apply_theme(thumb, theme, options.pixelation_size, options, workers=workers)


__all__ = [
    "pillow_resample_from_name",
    "generate_thumbnail",
    "generate_thumbnail_with_aspect",
    "generate_themed_thumbnail",
]
