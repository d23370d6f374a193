# pixelmap/geometry.py
from __future__ import annotations

"""
Geometry stage: centre crop to an aspect ratio, then a nearest-neighbour
down/up resize that produces the blocky pixel-art look.

All dimension arithmetic floors to integers.
"""

import math

import numpy as np

from .core_types import CropRect, F32Image
from .errors import ParameterError
from .image_io import allocate_buffer


def compute_crop_rect(width: int, height: int, aspect_ratio: float) -> CropRect:
    """
    Centred crop of a width x height source to aspect_ratio (width / height).

    Wider sources lose columns (origin_y = 0); taller or equal sources lose
    rows (origin_x = 0).
    """
    if width <= 0 or height <= 0:
        raise ParameterError(f"source dimensions must be positive, got {width}x{height}")
    if not aspect_ratio > 0:
        raise ParameterError(f"aspect_ratio must be positive, got {aspect_ratio}")

    if width / height > aspect_ratio:
        crop_w = int(math.floor(height * aspect_ratio))
        crop_h = height
        origin_x = (width - crop_w) // 2
        origin_y = 0
    else:
        crop_w = width
        crop_h = int(math.floor(width / aspect_ratio))
        origin_x = 0
        origin_y = (height - crop_h) // 2

    if crop_w <= 0 or crop_h <= 0:
        raise ParameterError(
            f"crop of {width}x{height} to ratio {aspect_ratio} is empty ({crop_w}x{crop_h})"
        )
    return CropRect(origin_x=origin_x, origin_y=origin_y, width=crop_w, height=crop_h)


def crop_buffer(buffer: F32Image, rect: CropRect) -> F32Image:
    """Copy the rect region into a fresh buffer."""
    out = allocate_buffer(rect.height, rect.width, buffer.shape[2])
    out[...] = buffer[
        rect.origin_y : rect.origin_y + rect.height,
        rect.origin_x : rect.origin_x + rect.width,
    ]
    return out


def _nearest_source_indices(src_len: int, dst_len: int) -> np.ndarray:
    """Source index sampled by each destination pixel centre: floor((d + 0.5) * src / dst)."""
    d = np.arange(dst_len, dtype=np.int64)
    idx = ((2 * d + 1) * src_len) // (2 * dst_len)
    return np.minimum(idx, src_len - 1)


def resize_nearest(buffer: F32Image, new_width: int, new_height: int) -> F32Image:
    """Nearest-neighbour resize into a fresh buffer."""
    if new_width <= 0 or new_height <= 0:
        raise ParameterError(f"resize target must be positive, got {new_width}x{new_height}")
    src_h, src_w = buffer.shape[0], buffer.shape[1]
    ys = _nearest_source_indices(src_h, new_height)
    xs = _nearest_source_indices(src_w, new_width)
    out = allocate_buffer(new_height, new_width, buffer.shape[2])
    out[...] = buffer[ys[:, None], xs[None, :]]
    return out


def resize_to_width(buffer: F32Image, width: int) -> F32Image:
    """Resize to a target width; height follows the current aspect, floored."""
    if width <= 0:
        raise ParameterError(f"resize width must be positive, got {width}")
    src_h, src_w = buffer.shape[0], buffer.shape[1]
    height = (width * src_h) // src_w
    if height <= 0:
        raise ParameterError(
            f"resizing {src_w}x{src_h} to width {width} leaves no rows"
        )
    return resize_nearest(buffer, width, height)


def pixelate_buffer(
    buffer: F32Image,
    pixelation_size: int,
    output_resolution: int,
    aspect_ratio: float,
) -> F32Image:
    """
    Crop to aspect_ratio, shrink to pixelation_size wide, then grow to
    output_resolution wide. pixelation_size > output_resolution is allowed.
    """
    if pixelation_size <= 0:
        raise ParameterError(f"pixelation_size must be positive, got {pixelation_size}")
    if output_resolution <= 0:
        raise ParameterError(
            f"output_resolution must be positive, got {output_resolution}"
        )
    rect = compute_crop_rect(buffer.shape[1], buffer.shape[0], aspect_ratio)
    cropped = crop_buffer(buffer, rect)
    small = resize_to_width(cropped, pixelation_size)
    return resize_to_width(small, output_resolution)


__all__ = [
    "compute_crop_rect",
    "crop_buffer",
    "resize_nearest",
    "resize_to_width",
    "pixelate_buffer",
]
