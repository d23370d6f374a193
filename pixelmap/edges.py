# pixelmap/edges.py
from __future__ import annotations

"""
Edge enhancement.

Sobel gradients over the replicated-border 3x3 neighbourhood of each pixel,
computed on RGB vectors. The edge weight

    edge = clamp((|gx| + |gy|) * strength, 0, 1)

uses the Euclidean length of each gradient vector. Output RGB is
rgb * (1 - edge) with alpha set to 1. Reads only input pixels.
"""

from typing import Tuple

import numpy as np

from .constants import EDGE_STRENGTHS
from .core_types import F32Image
from .errors import ParameterError
from .image_io import allocate_buffer


def sobel_gradients(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Horizontal and vertical Sobel responses of an (H,W,3) array.
    Returns (gx, gy), each float32 (H,W,3).
    """
    p = np.pad(rgb, ((1, 1), (1, 1), (0, 0)), mode="edge")
    h, w = rgb.shape[0], rgb.shape[1]

    tl = p[0:h, 0:w]
    tc = p[0:h, 1 : w + 1]
    tr = p[0:h, 2 : w + 2]
    ml = p[1 : h + 1, 0:w]
    mr = p[1 : h + 1, 2 : w + 2]
    bl = p[2 : h + 2, 0:w]
    bc = p[2 : h + 2, 1 : w + 1]
    br = p[2 : h + 2, 2 : w + 2]

    # paired differences cancel exactly on flat regions
    gx = (tr - tl) + 2.0 * (mr - ml) + (br - bl)
    gy = (bl - tl) + 2.0 * (bc - tc) + (br - tr)
    return gx.astype(np.float32, copy=False), gy.astype(np.float32, copy=False)


def edge_mask(rgb: np.ndarray, strength: float) -> np.ndarray:
    """Per-pixel edge weight in [0,1], float32 (H,W)."""
    gx, gy = sobel_gradients(rgb)
    magnitude = np.linalg.norm(gx, axis=-1) + np.linalg.norm(gy, axis=-1)
    return np.clip(magnitude * np.float32(strength), 0.0, 1.0).astype(
        np.float32, copy=False
    )


def enhance_edges(buffer: F32Image, edge_mode: str) -> F32Image:
    """Darken pixels along edges. edge_mode 'none' returns the input untouched."""
    if edge_mode not in EDGE_STRENGTHS:
        raise ParameterError(f"unknown edge_mode {edge_mode!r}")
    if edge_mode == "none":
        return buffer

    rgb = buffer[..., :3]
    edge = edge_mask(rgb, EDGE_STRENGTHS[edge_mode])

    out = allocate_buffer(buffer.shape[0], buffer.shape[1], 4)
    out[..., :3] = rgb * (1.0 - edge)[..., None]
    out[..., 3] = 1.0
    return out


__all__ = ["sobel_gradients", "edge_mask", "enhance_edges"]
