# pixelmap/palette_extract.py
from __future__ import annotations

"""
Palette extraction: distinct RGB colours of a buffer in first-encountered
raster order, capped at EXTRACT_CAP. Alpha is ignored.

Order is scan order, not frequency. With more than EXTRACT_CAP colours the
ones met first win, which changes the final mapping; keep it that way.
"""

import numpy as np

from .constants import EXTRACT_CAP
from .core_types import F32Colors, F32Image


def extract_palette(buffer: F32Image, cap: int = EXTRACT_CAP) -> F32Colors:
    """
    Return up to `cap` distinct RGB rows, float32 [K,3], in raster order
    of their first occurrence. Colours compare by exact value.
    """
    flat = np.ascontiguousarray(buffer[..., :3]).reshape(-1, 3)
    if flat.shape[0] == 0 or cap <= 0:
        return np.zeros((0, 3), dtype=np.float32)

    # np.unique sorts; first_idx recovers where each colour first appears.
    _uniq, first_idx = np.unique(flat, axis=0, return_index=True)
    order = np.sort(first_idx)[:cap]
    return flat[order].astype(np.float32, copy=True)


__all__ = ["extract_palette"]
