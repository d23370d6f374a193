# pixelmap/palette_mapper.py
from __future__ import annotations

"""
Palette mapping.

Two-level nearest-colour search by Euclidean RGB distance:
  1) each extracted colour -> nearest theme colour (builds the ColorMapping)
  2) each pixel -> nearest mapping source, emitting that entry's target

Both levels keep the first minimum on ties, so the lowest index wins. The
colour table is runtime data; nothing is specialised per palette size.

Functions:
  nearest_color_index(color, table) -> int
  nearest_indices(colors, table) -> int32 [N]
  build_color_mapping(extracted, theme_colors) -> ColorMapping
  apply_color_mapping(buffer, mapping, workers=1) -> F32Image
  map_to_palette(buffer, theme, workers=1) -> F32Image
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Union

import numpy as np

from .core_types import ColorMapping, F32Colors, F32Image, ThemePalette
from .errors import ParameterError
from .image_io import allocate_buffer
from .palette_extract import extract_palette
from .utils import split_rows_into_parts

_CHUNK = 200_000


def _as_table(theme: Union[ThemePalette, np.ndarray]) -> F32Colors:
    table = theme.colors if isinstance(theme, ThemePalette) else np.asarray(theme)
    if table.ndim != 2 or table.shape[0] == 0 or table.shape[1] < 3:
        raise ParameterError("colour table must be a non-empty [N,3] array")
    return table[:, :3].astype(np.float32, copy=False)


def nearest_indices(colors: np.ndarray, table: np.ndarray) -> np.ndarray:
    """
    For each RGB row in colors [N,3], the index of the nearest table row [K,3].
    np.argmin returns the first minimum, matching a strict '<' linear scan.
    """
    pts = np.asarray(colors, dtype=np.float64).reshape(-1, 3)
    tab = np.asarray(table, dtype=np.float64)[:, :3]
    out = np.empty((pts.shape[0],), dtype=np.int32)
    for i in range(0, pts.shape[0], _CHUNK):
        sl = pts[i : i + _CHUNK]
        diff = sl[:, None, :] - tab[None, :, :]
        dist = np.sqrt(np.sum(diff * diff, axis=2))
        out[i : i + _CHUNK] = np.argmin(dist, axis=1)
    return out


def nearest_color_index(color: np.ndarray, table: np.ndarray) -> int:
    """Index of the table row nearest to a single RGB colour."""
    return int(nearest_indices(np.asarray(color)[None, :3], table)[0])


def build_color_mapping(
    extracted: F32Colors, theme: Union[ThemePalette, np.ndarray]
) -> ColorMapping:
    """Pair each extracted colour with its nearest theme colour."""
    table = _as_table(theme)
    sources = np.asarray(extracted, dtype=np.float32).reshape(-1, 3)
    idx = nearest_indices(sources, table)
    return ColorMapping(
        sources=sources.copy(),
        targets=table[idx].copy(),
        target_indices=tuple(int(i) for i in idx.tolist()),
    )


def _map_rows(rgb_rows: np.ndarray, mapping: ColorMapping) -> np.ndarray:
    idx = nearest_indices(rgb_rows.reshape(-1, 3), mapping.sources)
    return mapping.targets[idx].reshape(rgb_rows.shape)


def apply_color_mapping(
    buffer: F32Image, mapping: ColorMapping, workers: int = 1
) -> F32Image:
    """
    Recolour every pixel through the nearest mapping entry. Alpha is copied.
    Row spans run on a thread pool when workers > 1; output is identical.
    """
    if len(mapping) == 0:
        raise ParameterError("colour mapping is empty")

    h, w = buffer.shape[0], buffer.shape[1]
    out = allocate_buffer(h, w, 4)
    rgb = buffer[..., :3]

    spans = split_rows_into_parts(h, workers)
    if workers <= 1 or len(spans) <= 1:
        out[..., :3] = _map_rows(rgb, mapping)
    else:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futs = [(s, e, ex.submit(_map_rows, rgb[s:e], mapping)) for s, e in spans]
            for s, e, fu in futs:
                out[s:e, :, :3] = fu.result()

    out[..., 3] = buffer[..., 3]
    return out


def map_to_palette(
    buffer: F32Image, theme: Union[ThemePalette, np.ndarray], workers: int = 1
) -> F32Image:
    """Extract the buffer's palette, map it to the theme, recolour the pixels."""
    mapping = build_color_mapping(extract_palette(buffer), theme)
    return apply_color_mapping(buffer, mapping, workers=workers)


__all__ = [
    "nearest_indices",
    "nearest_color_index",
    "build_color_mapping",
    "apply_color_mapping",
    "map_to_palette",
]
