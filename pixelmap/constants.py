# pixelmap/constants.py
"""
Algorithm constants and the settings presets offered to users.

- Stage constants (POSTERIZE_LEVELS, BAYER_4X4, EXTRACT_CAP, EDGE_STRENGTHS, LUMA_WEIGHTS)
- Capture / export presets (ASPECT_RATIOS, PIXELATION_SIZES, ...)
- DEFAULT_EXPORT_SETTINGS
"""
from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np
from PIL import Image

# =========================
# Stage constants
# =========================

# Quantisation step count; floor(c * 4 + 0.5) / 4 yields 5 values per channel (0 to 1 in quarters).
POSTERIZE_LEVELS: int = 4

# Rows indexed by y % 4, columns by x % 4.
BAYER_4X4: np.ndarray = (
    np.array(
        [
            [0, 8, 2, 10],
            [12, 4, 14, 6],
            [3, 11, 1, 9],
            [15, 7, 13, 5],
        ],
        dtype=np.float32,
    )
    / 16.0
)

# First-encountered distinct colours kept by the extractor.
EXTRACT_CAP: int = 16

EDGE_STRENGTHS: Dict[str, float] = {
    "none": 0.0,
    "soft": 0.3,
    "strong": 0.8,
    "selective": 0.5,
}

LUMA_WEIGHTS: np.ndarray = np.array([0.299, 0.587, 0.114], dtype=np.float32)

# Largest working buffer accepted, in pixels. Mirrors Pillow's bomb guard.
MAX_BUFFER_PIXELS: int = int(Image.MAX_IMAGE_PIXELS or 89_478_485)

THUMBNAIL_SIZE: int = 256

# =========================
# Capture presets (label, value, ratio)
# =========================
ASPECT_RATIOS: Dict[str, Tuple[str, str, float]] = {
    "square": ("Square (1:1)", "1:1", 1.0),
    "wide": ("Wide (16:9)", "16:9", 16 / 9),
    "portrait": ("Portrait (9:16)", "9:16", 9 / 16),
    "gameboy": ("Game Boy (10:9)", "10:9", 10 / 9),
}

# =========================
# Export presets
# =========================
PIXELATION_SIZES: List[int] = [16, 24, 32, 48, 64, 80, 96, 128, 160, 192]

OUTPUT_RESOLUTIONS: List[int] = [512, 1024, 2048, 4096]

DITHER_INTENSITIES: List[Tuple[str, float]] = [
    ("None", 0.0),
    ("Low", 0.2),
    ("Medium", 0.4),
    ("High", 0.7),
    ("Maximum", 1.0),
]

EDGE_MODES: List[Tuple[str, str]] = [
    ("none", "No edge enhancement"),
    ("soft", "Subtle edge definition"),
    ("strong", "Bold outlines"),
    ("selective", "Adaptive edge detection"),
]

CONTRAST_LEVELS: List[float] = [0.7, 0.85, 1.0, 1.15, 1.3, 1.5]

SATURATION_LEVELS: List[float] = [0.0, 0.5, 0.7, 1.0, 1.2, 1.5]

DEFAULT_EXPORT_SETTINGS: Dict[str, object] = {
    "pixelation_size": 32,
    "output_resolution": 1024,
    "aspect_ratio": 1.0,
    "dither_intensity": 0.4,
    "edge_mode": "none",
    "contrast": 1.0,
    "saturation": 1.0,
}

__all__ = [
    "POSTERIZE_LEVELS",
    "BAYER_4X4",
    "EXTRACT_CAP",
    "EDGE_STRENGTHS",
    "LUMA_WEIGHTS",
    "MAX_BUFFER_PIXELS",
    "THUMBNAIL_SIZE",
    "ASPECT_RATIOS",
    "PIXELATION_SIZES",
    "OUTPUT_RESOLUTIONS",
    "DITHER_INTENSITIES",
    "EDGE_MODES",
    "CONTRAST_LEVELS",
    "SATURATION_LEVELS",
    "DEFAULT_EXPORT_SETTINGS",
]
