"""
Pytest configuration and fixtures for the pixelmap tests.
"""

import numpy as np
import pytest

from pixelmap.core_types import ProcessingOptions
from pixelmap.themes import build_theme

from .helpers import png_bytes_from_array


@pytest.fixture
def quadrant_png():
    """2x2 image: top row white, bottom row black."""
    arr = np.array(
        [
            [[255, 255, 255], [255, 255, 255]],
            [[0, 0, 0], [0, 0, 0]],
        ],
        dtype=np.uint8,
    )
    return png_bytes_from_array(arr)


@pytest.fixture
def map_like_rgb():
    """64x48 synthetic 'map': water, land, a road grid and a park."""
    rgb = np.zeros((48, 64, 3), dtype=np.uint8)
    rgb[:, :] = [230, 214, 144]  # land
    rgb[:, :20] = [147, 183, 190]  # water
    rgb[10:14, :] = [91, 96, 87]  # road
    rgb[:, 40:43] = [91, 96, 87]  # road
    rgb[25:40, 45:60] = [166, 196, 138]  # park
    return rgb


@pytest.fixture
def map_like_png(map_like_rgb):
    return png_bytes_from_array(map_like_rgb)


@pytest.fixture
def noisy_rgb():
    """Seeded random colours, plenty of distinct values."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(40, 50, 3), dtype=np.uint8)


@pytest.fixture
def noisy_png(noisy_rgb):
    return png_bytes_from_array(noisy_rgb)


@pytest.fixture
def bw_theme():
    return build_theme("bw", "Black & White", ["#000000", "#FFFFFF"])


@pytest.fixture
def identity_options():
    """Options whose optional stages are all pass-through."""
    return ProcessingOptions(
        pixelation_size=1,
        output_resolution=2,
        aspect_ratio=1.0,
        dither_intensity=0.0,
        edge_mode="none",
        contrast=1.0,
        saturation=1.0,
    )
