"""
Unit tests for ordered-dither posterisation.
"""

import numpy as np
import pytest

from pixelmap.errors import ParameterError
from pixelmap.posterize import bayer_bias, posterize


def grey_buffer(value: float, height: int = 4, width: int = 4, alpha: float = 1.0):
    buf = np.full((height, width, 4), value, dtype=np.float32)
    buf[..., 3] = alpha
    return buf


@pytest.mark.parametrize(
    "value,expected",
    [
        (0.0, 0.0),
        (0.1, 0.0),
        (0.125, 0.25),  # halves round up
        (0.2, 0.25),
        (0.3, 0.25),
        (0.5, 0.5),
        (0.9, 1.0),
        (1.0, 1.0),
    ],
)
def test_plain_posterisation(value, expected):
    out = posterize(grey_buffer(value), 0.0)
    np.testing.assert_array_equal(out[..., :3], np.float32(expected))


def test_levels_without_dither(noisy_rgb):
    buf = np.zeros(noisy_rgb.shape[:2] + (4,), dtype=np.float32)
    buf[..., :3] = noisy_rgb / 255.0
    buf[..., 3] = 1.0
    out = posterize(buf, 0.0)
    assert set(np.unique(out[..., :3]).tolist()) <= {0.0, 0.25, 0.5, 0.75, 1.0}


def test_full_ramp_hits_five_levels():
    ramp = np.zeros((1, 256, 4), dtype=np.float32)
    ramp[..., :3] = (np.arange(256, dtype=np.float32) / 255.0)[None, :, None]
    ramp[..., 3] = 1.0
    out = posterize(ramp, 0.0)
    assert np.unique(out[..., :3]).tolist() == [0.0, 0.25, 0.5, 0.75, 1.0]


def test_full_dither_follows_bayer_matrix():
    out = posterize(grey_buffer(0.5), 1.0)
    # threshold 0/16 at (0, 0) pulls mid grey down, 15/16 at (x=0, y=3) pushes it up
    np.testing.assert_array_equal(out[0, 0, :3], 0.0)
    np.testing.assert_array_equal(out[3, 0, :3], 1.0)


def test_bias_tiles_every_four_pixels():
    bias = bayer_bias(9, 10, 0.6)
    assert bias.shape == (9, 10)
    np.testing.assert_array_equal(bias[:4, :4], bias[4:8, 4:8])
    np.testing.assert_array_equal(bias[0, :2], bias[8, 8:10])
    assert bias.min() == pytest.approx(-0.3)
    assert bias.max() < 0.3


def test_deterministic(noisy_rgb):
    buf = np.zeros(noisy_rgb.shape[:2] + (4,), dtype=np.float32)
    buf[..., :3] = noisy_rgb / 255.0
    first = posterize(buf, 0.4)
    second = posterize(buf, 0.4)
    assert first.tobytes() == second.tobytes()


def test_alpha_is_preserved():
    out = posterize(grey_buffer(0.4, alpha=0.5), 0.7)
    np.testing.assert_array_equal(out[..., 3], 0.5)


@pytest.mark.parametrize("intensity", [-0.1, 1.5])
def test_out_of_range_intensity_rejected(intensity):
    with pytest.raises(ParameterError):
        posterize(grey_buffer(0.5), intensity)


def test_non_positive_levels_rejected():
    with pytest.raises(ParameterError):
        posterize(grey_buffer(0.5), 0.0, levels=0)
