"""
Unit tests for the two-level nearest-colour mapping.
"""

import numpy as np
import pytest

from pixelmap.core_types import ColorMapping
from pixelmap.errors import ParameterError
from pixelmap.image_io import float_to_u8
from pixelmap.palette_mapper import (
    apply_color_mapping,
    build_color_mapping,
    map_to_palette,
    nearest_color_index,
    nearest_indices,
)
from pixelmap.posterize import posterize
from pixelmap.themes import THEMES, get_theme_by_id

from ..helpers import buffer_from_rgb, theme_rgb_set


class TestNearest:
    def test_equidistant_picks_lowest_index(self):
        table = np.array([[0, 0, 0], [1, 1, 1]], dtype=np.float32)
        assert nearest_color_index(np.array([0.5, 0.5, 0.5], dtype=np.float32), table) == 0

    def test_duplicate_rows_pick_first(self):
        table = np.array([[1, 0, 0], [0, 1, 0], [1, 0, 0]], dtype=np.float32)
        idx = nearest_indices(np.array([[0.9, 0.1, 0.0], [1, 0, 0]]), table)
        assert idx.tolist() == [0, 0]

    def test_vectorised_matches_single(self, noisy_rgb):
        table = get_theme_by_id("nes-adventure").colors
        pts = noisy_rgb.reshape(-1, 3)[:50] / 255.0
        vec = nearest_indices(pts, table)
        assert vec.tolist() == [nearest_color_index(p, table) for p in pts]


class TestBuildMapping:
    def test_pairs_follow_extraction_order(self):
        theme = get_theme_by_id("gameboy")
        extracted = np.array([[1, 1, 1], [0, 0, 0]], dtype=np.float32)
        mapping = build_color_mapping(extracted, theme)
        assert len(mapping) == 2
        # white -> lightest, black -> darkest
        assert mapping.target_indices == (3, 0)
        np.testing.assert_array_equal(mapping.targets, theme.colors[[3, 0]])
        assert mapping.pairs()[0][0] == (1.0, 1.0, 1.0)

    def test_duplicate_theme_colours_map_to_first(self):
        theme = get_theme_by_id("modern-pixel")
        # #3a4466 appears at rows 17, 42 and 51
        extracted = theme.colors[[42]]
        mapping = build_color_mapping(extracted, theme)
        assert mapping.target_indices == (17,)

    def test_accepts_plain_array(self):
        table = np.array([[0, 0, 0], [1, 1, 1]], dtype=np.float32)
        mapping = build_color_mapping(np.array([[0.9, 0.9, 0.9]]), table)
        assert mapping.target_indices == (1,)

    def test_empty_theme_rejected(self):
        with pytest.raises(ParameterError):
            build_color_mapping(np.zeros((1, 3)), np.zeros((0, 3), dtype=np.float32))


class TestApplyMapping:
    def test_empty_mapping_rejected(self):
        empty = ColorMapping(
            sources=np.zeros((0, 3), dtype=np.float32),
            targets=np.zeros((0, 3), dtype=np.float32),
        )
        with pytest.raises(ParameterError):
            apply_color_mapping(np.zeros((2, 2, 4), dtype=np.float32), empty)

    def test_unseen_colours_use_nearest_source(self):
        mapping = ColorMapping(
            sources=np.array([[0, 0, 0], [1, 1, 1]], dtype=np.float32),
            targets=np.array([[1, 0, 0], [0, 0, 1]], dtype=np.float32),
        )
        buf = np.zeros((1, 2, 4), dtype=np.float32)
        buf[0, 0, :3] = 0.2
        buf[0, 1, :3] = 0.8
        out = apply_color_mapping(buf, mapping)
        np.testing.assert_array_equal(out[0, 0, :3], [1, 0, 0])
        np.testing.assert_array_equal(out[0, 1, :3], [0, 0, 1])

    def test_alpha_is_preserved(self, noisy_rgb):
        buf = buffer_from_rgb(noisy_rgb, alpha=77)
        out = map_to_palette(buf, get_theme_by_id("gameboy"))
        np.testing.assert_array_equal(out[..., 3], buf[..., 3])

    @pytest.mark.parametrize("workers", [2, 3, 8])
    def test_worker_count_does_not_change_output(self, noisy_rgb, workers):
        buf = buffer_from_rgb(noisy_rgb)
        theme = get_theme_by_id("classic-jrpg")
        single = map_to_palette(buf, theme, workers=1)
        threaded = map_to_palette(buf, theme, workers=workers)
        assert single.tobytes() == threaded.tobytes()


@pytest.mark.parametrize("theme_id", sorted(THEMES))
def test_output_stays_inside_theme(noisy_rgb, theme_id):
    theme = THEMES[theme_id]
    out = map_to_palette(posterize(buffer_from_rgb(noisy_rgb), 0.4), theme)
    used = {tuple(px) for px in float_to_u8(out)[..., :3].reshape(-1, 3).tolist()}
    assert used <= theme_rgb_set(theme)


@pytest.mark.parametrize("theme_id", ["gameboy", "modern-pixel"])
def test_mapping_is_idempotent(noisy_rgb, theme_id):
    theme = THEMES[theme_id]
    once = map_to_palette(buffer_from_rgb(noisy_rgb), theme)
    twice = map_to_palette(once, theme)
    assert once.tobytes() == twice.tobytes()
