# pixelmap/themes.py
from __future__ import annotations

"""
Theme palette definitions and lookups.

Exports:
  THEMES: dict[str, ThemePalette]  # keyed by theme id, declaration order
  DEFAULT_THEME_ID
  get_theme_by_id(theme_id) -> ThemePalette
  all_themes() -> list[ThemePalette]
  build_theme(theme_id, name, palette, description="") -> ThemePalette
"""

from typing import Dict, List, Sequence

from .core_types import ThemePalette, hex_to_rgb, rgb_to_hex
from .errors import ParameterError


_THEME_ROWS: List[ThemePalette] = [
    ThemePalette(
        id="classic-jrpg",
        name="Classic JRPG",
        description="16-bit era vibrant colors",
        palette=(
            "#0f380f", "#1a4d1a", "#2d6b2d", "#4a9d4a",
            "#6bc96b", "#8ae68a", "#a8ffa8", "#c0ffc0",
            "#1a4d9d", "#2d6bc9", "#4a9dff", "#6bc9ff",
            "#8ae6ff", "#c0f0ff", "#8b4513", "#a0522d",
            "#cd853f", "#daa520", "#f4a460", "#ffd700",
            "#ff6347", "#ff4500", "#dc143c", "#b22222",
            "#ffffff", "#d3d3d3", "#a9a9a9", "#696969",
            "#404040", "#2f2f2f", "#1a1a1a", "#000000",
        ),
    ),
    ThemePalette(
        id="gameboy",
        name="Game Boy Classic",
        description="4-color green monochrome",
        palette=(
            "#0f380f",  # darkest
            "#306230",
            "#8bac0f",
            "#9bbc0f",  # lightest
        ),
    ),
    ThemePalette(
        id="nes-adventure",
        name="NES Adventure",
        description="8-bit limited palette",
        palette=(
            "#000000", "#fcfcfc", "#f8f8f8", "#bcbcbc",
            "#7c7c7c", "#a4e4fc", "#3cbcfc", "#0078f8",
            "#0000fc", "#00b800", "#00a800", "#00d800",
            "#58f898", "#a4a4a4", "#d8b040", "#fcfc00",
        ),
    ),
    # Contains repeated entries; ties resolve to the first occurrence.
    ThemePalette(
        id="modern-pixel",
        name="Modern Pixel",
        description="Indie game expanded palette",
        palette=(
            "#140c1c", "#442434", "#30346d", "#4e4a4e",
            "#854c30", "#346524", "#d04648", "#757161",
            "#597dce", "#d27d2c", "#8595a1", "#6daa2c",
            "#d2aa99", "#6dc2ca", "#dad45e", "#deeed6",
            "#2e1f27", "#3a4466", "#4e9f64", "#8cd612",
            "#e4943a", "#9e4539", "#cd683d", "#e6c2a2",
            "#5a3921", "#8b6d46", "#c09473", "#ddc9a3",
            "#4d9be6", "#8ad2e6", "#b4e6f0", "#f0fcfc",
            "#3e2137", "#73464c", "#a53030", "#e03c28",
            "#e07040", "#ffa040", "#ffe762", "#cfe2f2",
            "#8b9bb4", "#5a6988", "#3a4466", "#262b44",
            "#181425", "#b86f50", "#f2a65a", "#ffe478",
            "#cfe2f2", "#8b9bb4", "#5a6988", "#3a4466",
            "#4d9be6", "#22d5de", "#66ffd4", "#e0feff",
        ),
    ),
    ThemePalette(
        id="minimal-retro",
        name="Minimal Retro",
        description="8-color pastel flat design",
        palette=(
            "#e6d690",  # light tan (land)
            "#93b7be",  # light blue (water)
            "#5b6057",  # dark gray (roads)
            "#f2e5d5",  # off white (buildings)
            "#d4a59a",  # dusty pink
            "#a6c48a",  # sage green (parks)
            "#4a5859",  # charcoal
            "#ffffff",
        ),
    ),
]

THEMES: Dict[str, ThemePalette] = {t.id: t for t in _THEME_ROWS}

DEFAULT_THEME_ID = "classic-jrpg"


def get_theme_by_id(theme_id: str) -> ThemePalette:
    """Theme with the given id; unknown ids fall back to the default theme."""
    return THEMES.get(theme_id, THEMES[DEFAULT_THEME_ID])


def all_themes() -> List[ThemePalette]:
    """All built-in themes in declaration order."""
    return list(THEMES.values())


def build_theme(
    theme_id: str, name: str, palette: Sequence[str], description: str = ""
) -> ThemePalette:
    """
    Build a user-defined theme.

    Raises ParameterError on an empty palette or a malformed hex entry.
    Hex strings are normalised to lowercase '#rrggbb'.
    """
    if len(palette) == 0:
        raise ParameterError(f"theme {theme_id!r} has an empty palette")
    normalised = [rgb_to_hex(hex_to_rgb(hx)) for hx in palette]
    return ThemePalette(
        id=theme_id, name=name, palette=tuple(normalised), description=description
    )


__all__ = [
    "THEMES",
    "DEFAULT_THEME_ID",
    "get_theme_by_id",
    "all_themes",
    "build_theme",
]
