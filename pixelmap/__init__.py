# pixelmap/__init__.py
"""
pixelmap package.

Purpose:
  Turn map screenshots into limited-palette pixel art. See pixelmap_cli.py for CLI.

Public API:
  pixelate       : crop to an aspect ratio and pixelate (bytes -> PNG bytes).
  apply_theme    : tone, edges, dithered posterisation and palette mapping.
  export_image   : pixelate + apply_theme in one call.
  themes         : built-in theme palettes (get_theme_by_id, all_themes).
  core_types     : shared types (ThemePalette, ProcessingOptions, ColorMapping).
  errors         : DecodeError, ParameterError, AllocationError, EncodeError.
  thumbnails     : preview thumbnails.
  utils          : shared helpers (formatting, logging).

Quick start:
  from pixelmap import export_image, get_theme_by_id, ProcessingOptions
  png = export_image(capture_bytes, get_theme_by_id("gameboy"), ProcessingOptions())
"""

__version__ = "0.3.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import themes
from . import utils
from . import thumbnails

from .core_types import ColorMapping, CropRect, ProcessingOptions, ThemePalette
from .errors import (
    AllocationError,
    DecodeError,
    EncodeError,
    ParameterError,
    PipelineCancelled,
    PixelArtError,
)
from .palette_mapper import map_to_palette
from .pipeline import PreviewRequests, apply_theme, export_image, pixelate
from .themes import THEMES, all_themes, get_theme_by_id

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "themes",
    "utils",
    "thumbnails",
    "ColorMapping",
    "CropRect",
    "ProcessingOptions",
    "ThemePalette",
    "PixelArtError",
    "DecodeError",
    "ParameterError",
    "AllocationError",
    "EncodeError",
    "PipelineCancelled",
    "map_to_palette",
    "pixelate",
    "apply_theme",
    "export_image",
    "PreviewRequests",
    "THEMES",
    "all_themes",
    "get_theme_by_id",
]
