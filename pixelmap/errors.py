# pixelmap/errors.py
from __future__ import annotations

"""
Error kinds raised by the stylisation pipeline.

Every error is fatal to a single pipeline call. Nothing here retries; callers
decide what to show and whether to run again.
"""


class PixelArtError(Exception):
    """Base class for pipeline failures."""


class DecodeError(PixelArtError):
    """Input bytes are not a readable image."""


class ParameterError(PixelArtError, ValueError):
    """Size, aspect ratio, option range or palette is invalid."""


class AllocationError(PixelArtError, MemoryError):
    """A working buffer of the requested dimensions cannot be created."""


class EncodeError(PixelArtError):
    """The final buffer could not be serialised."""


class PipelineCancelled(PixelArtError):
    """Cancellation was requested between two stages."""


__all__ = [
    "PixelArtError",
    "DecodeError",
    "ParameterError",
    "AllocationError",
    "EncodeError",
    "PipelineCancelled",
]
