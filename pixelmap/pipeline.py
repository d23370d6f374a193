# pixelmap/pipeline.py
from __future__ import annotations

"""
Pipeline entry points.

  pixelate(image, pixelation_size, output_size, aspect_ratio) -> bytes
      decode -> crop + nearest down/up resize -> encode
  apply_theme(image, theme, pixelation_size, options) -> bytes
      decode -> tone -> edges -> posterise -> extract -> map -> encode
  export_image(image, theme, options) -> bytes
      pixelate with the options' geometry, then apply_theme

Stages run strictly in order; each one finishes its buffer before the next
starts. `should_cancel` is polled between stages and raises
PipelineCancelled, so a caller never sees a half-processed image.

With debug=True, timings go to log_stream (the current sys.stdout when None).
"""

import threading
import time
from typing import Callable, List, Optional, TextIO, Tuple

from .core_types import F32Image, ProcessingOptions, ThemePalette
from .edges import enhance_edges
from .errors import ParameterError, PipelineCancelled
from .geometry import pixelate_buffer
from .image_io import decode_image, encode_png
from .palette_mapper import map_to_palette
from .posterize import posterize
from .tone import adjust_tone
from .utils import (
    debug_log,
    format_seconds_compact,
    key_value_pairs_to_string,
    print_config_line,
)

CancelCheck = Optional[Callable[[], bool]]


def _check_cancel(should_cancel: CancelCheck, stage: str) -> None:
    if should_cancel is not None and should_cancel():
        raise PipelineCancelled(f"cancelled before {stage}")


class _StageTimer:
    """Collects (stage, seconds) pairs for the debug summary."""

    def __init__(self) -> None:
        self.rows: List[Tuple[str, float]] = []
        self._t = time.perf_counter()

    def lap(self, stage: str) -> None:
        now = time.perf_counter()
        self.rows.append((stage, now - self._t))
        self._t = now

    def summary(self) -> str:
        return key_value_pairs_to_string(
            [(name, format_seconds_compact(secs)) for name, secs in self.rows]
        )


def pixelate(
    image: bytes,
    pixelation_size: int,
    output_size: int,
    aspect_ratio: float = 1.0,
    *,
    should_cancel: CancelCheck = None,
    debug: bool = False,
    log_stream: Optional[TextIO] = None,
) -> bytes:
    """Centre-crop to aspect_ratio and pixelate; returns PNG bytes."""
    if pixelation_size <= 0 or output_size <= 0:
        raise ParameterError(
            f"sizes must be positive, got pixelation={pixelation_size} output={output_size}"
        )
    if not aspect_ratio > 0:
        raise ParameterError(f"aspect_ratio must be positive, got {aspect_ratio}")

    timer = _StageTimer()
    _check_cancel(should_cancel, "decode")
    src = decode_image(image)
    timer.lap("decode")

    _check_cancel(should_cancel, "geometry")
    out = pixelate_buffer(src, pixelation_size, output_size, aspect_ratio)
    del src
    timer.lap("geometry")

    _check_cancel(should_cancel, "encode")
    data = encode_png(out)
    timer.lap("encode")

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixelated", f"{out.shape[1]}x{out.shape[0]}"),
                    ("Pixelation", pixelation_size),
                    ("Aspect", float(aspect_ratio)),
                ]
            ),
            stream=log_stream,
        )
        debug_log(timer.summary(), stream=log_stream)
    return data


def theme_buffer(
    buffer: F32Image,
    theme: ThemePalette,
    options: ProcessingOptions,
    *,
    workers: int = 1,
    should_cancel: CancelCheck = None,
    timer: Optional[_StageTimer] = None,
) -> F32Image:
    """Run tone, edge, posterise, extract and map over a decoded buffer."""
    if len(theme) == 0:
        raise ParameterError(f"theme {theme.id!r} has an empty palette")
    options.validate()
    timer = timer or _StageTimer()

    _check_cancel(should_cancel, "tone")
    buf = adjust_tone(buffer, options.contrast, options.saturation)
    timer.lap("tone")

    _check_cancel(should_cancel, "edges")
    buf = enhance_edges(buf, options.edge_mode)
    timer.lap("edges")

    _check_cancel(should_cancel, "posterize")
    buf = posterize(buf, options.dither_intensity)
    timer.lap("posterize")

    # extract + map run as one stage
    _check_cancel(should_cancel, "map")
    out = map_to_palette(buf, theme, workers=workers)
    timer.lap("map")
    return out


def apply_theme(
    image: bytes,
    theme: ThemePalette,
    pixelation_size: int,
    options: Optional[ProcessingOptions] = None,
    *,
    workers: int = 1,
    should_cancel: CancelCheck = None,
    debug: bool = False,
    log_stream: Optional[TextIO] = None,
) -> bytes:
    """
    Recolour an (already pixelated) image to the theme palette; returns PNG bytes.

    pixelation_size describes the input's block size; it is validated and
    reported but the image is not resized again.
    """
    if pixelation_size <= 0:
        raise ParameterError(f"pixelation_size must be positive, got {pixelation_size}")
    if len(theme) == 0:
        raise ParameterError(f"theme {theme.id!r} has an empty palette")
    options = (options or ProcessingOptions()).validate()

    if debug:
        print_config_line(
            "theme",
            [
                ("Theme", theme.id),
                ("Colours", len(theme)),
                ("Pixelation", pixelation_size),
                ("Dither", float(options.dither_intensity)),
                ("Edge", options.edge_mode),
                ("Contrast", float(options.contrast)),
                ("Saturation", float(options.saturation)),
                ("Workers", workers),
            ],
            debug=True,
            stream=log_stream,
        )

    timer = _StageTimer()
    _check_cancel(should_cancel, "decode")
    src = decode_image(image)
    timer.lap("decode")

    out = theme_buffer(
        src,
        theme,
        options,
        workers=workers,
        should_cancel=should_cancel,
        timer=timer,
    )
    del src

    _check_cancel(should_cancel, "encode")
    data = encode_png(out)
    timer.lap("encode")

    if debug:
        debug_log(timer.summary(), stream=log_stream)
    return data


def export_image(
    image: bytes,
    theme: ThemePalette,
    options: Optional[ProcessingOptions] = None,
    *,
    workers: int = 1,
    should_cancel: CancelCheck = None,
    debug: bool = False,
    log_stream: Optional[TextIO] = None,
) -> bytes:
    """Full export: pixelate with the options' geometry, then apply the theme."""
    options = (options or ProcessingOptions()).validate()
    pixelated = pixelate(
        image,
        options.pixelation_size,
        options.output_resolution,
        options.aspect_ratio,
        should_cancel=should_cancel,
        debug=debug,
        log_stream=log_stream,
    )
    return apply_theme(
        pixelated,
        theme,
        options.pixelation_size,
        options,
        workers=workers,
        should_cancel=should_cancel,
        debug=debug,
        log_stream=log_stream,
    )


class PreviewRequests:
    """
    Last-request-wins generation counter for live previews.

    token = requests.begin()
    apply_theme(..., should_cancel=requests.canceller(token))
    if requests.is_current(token): show the result
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0

    def begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._generation

    def canceller(self, token: int) -> Callable[[], bool]:
        return lambda: not self.is_current(token)


__all__ = [
    "pixelate",
    "theme_buffer",
    "apply_theme",
    "export_image",
    "PreviewRequests",
]
