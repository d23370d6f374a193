# pixelmap/utils.py
from __future__ import annotations

"""
Shared utilities for pixelmap.

Includes time formatting, row partitioning for threaded stages, the colour
usage report, and tidy print-based logging.
"""

import os
from typing import Any, Iterable, List, Optional, TextIO, Tuple

import numpy as np

from .core_types import F32Image, F32Colors, HexStr, float_rgb_to_hex


#  Time / size formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Workers / partitioning


def default_workers() -> int:
    """Leave a few cores free for the system; returns a sensible worker count."""
    n = os.cpu_count() or 4
    reserve = 1 if n <= 6 else 2 if n <= 12 else 3 if n <= 18 else 4
    return max(1, n - reserve)


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    parts = max(1, int(parts))
    step = max(1, (height + parts - 1) // parts)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


# Reports


def colour_usage_report(
    buffer: F32Image, theme_colors: F32Colors
) -> List[Tuple[HexStr, int, int]]:
    """
    Count the colours of a themed buffer.

    Returns a list of (hex, theme_index, count) sorted by count descending.
    theme_index is the first palette row equal to the colour, or -1.
    """
    flat = buffer[..., :3].reshape(-1, 3)
    if flat.shape[0] == 0:
        return []
    uniques, counts = np.unique(flat, axis=0, return_counts=True)
    report: List[Tuple[HexStr, int, int]] = []
    for row, count in sorted(zip(uniques, counts), key=lambda x: -int(x[1])):
        hits = np.nonzero(np.all(theme_colors == row[None, :], axis=1))[0]
        idx = int(hits[0]) if hits.size else -1
        report.append((float_rgb_to_hex(row), idx, int(count)))
    return report


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str,
    pairs: Iterable[Tuple[str, Any]],
    debug: bool,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [theme] Theme: gameboy  Dither: 0.4  Edge: none  Workers: 6
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line, stream=stream)


def print_banner(title: str, stream: Optional[TextIO] = None) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", file=stream, flush=True)


def log(message: str, stream: Optional[TextIO] = None) -> None:
    """Plain log line. stream=None means the current sys.stdout."""
    print(message, file=stream, flush=True)


def debug_log(message: str, stream: Optional[TextIO] = None) -> None:
    """Debug log line."""
    print(f"[debug] {message}", file=stream, flush=True)


def warn(message: str, stream: Optional[TextIO] = None) -> None:
    """Warning log line."""
    print(f"[warn] {message}", file=stream, flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live progress printing in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (OSError, ValueError):
            pass


__all__ = [
    "format_seconds_compact",
    "format_total_duration_compact",
    "default_workers",
    "split_rows_into_parts",
    "colour_usage_report",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "warn",
    "error",
    "enable_line_buffered_stdout",
]
