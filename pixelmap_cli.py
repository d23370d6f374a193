#!/usr/bin/env python3
"""
pixelmap_cli.py
Turn map screenshots into themed pixel art.

Usage:
  python pixelmap_cli.py INPUT --theme ID --pixelation N --resolution N --aspect 16:9
                         --dither X --edge [none|soft|strong|selective]
                         --contrast X --saturation X --debug

Pipeline:
  crop to aspect -> pixelate (nearest down/up) -> tone -> edges
  -> ordered-dither posterise -> extract palette -> map to theme palette

Input:
  Any Pillow-readable image, or a folder of png/jpg/jpeg/webp images.

Output:
  PNG. Writes <stem>_<theme-id>.png next to INPUT or into --outdir.
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, TextIO, Tuple

from pixelmap.constants import (
    CONTRAST_LEVELS,
    DEFAULT_EXPORT_SETTINGS,
    EDGE_STRENGTHS,
    OUTPUT_RESOLUTIONS,
    PIXELATION_SIZES,
)
from pixelmap.core_types import ProcessingOptions, ThemePalette, parse_aspect_ratio
from pixelmap.errors import PixelArtError
from pixelmap.image_io import decode_image, load_image_bytes, save_export
from pixelmap.pipeline import export_image
from pixelmap.themes import DEFAULT_THEME_ID, THEMES, all_themes
from pixelmap.utils import (
    colour_usage_report,
    debug_log,
    default_workers,
    enable_line_buffered_stdout,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    warn,
)

IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".webp"}


# CLI args & small helpers


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        outdir: optional Path for outputs
        theme: theme id
        pixelation, resolution: ints
        aspect: float (width / height)
        dither, contrast, saturation: floats
        edge: edge mode name
        jobs: parallel file workers
        workers: threads for the palette mapping stage
        list_themes: print themes and exit
        debug: bool for per-stage timings
    """
    parser = argparse.ArgumentParser(
        prog="pixelmap",
        description="Pixelate map screenshots and recolour them to a theme palette.",
    )
    parser.add_argument("src", type=Path, nargs="?", help="Input image or folder")
    parser.add_argument(
        "--outdir", type=Path, default=None, help="Output directory (optional)"
    )
    parser.add_argument(
        "--theme",
        choices=sorted(THEMES),
        default=DEFAULT_THEME_ID,
        help="Theme palette id.",
    )
    parser.add_argument(
        "--pixelation",
        type=int,
        default=DEFAULT_EXPORT_SETTINGS["pixelation_size"],
        help=f"Low-res width in pixels (presets: {', '.join(map(str, PIXELATION_SIZES))}).",
    )
    parser.add_argument(
        "--resolution",
        type=int,
        default=DEFAULT_EXPORT_SETTINGS["output_resolution"],
        help=f"Output width in pixels (presets: {', '.join(map(str, OUTPUT_RESOLUTIONS))}).",
    )
    parser.add_argument(
        "--aspect",
        type=parse_aspect_ratio,
        default=DEFAULT_EXPORT_SETTINGS["aspect_ratio"],
        help='Target aspect ratio, "W:H" or a number (1:1, 16:9, 9:16, 10:9).',
    )
    parser.add_argument(
        "--dither",
        type=float,
        default=DEFAULT_EXPORT_SETTINGS["dither_intensity"],
        help="Ordered dither intensity in [0, 1].",
    )
    parser.add_argument(
        "--edge",
        choices=list(EDGE_STRENGTHS),
        default=DEFAULT_EXPORT_SETTINGS["edge_mode"],
        help="Edge enhancement mode.",
    )
    parser.add_argument(
        "--contrast",
        type=float,
        default=DEFAULT_EXPORT_SETTINGS["contrast"],
        help=f"Contrast multiplier (presets: {', '.join(map(str, CONTRAST_LEVELS))}).",
    )
    parser.add_argument(
        "--saturation",
        type=float,
        default=DEFAULT_EXPORT_SETTINGS["saturation"],
        help="Saturation multiplier, 0 = greyscale.",
    )
    parser.add_argument(
        "--jobs", type=int, default=1, help="Files processed in parallel"
    )
    parser.add_argument(
        "--workers", type=int, default=default_workers(), help="Mapping threads"
    )
    parser.add_argument(
        "--list-themes", action="store_true", help="List theme palettes and exit"
    )
    parser.add_argument("--debug", action="store_true", help="Per-stage timings")
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> ProcessingOptions:
    return ProcessingOptions(
        pixelation_size=args.pixelation,
        output_resolution=args.resolution,
        aspect_ratio=args.aspect,
        dither_intensity=args.dither,
        edge_mode=args.edge,
        contrast=args.contrast,
        saturation=args.saturation,
    ).validate()


def output_path_for(src_path: Path, theme: ThemePalette, outdir: Optional[Path]) -> Path:
    name = f"{src_path.stem}_{theme.id}.png"
    return (outdir / name) if outdir else src_path.with_name(name)


def _is_output_artifact(path: Path) -> bool:
    return any(path.stem.endswith(f"_{theme_id}") for theme_id in THEMES)


def print_theme_list() -> None:
    for theme in all_themes():
        log(f"{theme.id:<16} {theme.name:<20} {len(theme):>3} colours  {theme.description}")


# Per-file processing


def process_single_image(
    src_path: Path,
    out_path: Path,
    theme: ThemePalette,
    options: ProcessingOptions,
    workers: int,
    debug: bool,
    stream: Optional[TextIO] = None,
) -> Path:
    """
    Process a single image path end-to-end:
      read -> pixelate -> theme -> save -> report.

    Report lines go to `stream` (the current sys.stdout when None).
    """
    t_start = time.perf_counter()
    print_banner(src_path.name, stream=stream)

    data = load_image_bytes(src_path)
    t_loaded = time.perf_counter()

    png = export_image(
        data, theme, options, workers=workers, debug=debug, log_stream=stream
    )
    t_mapped = time.perf_counter()

    written = save_export(out_path, png)
    t_saved = time.perf_counter()

    result = decode_image(png)
    height, width = result.shape[0], result.shape[1]
    log(f"Wrote {written.name} | size={width}x{height} | theme={theme.id}", stream=stream)
    log("Colours used:", stream=stream)
    for hex_code, idx, count in colour_usage_report(result, theme.colors):
        log(f"  {hex_code}  #{idx}: {count:,}", stream=stream)
    log(f"Total pixels: {width * height:,}", stream=stream)

    if debug:
        debug_log(
            f"Total {format_total_duration_compact(t_saved - t_start)}  "
            f"(load={format_seconds_compact(t_loaded - t_start)}, "
            f"process={format_seconds_compact(t_mapped - t_loaded)}, "
            f"save={format_seconds_compact(t_saved - t_mapped)})",
            stream=stream,
        )
    else:
        log(f"Total time {format_total_duration_compact(t_saved - t_start)}", stream=stream)
    return written


def _process_one_live(
    path: Path,
    theme: ThemePalette,
    options: ProcessingOptions,
    workers: int,
    debug: bool,
    outdir: Optional[Path],
    stream: Optional[TextIO] = None,
) -> bool:
    """Process a single file and write its report to `stream`. Returns success."""
    try:
        process_single_image(
            path,
            output_path_for(path, theme, outdir),
            theme,
            options,
            workers,
            debug,
            stream=stream,
        )
    except (PixelArtError, OSError) as e:
        error(f"{path.name}: {e}")
        return False
    return True


def _process_one_captured(
    path: Path,
    theme: ThemePalette,
    options: ProcessingOptions,
    workers: int,
    debug: bool,
    outdir: Optional[Path],
) -> Tuple[str, bool]:
    """
    Process a single file, collecting its report in a private buffer.

    Used by concurrent execution so output can be printed in file order.
    sys.stdout is left untouched.
    """
    buf = io.StringIO()
    ok = _process_one_live(path, theme, options, workers, debug, outdir, stream=buf)
    return buf.getvalue(), ok


# Entry point


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns the exit status.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    if args.list_themes:
        print_theme_list()
        return 0

    src = args.src
    if src is None:
        error("no input given")
        return 2
    if not src.exists():
        error(f"not found: {src}")
        return 2

    try:
        options = options_from_args(args)
    except PixelArtError as e:
        error(str(e))
        return 2
    theme = THEMES[args.theme]

    print_config_line(
        "run",
        [
            ("Theme", theme.id),
            ("Pixelation", options.pixelation_size),
            ("Resolution", options.output_resolution),
            ("Aspect", float(options.aspect_ratio)),
            ("Workers", args.workers),
            ("Jobs", args.jobs),
        ],
        debug=False,
    )

    if src.is_dir():
        all_entries = list(src.iterdir())
        files = [
            p
            for p in all_entries
            if p.is_file()
            and p.suffix.lower() in IMAGE_EXTS
            and not _is_output_artifact(p)
        ]
        files.sort(key=lambda p: p.name.lower())
        if args.debug:
            debug_log(
                key_value_pairs_to_string(
                    [("Folder entries", len(all_entries)), ("Images", len(files))]
                )
            )
        if not files:
            warn(f"no images found in {src}")

        if args.jobs <= 1:
            results = [
                _process_one_live(p, theme, options, args.workers, args.debug, args.outdir)
                for p in files
            ]
        else:
            with ThreadPoolExecutor(max_workers=args.jobs) as ex:
                futures = [
                    ex.submit(
                        _process_one_captured,
                        p,
                        theme,
                        options,
                        args.workers,
                        args.debug,
                        args.outdir,
                    )
                    for p in files
                ]
                blocks = [f.result() for f in futures]
            print("".join(text for text, _ok in blocks), end="", flush=True)
            results = [ok for _text, ok in blocks]
    else:
        results = [
            _process_one_live(src, theme, options, args.workers, args.debug, args.outdir)
        ]

    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
