"""
Unit tests for shared helpers.
"""

import io

import numpy as np
import pytest

from pixelmap.themes import get_theme_by_id
from pixelmap.utils import (
    colour_usage_report,
    debug_log,
    error,
    format_seconds_compact,
    format_total_duration_compact,
    key_value_pairs_to_string,
    log,
    print_banner,
    print_config_line,
    split_rows_into_parts,
    warn,
)


@pytest.mark.parametrize(
    "height,parts,expected",
    [
        (10, 3, [(0, 4), (4, 8), (8, 10)]),
        (2, 8, [(0, 1), (1, 2)]),
        (5, 1, [(0, 5)]),
        (5, 0, [(0, 5)]),
    ],
)
def test_split_rows_into_parts(height, parts, expected):
    assert split_rows_into_parts(height, parts) == expected


def test_time_formatting():
    assert format_seconds_compact(0.25) == "250.0ms"
    assert format_seconds_compact(2.5) == "2.500s"
    assert format_seconds_compact(125.0) == "2m 5.0s"
    assert format_total_duration_compact(3.4) == "3.4s"
    assert format_total_duration_compact(61.0) == "1m 1s"


def test_key_value_pairs():
    text = key_value_pairs_to_string([("Pixels", 1234), ("Debug", True), ("Dither", 0.40)])
    assert text == "Pixels: 1,234  Debug: on  Dither: 0.4"


def test_colour_usage_report():
    theme = get_theme_by_id("gameboy")
    buf = np.zeros((1, 3, 4), dtype=np.float32)
    buf[0, :, :3] = theme.colors[[3, 0, 3]]
    report = colour_usage_report(buf, theme.colors)
    assert report == [("#9bbc0f", 3, 2), ("#0f380f", 0, 1)]


def test_colour_usage_report_unknown_colour():
    theme = get_theme_by_id("gameboy")
    buf = np.full((1, 1, 4), 0.5, dtype=np.float32)
    assert colour_usage_report(buf, theme.colors)[0][1] == -1


def test_log_routing(capsys):
    debug_log("timings")
    warn("careful")
    error("broken")
    print_config_line("run", [("Theme", "gameboy")], debug=False)
    captured = capsys.readouterr()
    assert "[debug] timings" in captured.out
    assert "[warn] careful" in captured.out
    assert "[run] Theme: gameboy" in captured.out
    assert "[error] broken" in captured.err
    assert "broken" not in captured.out


def test_explicit_stream_bypasses_stdout(capsys):
    buf = io.StringIO()
    print_banner("harbour.png", stream=buf)
    log("Colours used:", stream=buf)
    debug_log("map: 3ms", stream=buf)
    print_config_line("theme", [("Theme", "gameboy")], debug=True, stream=buf)
    assert capsys.readouterr().out == ""
    lines = buf.getvalue().splitlines()
    assert lines[1:] == [
        "=== harbour.png ===",
        "Colours used:",
        "[debug] map: 3ms",
        "[debug] [theme] Theme: gameboy",
    ]
