"""
Image helpers shared by the test modules.
"""

import io

import numpy as np
from PIL import Image

from pixelmap.image_io import u8_to_float


def png_bytes_from_array(arr: np.ndarray) -> bytes:
    """Encode a uint8 (H,W,3|4) array as PNG bytes."""
    buf = io.BytesIO()
    Image.fromarray(arr.astype(np.uint8)).save(buf, format="PNG")
    return buf.getvalue()


def rgba_from_png(data: bytes) -> np.ndarray:
    """Decode PNG bytes to a uint8 (H,W,4) array."""
    with Image.open(io.BytesIO(data)) as im:
        return np.array(im.convert("RGBA"), dtype=np.uint8)


def buffer_from_rgb(rgb: np.ndarray, alpha: int = 255) -> np.ndarray:
    """uint8 (H,W,3) -> float32 RGBA pixel buffer."""
    h, w, _ = rgb.shape
    rgba = np.empty((h, w, 4), dtype=np.uint8)
    rgba[..., :3] = rgb
    rgba[..., 3] = alpha
    return u8_to_float(rgba)


def theme_rgb_set(theme) -> set:
    """Theme colours as a set of uint8 RGB tuples."""
    return {tuple(int(round(c * 255)) for c in row) for row in theme.colors}
