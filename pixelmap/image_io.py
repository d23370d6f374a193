# pixelmap/image_io.py
from __future__ import annotations

import io
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .constants import MAX_BUFFER_PIXELS
from .core_types import F32Image, U8Image
from .errors import AllocationError, DecodeError, EncodeError, ParameterError

"""
Decoder / encoder for pixel buffers (RGBA float32 in [0,1], sRGB), buffer
allocation, and the file-system side of exports.

Byte <-> float conversion: float = byte / 255, byte = round(float * 255).
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def allocate_buffer(height: int, width: int, channels: int = 4) -> F32Image:
    """Zeroed float32 working buffer; AllocationError when it cannot exist."""
    if height <= 0 or width <= 0:
        raise ParameterError(f"buffer dimensions must be positive, got {width}x{height}")
    if height * width > MAX_BUFFER_PIXELS:
        raise AllocationError(
            f"buffer {width}x{height} exceeds the {MAX_BUFFER_PIXELS:,} pixel limit"
        )
    try:
        return np.zeros((height, width, channels), dtype=np.float32)
    except MemoryError as e:
        raise AllocationError(f"cannot allocate {width}x{height} buffer") from e


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def u8_to_float(arr: U8Image) -> F32Image:
    """uint8 (H,W,4) -> float32 (H,W,4) in [0,1]."""
    out = allocate_buffer(arr.shape[0], arr.shape[1], arr.shape[2])
    np.divide(arr, 255.0, out=out, casting="unsafe")
    return out


def float_to_u8(buffer: F32Image) -> U8Image:
    """float32 [0,1] -> uint8 with rounding to the nearest byte."""
    return np.clip(np.rint(buffer * 255.0), 0, 255).astype(np.uint8)


def decode_image(data: bytes) -> F32Image:
    """
    Decode encoded image bytes into an RGBA float32 buffer.

    Raises DecodeError for empty, truncated, or unrecognised input, and
    AllocationError when the decoded image is too large to hold.
    """
    if not data:
        raise DecodeError("empty image data")
    try:
        with Image.open(io.BytesIO(data)) as im0:
            if im0.width * im0.height > MAX_BUFFER_PIXELS:
                raise AllocationError(
                    f"image {im0.width}x{im0.height} exceeds the "
                    f"{MAX_BUFFER_PIXELS:,} pixel limit"
                )
            im0.load()
            im = _convert_to_srgb_rgba(im0)
    except Image.DecompressionBombError as e:
        raise AllocationError(str(e)) from e
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"cannot decode image: {e}") from e
    arr = np.array(im, dtype=np.uint8)
    return u8_to_float(arr)


def encode_png(buffer: F32Image) -> bytes:
    """Serialise an RGBA float32 buffer as PNG bytes."""
    if buffer.ndim != 3 or buffer.shape[-1] != 4 or buffer.size == 0:
        raise EncodeError(f"cannot encode buffer of shape {buffer.shape}")
    out = io.BytesIO()
    try:
        Image.fromarray(float_to_u8(buffer)).save(out, format="PNG")
    except (OSError, ValueError, TypeError) as e:
        raise EncodeError(f"cannot encode image: {e}") from e
    return out.getvalue()


def load_image_bytes(path: Path) -> bytes:
    """Read an encoded image from disk."""
    return Path(path).read_bytes()


def save_export(path: Path, data: bytes) -> Path:
    """
    Persist encoded bytes at a caller-chosen path.
    Forces a .png suffix and creates parent folders. Returns the written path.
    """
    path = Path(path)
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


__all__ = [
    "allocate_buffer",
    "u8_to_float",
    "float_to_u8",
    "decode_image",
    "encode_png",
    "load_image_bytes",
    "save_export",
]
