"""Image decode/encode via Pillow.

Decoded images are always RGBA uint8 arrays of shape (H, W, 4).
"""

import io
import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from memefx.errors import DecodeFailure, EncodeFailure, InvalidInput
from memefx.security import validate_source_size

logger = logging.getLogger(__name__)


def check_source(source, argument: str = "image"):
    """Reject a missing or wrongly-typed image source before any decode work."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        if len(source) == 0:
            raise InvalidInput(f"Expected ImageSource for {argument}, received empty bytes")
        return
    if isinstance(source, (str, os.PathLike)):
        if not os.fspath(source):
            raise InvalidInput(f"Expected ImageSource for {argument}, received empty path")
        return
    raise InvalidInput(
        f"Expected ImageSource for {argument}, received {type(source).__name__}"
    )


def decode_image(source) -> np.ndarray:
    """Decode a path or encoded bytes into an RGBA frame.

    Raises:
        InvalidInput: source is missing, of the wrong type, or too large.
        DecodeFailure: Pillow cannot read the source as an image.
    """
    check_source(source)
    errors = validate_source_size(source)
    if errors:
        raise InvalidInput("; ".join(errors))

    if isinstance(source, (bytes, bytearray, memoryview)):
        fp = io.BytesIO(bytes(source))
        label = f"<{len(source)} bytes>"
    else:
        fp = os.fspath(source)
        label = fp

    try:
        with Image.open(fp) as img:
            frame = np.array(img.convert("RGBA"), dtype=np.uint8)
    except FileNotFoundError as e:
        raise DecodeFailure(f"Image not found: {label}") from e
    except Image.DecompressionBombError as e:
        raise DecodeFailure(f"Image {label} has too many pixels to decode") from e
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeFailure(
            f"Failed to decode image {label}: {type(e).__name__}"
        ) from e

    logger.debug("Decoded %s -> %dx%d", label, frame.shape[1], frame.shape[0])
    return frame


def encode_png(frame: np.ndarray) -> bytes:
    """Encode an RGBA frame to PNG bytes."""
    if frame.ndim != 3 or frame.shape[2] != 4:
        raise EncodeFailure(f"Expected RGBA frame (H, W, 4), got shape {frame.shape}")
    img = Image.fromarray(np.ascontiguousarray(frame, dtype=np.uint8))
    buf = io.BytesIO()
    try:
        img.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeFailure(f"PNG encode failed: {type(e).__name__}") from e
    return buf.getvalue()


def resize(frame: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize an RGBA frame to (width, height) with bilinear filtering."""
    if frame.shape[1] == width and frame.shape[0] == height:
        return frame
    img = Image.fromarray(np.ascontiguousarray(frame, dtype=np.uint8))
    return np.array(img.resize((width, height), Image.Resampling.BILINEAR))
