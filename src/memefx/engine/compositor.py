"""Off-screen raster surface for GIF frame rendering.

A canvas is a float32 (H, W, 4) array holding premultiplied RGBA in [0, 255].
Drawing operations alpha-over their source onto the canvas in place.

CRITICAL: All blend math uses float32 to avoid uint8 overflow/wrap.
"""

import logging

import numpy as np
from PIL import ImageColor

from memefx.engine.imaging import resize
from memefx.errors import EncodeFailure

logger = logging.getLogger(__name__)


def new_canvas(width: int, height: int) -> np.ndarray:
    """Transparent black canvas."""
    return np.zeros((height, width, 4), dtype=np.float32)


def clear(canvas: np.ndarray):
    canvas.fill(0.0)


def _premultiply(frame: np.ndarray) -> np.ndarray:
    out = frame.astype(np.float32)
    out[:, :, :3] *= out[:, :, 3:4] / 255.0
    return out


def _blend_over(base: np.ndarray, layer: np.ndarray) -> np.ndarray:
    """Premultiplied alpha-over: layer on top of base."""
    return layer + base * (1.0 - layer[:, :, 3:4] / 255.0)


def parse_color(color) -> tuple[int, int, int, int]:
    """Parse a CSS-style color string (``#RGB``, ``#RRGGBBAA``, ``red``...) to RGBA."""
    try:
        rgba = ImageColor.getrgb(color)
    except (ValueError, AttributeError, TypeError) as e:
        raise EncodeFailure(f"Invalid color: {color!r}") from e
    if len(rgba) == 3:
        rgba = (*rgba, 255)
    return rgba


def fill(canvas: np.ndarray, color):
    """Composite a solid color over the whole canvas."""
    r, g, b, a = parse_color(color)
    layer = np.empty_like(canvas)
    layer[:, :] = (r * a / 255.0, g * a / 255.0, b * a / 255.0, float(a))
    canvas[:] = _blend_over(canvas, layer)


def draw_image(
    canvas: np.ndarray,
    image: np.ndarray,
    x: int,
    y: int,
    width: int,
    height: int,
):
    """Scale an RGBA image to (width, height) and composite it at (x, y).

    Offsets may be negative; the part outside the canvas is clipped.
    """
    canvas_h, canvas_w = canvas.shape[:2]

    # Destination rectangle clipped to the canvas
    left, top = max(x, 0), max(y, 0)
    right, bottom = min(x + width, canvas_w), min(y + height, canvas_h)
    if left >= right or top >= bottom:
        return

    scaled = _premultiply(resize(image, width, height))
    src = scaled[top - y : bottom - y, left - x : right - x]
    region = canvas[top:bottom, left:right]
    canvas[top:bottom, left:right] = _blend_over(region, src)


def flatten(canvas: np.ndarray) -> np.ndarray:
    """Un-premultiply the canvas into an RGBA uint8 frame."""
    alpha = canvas[:, :, 3:4]
    rgb = np.divide(
        canvas[:, :, :3] * 255.0,
        alpha,
        out=np.zeros_like(canvas[:, :, :3]),
        where=alpha > 0,
    )
    out = np.concatenate([rgb, alpha], axis=2)
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)
