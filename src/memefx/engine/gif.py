"""Animated GIF encoding via Pillow."""

import logging

import numpy as np
from PIL import GifImagePlugin, Image

from memefx.errors import EncodeFailure
from memefx.security import validate_canvas_size, validate_frame_count

logger = logging.getLogger(__name__)

# GIF stores frame delays in centiseconds
DELAY_RESOLUTION_MS = 10

GIF_TRAILER = b";"


def quantize_delay(delay_ms: int) -> int:
    """Round a delay in ms to what a GIF can store.

    Halves round up (5 -> 10, 25 -> 30) and a positive delay never rounds
    down to 0, which viewers treat as "as fast as possible".
    """
    if delay_ms <= 0:
        return 0
    steps = int(delay_ms / DELAY_RESOLUTION_MS + 0.5)
    return max(steps, 1) * DELAY_RESOLUTION_MS


class GifEncoder:
    """Frame-by-frame GIF assembly.

    ``repeat`` follows the usual encoder convention: 0 loops forever, -1 plays
    once, N > 0 repeats N times.

    Every added frame is written as its own image block, including frames that
    are identical to the one before, so the encoded frame count always equals
    ``frame_count``.
    """

    def __init__(self, width: int, height: int, delay: int = 100, repeat: int = 0):
        errors = validate_canvas_size(width, height)
        if errors:
            raise EncodeFailure("; ".join(errors))
        self.width = width
        self.height = height
        self.delay = delay
        self.repeat = repeat
        self.frame_count = 0
        self._frames: list[Image.Image] = []
        self._finished = False

    def set_delay(self, delay: int):
        self.delay = delay

    def set_repeat(self, repeat: int):
        self.repeat = repeat

    def add_frame(self, frame_rgba: np.ndarray):
        """Append an RGBA frame. Alpha is dropped (frames are written opaque)."""
        if self._finished:
            raise EncodeFailure("Cannot add frames to a finished GIF")
        if frame_rgba.shape[:2] != (self.height, self.width):
            raise EncodeFailure(
                f"Frame size {frame_rgba.shape[1]}x{frame_rgba.shape[0]} does not "
                f"match GIF size {self.width}x{self.height}"
            )
        errors = validate_frame_count(self.frame_count + 1)
        if errors:
            raise EncodeFailure("; ".join(errors))
        rgb = np.ascontiguousarray(frame_rgba[:, :, :3], dtype=np.uint8)
        self._frames.append(Image.fromarray(rgb))
        self.frame_count += 1

    def _encode(self) -> bytes:
        # Each frame gets its own adaptive palette as a local color table.
        paletted = [
            frame.convert("P", palette=Image.Palette.ADAPTIVE, colors=256)
            for frame in self._frames
        ]
        info = {"loop": self.repeat} if self.repeat >= 0 else {}
        header, _ = GifImagePlugin.getheader(paletted[0], info=info)
        chunks = list(header)
        duration = quantize_delay(self.delay)
        for im in paletted:
            chunks.extend(
                GifImagePlugin.getdata(
                    im, duration=duration, disposal=1, include_color_table=True
                )
            )
        chunks.append(GIF_TRAILER)
        return b"".join(chunks)

    def finish(self) -> bytes:
        """Encode all frames and return the GIF bytes."""
        if not self._frames:
            raise EncodeFailure("GIF has no frames")
        if isinstance(self.delay, bool) or not isinstance(self.delay, int) or self.delay < 0:
            raise EncodeFailure(f"Delay must be a non-negative integer, got {self.delay!r}")
        if not isinstance(self.repeat, int) or self.repeat < -1:
            raise EncodeFailure(f"Invalid repeat count: {self.repeat!r}")

        try:
            data = self._encode()
        except (OSError, ValueError) as e:
            logger.exception("GIF encode failed")
            raise EncodeFailure(f"GIF encode failed: {type(e).__name__}") from e

        self._finished = True
        self._frames = []
        logger.debug(
            "Encoded GIF %dx%d, %d frames, %d bytes",
            self.width,
            self.height,
            self.frame_count,
            len(data),
        )
        return data
