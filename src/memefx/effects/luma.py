"""Shared luminance transform for the greyscale-derived effects."""

import numpy as np

# Non-standard weights kept for output compatibility (they still sum to 1.0)
LUMA_WEIGHTS = np.array([0.34, 0.5, 0.16], dtype=np.float32)


def luminance(frame: np.ndarray) -> np.ndarray:
    """Per-pixel brightness of an RGBA frame, rounded half-to-even. Returns int16 (H, W)."""
    luma = frame[:, :, :3].astype(np.float32) @ LUMA_WEIGHTS
    return np.clip(np.rint(luma), 0, 255).astype(np.int16)
