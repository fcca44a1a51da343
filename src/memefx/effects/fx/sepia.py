"""Sepia wash: luminance with a warm red/green lift.

Channels are L+100, L+50, L. Bright pixels saturate at 255 instead of
wrapping, so the 50-step spacing between channels only holds while L <= 155.
"""

import numpy as np

from memefx.effects.luma import luminance

EFFECT_ID = "fx.sepia"
EFFECT_NAME = "Sepia"
EFFECT_CATEGORY = "color"

# Per-channel offsets added to luminance (R, G, B)
SEPIA_OFFSETS = np.array([100, 50, 0], dtype=np.int16)

PARAMS: dict = {}


def apply(frame: np.ndarray, params: dict) -> np.ndarray:
    luma = luminance(frame)[:, :, np.newaxis]
    output = frame.copy()
    output[:, :, :3] = np.clip(luma + SEPIA_OFFSETS, 0, 255).astype(np.uint8)
    return output
