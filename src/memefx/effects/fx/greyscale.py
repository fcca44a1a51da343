"""Greyscale: replaces RGB with a weighted luminance, preserves alpha."""

import numpy as np

from memefx.effects.luma import luminance

EFFECT_ID = "fx.greyscale"
EFFECT_NAME = "Greyscale"
EFFECT_CATEGORY = "color"

PARAMS: dict = {}


def apply(frame: np.ndarray, params: dict) -> np.ndarray:
    output = frame.copy()
    output[:, :, :3] = luminance(frame)[:, :, np.newaxis].astype(np.uint8)
    return output
