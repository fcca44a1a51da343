"""Invert effect: inverts RGB channels, forces alpha opaque."""

import numpy as np

EFFECT_ID = "fx.invert"
EFFECT_NAME = "Invert"
EFFECT_CATEGORY = "color"

PARAMS: dict = {}


def apply(frame: np.ndarray, params: dict) -> np.ndarray:
    """Invert RGB channels and set alpha to 255. Stateless."""
    output = np.empty_like(frame)
    output[:, :, :3] = 255 - frame[:, :, :3]
    output[:, :, 3] = 255
    return output
