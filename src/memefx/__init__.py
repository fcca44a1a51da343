"""memefx: meme-style image effects (invert, greyscale, sepia, triggered, rgb GIFs)."""

from memefx._version import __version__
from memefx.api import apply_effect, greyscale, invert, rgb, sepia, trigger
from memefx.constants import RGBArgs
from memefx.errors import (
    AssetNotFound,
    DecodeFailure,
    EncodeFailure,
    InvalidInput,
    MemeFxError,
)

__all__ = [
    "__version__",
    "apply_effect",
    "greyscale",
    "invert",
    "rgb",
    "sepia",
    "trigger",
    "RGBArgs",
    "AssetNotFound",
    "DecodeFailure",
    "EncodeFailure",
    "InvalidInput",
    "MemeFxError",
]
