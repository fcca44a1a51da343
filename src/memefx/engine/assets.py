"""Bundled static assets (overlays), resolved by name."""

import logging
import os
from pathlib import Path

import numpy as np

from memefx.engine.imaging import decode_image
from memefx.errors import AssetNotFound, DecodeFailure
from memefx.security import validate_asset_name

logger = logging.getLogger(__name__)

ASSET_DIR = Path(__file__).resolve().parent.parent / "assets"


def asset_dir() -> Path:
    """Asset directory; MEMEFX_ASSET_DIR overrides the bundled one."""
    override = os.environ.get("MEMEFX_ASSET_DIR", "")
    return Path(override) if override else ASSET_DIR


def asset_path(name: str) -> Path:
    errors = validate_asset_name(name)
    if errors:
        raise AssetNotFound("; ".join(errors))
    return asset_dir() / f"{name}.png"


def load_asset(name: str) -> np.ndarray:
    """Load a bundled asset as an RGBA frame.

    Raises:
        AssetNotFound: the name is unsafe or the file is missing/unreadable.
    """
    path = asset_path(name)
    if not path.is_file():
        raise AssetNotFound(f"Asset '{name}' not found in {path.parent}")
    try:
        return decode_image(path)
    except DecodeFailure as e:
        logger.exception(f"Asset '{name}' is corrupt")
        raise AssetNotFound(f"Asset '{name}' could not be decoded") from e
