import io

import numpy as np
import pytest
from PIL import Image


def encode(frame: np.ndarray, fmt: str = "PNG") -> bytes:
    """Encode an RGBA/RGB uint8 array to image bytes."""
    buf = io.BytesIO()
    Image.fromarray(frame).save(buf, format=fmt)
    return buf.getvalue()


def decode(data: bytes) -> np.ndarray:
    """Decode PNG bytes back to an RGBA array."""
    with Image.open(io.BytesIO(data)) as img:
        return np.array(img.convert("RGBA"))


def random_frame(h=32, w=48, seed=42) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, (h, w, 4), dtype=np.uint8)


@pytest.fixture
def rgba_frame():
    """Random RGBA frame with mixed alpha."""
    return random_frame()


@pytest.fixture
def png_bytes(rgba_frame):
    return encode(rgba_frame)


@pytest.fixture
def png_path(tmp_path, rgba_frame):
    path = tmp_path / "input.png"
    path.write_bytes(encode(rgba_frame))
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep user overrides from leaking into tests."""
    for var in ("MEMEFX_ASSET_DIR", "MEMEFX_LOG_DIR", "MEMEFX_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
