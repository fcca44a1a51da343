"""Random sources for animated effects."""

import numpy as np


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create an RNG. ``None`` draws fresh OS entropy, so output differs per call."""
    return np.random.default_rng(seed)


def jitter(rng: np.random.Generator, spread: int) -> int:
    """Uniform integer offset in [-spread, 0)."""
    return int(rng.integers(0, spread)) - spread
