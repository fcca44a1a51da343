"""Tests for jitter random sources."""

from memefx.engine.determinism import jitter, make_rng


def test_jitter_range():
    rng = make_rng(0)
    values = [jitter(rng, 20) for _ in range(500)]
    assert min(values) >= -20
    assert max(values) < 0
    assert len(set(values)) > 10


def test_seeded_rng_repeats():
    rng_a, rng_b = make_rng(123), make_rng(123)
    a = [jitter(rng_a, 10) for _ in range(20)]
    b = [jitter(rng_b, 10) for _ in range(20)]
    assert a == b
