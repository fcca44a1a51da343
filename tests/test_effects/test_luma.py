"""Tests for the shared luminance transform."""

import numpy as np

from memefx.effects.luma import LUMA_WEIGHTS, luminance


def test_weights_sum_to_one():
    assert abs(float(LUMA_WEIGHTS.sum()) - 1.0) < 1e-6


def test_grey_input_is_fixed_point():
    values = np.arange(256, dtype=np.uint8)
    frame = np.zeros((1, 256, 4), dtype=np.uint8)
    frame[0, :, :3] = values[:, np.newaxis]
    np.testing.assert_array_equal(luminance(frame)[0], values)


def test_output_shape_and_dtype():
    frame = np.zeros((5, 7, 4), dtype=np.uint8)
    out = luminance(frame)
    assert out.shape == (5, 7)
    assert out.dtype == np.int16
