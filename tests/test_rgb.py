"""Tests for the solid-color rgb animation."""

import io

import numpy as np
import pytest
from PIL import Image

from memefx import EncodeFailure, InvalidInput, RGBArgs, rgb
from memefx.api import resolve_rgb_args
from memefx.constants import DEFAULT_RGB_ARGS


def _open(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data))


def _frame_colors(img: Image.Image) -> list[tuple]:
    colors = []
    for i in range(img.n_frames):
        img.seek(i)
        colors.append(img.convert("RGB").getpixel((0, 0)))
    return colors


@pytest.mark.smoke
def test_single_red_frame():
    data = rgb({"colors": ["#FF0000"], "width": 10, "height": 10, "delay": 15})
    img = _open(data)
    assert img.n_frames == 1
    assert img.size == (10, 10)
    frame = np.array(img.convert("RGB"))
    np.testing.assert_array_equal(frame, np.full((10, 10, 3), [255, 0, 0]))


def test_defaults():
    img = _open(rgb())
    assert img.size == (256, 256)
    assert img.info["loop"] == 0
    assert _frame_colors(img) == [(255, 0, 0), (0, 255, 0), (0, 0, 255)]


def test_frames_follow_color_order():
    args = RGBArgs(colors=("#0000FF", "#FFFF00", "#FF00FF", "#00FFFF"), width=4, height=3)
    img = _open(rgb(args))
    assert img.n_frames == 4
    assert _frame_colors(img) == [(0, 0, 255), (255, 255, 0), (255, 0, 255), (0, 255, 255)]


def test_delay_from_args():
    img = _open(rgb({"colors": ["#FF0000", "#00FF00"], "width": 4, "height": 4, "delay": 100}))
    assert img.info["duration"] == 100


def test_legacy_color_key():
    img = _open(rgb({"color": ["#00FF00"], "width": 4, "height": 4}))
    assert _frame_colors(img) == [(0, 255, 0)]


def test_translucent_color_blends_over_previous():
    img = _open(rgb({"colors": ["#0000FF", "#FF000033"], "width": 4, "height": 4}))
    assert _frame_colors(img)[1] == (51, 0, 204)


def test_repeated_adjacent_colors_keep_their_frames():
    img = _open(rgb({"colors": ["#FF0000", "#FF0000", "#00FF00"], "width": 4, "height": 4}))
    assert img.n_frames == 3
    assert _frame_colors(img) == [(255, 0, 0), (255, 0, 0), (0, 255, 0)]


def test_single_color_repeated():
    img = _open(rgb({"colors": ["#00FF00"] * 5, "width": 4, "height": 4}))
    assert img.n_frames == 5


class TestRejects:
    @pytest.mark.parametrize(
        "args",
        [
            {"colors": []},
            {"color": []},
            RGBArgs(colors=()),
        ],
    )
    def test_empty_colors(self, args):
        with pytest.raises(InvalidInput) as exc_info:
            rgb(args)
        assert exc_info.value.name == "InvalidInput"

    def test_colors_must_be_a_list(self):
        with pytest.raises(InvalidInput):
            rgb({"colors": "#FF0000"})

    def test_unknown_key(self):
        with pytest.raises(InvalidInput, match="Unknown rgb arguments"):
            rgb({"colours": ["#FF0000"]})

    def test_wrong_args_type(self):
        with pytest.raises(InvalidInput):
            rgb(["#FF0000"])

    def test_bad_color(self):
        with pytest.raises(EncodeFailure):
            rgb({"colors": ["#GGGGGG"], "width": 4, "height": 4})

    @pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-3, 10)])
    def test_bad_dimensions(self, w, h):
        with pytest.raises(EncodeFailure):
            rgb({"colors": ["#FF0000"], "width": w, "height": h})

    def test_negative_delay(self):
        with pytest.raises(EncodeFailure):
            rgb({"colors": ["#FF0000"], "width": 4, "height": 4, "delay": -1})


def test_defaults_not_mutated():
    resolve_rgb_args({"colors": ["#123456"], "width": 7})
    assert DEFAULT_RGB_ARGS == RGBArgs()
    assert resolve_rgb_args(None) is DEFAULT_RGB_ARGS
