import typing

import numpy as np
import pytest

from idcheck.core.overlay import build_overlay
from idcheck.models.geometry import Size
from idcheck.models.session import Phase
from idcheck.utils.image import (
    ImageFormatError,
    ImageProcessingError,
    decode_base64_image,
    encode_base64_image,
    resize_to_view,
)
from idcheck.utils.render import draw_overlay

from conftest import make_face


def test_draw_overlay_leaves_input_untouched():
    frame = np.zeros((200, 200, 3), dtype=np.uint8)
    shapes = build_overlay(Phase.CAPTURING_FACE, [make_face()], Size(200, 200), matched=True)
    out = draw_overlay(frame, shapes)
    assert out.shape == frame.shape
    assert not frame.any()
    assert out.any()


def test_live_landmarks_are_green():
    frame = np.zeros((200, 200, 3), dtype=np.uint8)
    shapes = [s for s in build_overlay(Phase.CAPTURING_FACE, [make_face()], Size(200, 200))
              if s.region == 'face_contour']
    out = draw_overlay(frame, shapes)
    # BGR: only the green channel is written
    assert out[:, :, 1].any()
    assert not out[:, :, 0].any()
    assert not out[:, :, 2].any()


def test_base64_round_trip_keeps_size():
    frame = np.full((48, 64, 3), 127, dtype=np.uint8)
    encoded = encode_base64_image(frame)
    assert encoded.startswith("data:image/jpeg;base64,")
    assert decode_base64_image(encoded).shape == (48, 64, 3)


def test_garbage_is_rejected():
    with pytest.raises(ImageProcessingError):
        decode_base64_image("data:image/jpeg;base64,aGVsbG8gd29ybGQ=")
    with pytest.raises(ImageFormatError):
        decode_base64_image("aGVsbG8gd29ybGQ=")


def test_resize_to_view():
    frame = np.zeros((48, 64, 3), dtype=np.uint8)
    assert resize_to_view(frame, 64, 48) is frame
    assert resize_to_view(frame, 32, 24).shape == (24, 32, 3)


def test_decode_always_returns_an_array():
    assert typing.get_type_hints(decode_base64_image)['return'] is np.ndarray
