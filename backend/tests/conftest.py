import pytest

from idcheck.models.geometry import Rect
from idcheck.models.landmarks import FaceLandmarks, FaceObservation


def make_landmarks(offset=(0.0, 0.0)):
    """A small, fully specified face: 4-point contour, two 3-point eyes, 3-point nose."""
    dx, dy = offset

    def shift(points):
        return [(x + dx, y + dy) for x, y in points]

    return FaceLandmarks.from_mapping({
        'face_contour': shift([(0.1, 0.8), (0.2, 0.2), (0.8, 0.2), (0.9, 0.8)]),
        'left_eye': shift([(0.25, 0.7), (0.3, 0.75), (0.35, 0.7)]),
        'right_eye': shift([(0.65, 0.7), (0.7, 0.75), (0.75, 0.7)]),
        'nose': shift([(0.5, 0.6), (0.45, 0.45), (0.55, 0.45)]),
    })


def make_face(box=Rect(0.25, 0.25, 0.5, 0.5), offset=(0.0, 0.0), landmarks=True):
    return FaceObservation(bounding_box=box, landmarks=make_landmarks(offset) if landmarks else None)


@pytest.fixture
def face():
    return make_face()


@pytest.fixture
def landmarks():
    return make_landmarks()
