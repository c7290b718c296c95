import numpy as np
import pytest

pytest.importorskip("face_recognition")

from idcheck.core import detection
from idcheck.core.detection import (
    FaceLandmarkDetector,
    LandmarkExtractionError,
    split_lips,
    to_face_landmarks,
)
from idcheck.models.geometry import Point, Rect


def _dlib_points():
    # stand-in for the 68-point model: point i sits at (i, 100 + i)
    return [(i, 100 + i) for i in range(68)]


def _raw_landmarks():
    p = _dlib_points()
    return {
        'chin': p[0:17],
        'left_eyebrow': p[17:22],
        'right_eyebrow': p[22:27],
        'nose_bridge': p[27:31],
        'nose_tip': p[31:36],
        'left_eye': p[36:42],
        'right_eye': p[42:48],
        'top_lip': p[48:55] + [p[64]] + [p[63]] + [p[62]] + [p[61]] + [p[60]],
        'bottom_lip': p[54:60] + [p[48]] + [p[60]] + [p[67]] + [p[66]] + [p[65]] + [p[64]],
    }


def test_split_lips_rebuilds_contours():
    raw = _raw_landmarks()
    lips = split_lips(raw['top_lip'], raw['bottom_lip'])
    assert [x for x, _ in lips['outer_lips']] == list(range(48, 60))
    assert [x for x, _ in lips['inner_lips']] == list(range(60, 68))


def test_split_lips_rejects_unexpected_layout():
    with pytest.raises(LandmarkExtractionError):
        split_lips([(0, 0)] * 5, [(0, 0)] * 12)


def test_landmarks_are_normalized_against_face_box():
    box = Rect(x=0, y=100, width=100, height=100)
    landmarks = to_face_landmarks(_raw_landmarks(), box)
    contour = landmarks.get('face_contour')
    assert not contour.closed
    # (0, 100) is the box's top-left corner -> normalized (0, 1)
    assert contour.points[0] == pytest.approx((0.0, 1.0))
    assert landmarks.get('left_eye').closed
    assert landmarks.get('left_pupil') is None
    assert landmarks.get('median_line') is None
    assert landmarks.point_count == 17 + 5 + 5 + 4 + 5 + 6 + 6 + 12 + 8


def test_small_model_yields_partial_landmarks():
    raw = {'nose_tip': [(50, 150)], 'left_eye': [(30, 120), (35, 120)], 'right_eye': [(70, 120), (65, 120)]}
    landmarks = to_face_landmarks(raw, Rect(0, 100, 100, 100))
    assert [r.name for r in landmarks.present_regions()] == ['left_eye', 'right_eye', 'nose']
    assert landmarks.get('nose').points == (Point(0.5, 0.5),)


def test_detector_converts_locations(monkeypatch):
    calls = {}

    def fake_locations(image, number_of_times_to_upsample, model):
        calls['shape'] = image.shape
        calls['model'] = model
        return [(100, 100, 200, 0)]  # top, right, bottom, left

    def fake_landmarks(image, face_locations, model):
        return [_raw_landmarks()]

    monkeypatch.setattr(detection.face_recognition, 'face_locations', fake_locations)
    monkeypatch.setattr(detection.face_recognition, 'face_landmarks', fake_landmarks)

    frame = np.zeros((400, 200, 3), dtype=np.uint8)
    faces = FaceLandmarkDetector(model='hog').detect(frame)

    assert calls == {'shape': (400, 200, 3), 'model': 'hog'}
    assert len(faces) == 1
    assert faces[0].bounding_box == pytest.approx((0.0, 0.5, 0.5, 0.25))
    assert faces[0].has_landmarks


def test_detector_without_faces(monkeypatch):
    monkeypatch.setattr(detection.face_recognition, 'face_locations', lambda *a, **k: [])
    assert FaceLandmarkDetector().detect(np.zeros((10, 10, 3), dtype=np.uint8)) == []


def test_detector_rejects_empty_frame():
    with pytest.raises(ValueError):
        FaceLandmarkDetector().detect(np.zeros((0, 0, 3), dtype=np.uint8))
