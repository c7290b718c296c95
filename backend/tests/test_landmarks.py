import numpy as np
import pytest

from idcheck.models.landmarks import (
    REGION_NAMES,
    FaceLandmarks,
    FaceObservation,
    LandmarkRegion,
    UnknownRegionError,
)
from idcheck.models.geometry import Point, Rect


def test_closed_flag_comes_from_catalogue():
    assert LandmarkRegion.from_points('left_eye', [(0, 0)]).closed
    assert LandmarkRegion.from_points('outer_lips', [(0, 0)]).closed
    assert not LandmarkRegion.from_points('face_contour', [(0, 0)]).closed
    assert not LandmarkRegion.from_points('nose', [(0, 0)]).closed


def test_unknown_region_is_rejected():
    with pytest.raises(UnknownRegionError):
        LandmarkRegion.from_points('third_eye', [(0, 0)])


def test_all_points_follow_catalogue_order_not_insertion_order():
    landmarks = FaceLandmarks.from_mapping({
        'nose': [(0.5, 0.5)],
        'face_contour': [(0.1, 0.1), (0.2, 0.2)],
    })
    assert REGION_NAMES.index('face_contour') < REGION_NAMES.index('nose')
    np.testing.assert_allclose(landmarks.all_points, [[0.1, 0.1], [0.2, 0.2], [0.5, 0.5]])


def test_empty_regions_are_dropped():
    landmarks = FaceLandmarks.from_mapping({'nose': [], 'left_eye': [(0.3, 0.7)]})
    assert landmarks.get('nose') is None
    assert landmarks.point_count == 1


def test_empty_landmarks_have_no_points():
    assert FaceLandmarks().all_points.shape == (0, 2)
    assert not FaceObservation(Rect(0, 0, 1, 1), FaceLandmarks()).has_landmarks
    assert not FaceObservation(Rect(0, 0, 1, 1)).has_landmarks


def test_points_are_immutable_points():
    region = LandmarkRegion.from_points('nose', [[0.5, 0.25]])
    assert region.points == (Point(0.5, 0.25),)
    with pytest.raises(AttributeError):
        region.points[0].x = 1.0
