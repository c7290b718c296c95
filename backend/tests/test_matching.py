import pytest

from idcheck.core.matching import (
    MATCH_THRESHOLD,
    ComparisonUnavailableError,
    compare,
    is_match,
    score,
)
from idcheck.models.landmarks import FaceLandmarks

from conftest import make_landmarks


def _cluster(point, count=10):
    return FaceLandmarks.from_mapping({'face_contour': [point] * count})


def test_identical_landmarks_score_zero(landmarks):
    assert score(landmarks, landmarks) == 0.0
    assert is_match(0.0)


def test_uniform_translation():
    dx, dy = 0.01, -0.02
    current = make_landmarks((dx, dy))
    reference = make_landmarks()
    expected = reference.point_count * (dx * dx + dy * dy)
    assert score(current, reference) == pytest.approx(expected)


def test_score_is_symmetric():
    a = make_landmarks((0.03, 0.0))
    b = make_landmarks((0.0, 0.05))
    assert score(a, b) == score(b, a)


def test_contour_points_dominate():
    # every point counts once, so the 4-point contour outweighs the 3-point nose
    reference = make_landmarks()
    mapping = {r.name: list(r.points) for r in reference.present_regions()}
    moved_contour = dict(mapping, face_contour=[(x + 0.1, y) for x, y in mapping['face_contour']])
    moved_nose = dict(mapping, nose=[(x + 0.1, y) for x, y in mapping['nose']])
    assert score(FaceLandmarks.from_mapping(moved_contour), reference) > \
        score(FaceLandmarks.from_mapping(moved_nose), reference)


def test_same_point_cluster_matches():
    assert compare(_cluster((0.5, 0.5)), _cluster((0.5, 0.5))).matched


def test_threshold_is_strict():
    value = score(_cluster((0.6, 0.5)), _cluster((0.5, 0.5)))
    assert value == pytest.approx(0.1)
    assert not is_match(MATCH_THRESHOLD)
    assert is_match(MATCH_THRESHOLD - 1e-6)


def test_missing_landmarks_are_unavailable(landmarks):
    with pytest.raises(ComparisonUnavailableError):
        score(None, landmarks)
    with pytest.raises(ComparisonUnavailableError):
        score(landmarks, FaceLandmarks())
    assert compare(landmarks, None) is None


def test_length_mismatch_is_unavailable(landmarks):
    fewer = FaceLandmarks.from_mapping({'nose': [(0.5, 0.5)]})
    with pytest.raises(ComparisonUnavailableError):
        score(landmarks, fewer)
    assert compare(landmarks, fewer) is None


def test_compare_reports_score():
    decision = compare(make_landmarks((0.5, 0.0)), make_landmarks())
    assert decision.score == pytest.approx(13 * 0.25)
    assert not decision.matched


def test_same_count_from_different_regions_is_unavailable():
    eye = [(0.3, 0.7), (0.35, 0.72), (0.4, 0.7)]
    live = FaceLandmarks.from_mapping({'left_eye': eye, 'right_pupil': [(0.7, 0.7)]})
    reference = FaceLandmarks.from_mapping({'left_eye': eye, 'left_pupil': [(0.3, 0.7)]})
    assert len(live.all_points) == len(reference.all_points)
    with pytest.raises(ComparisonUnavailableError):
        score(live, reference)
    assert compare(live, reference) is None


def test_same_regions_with_different_split_is_unavailable():
    live = FaceLandmarks.from_mapping({'nose': [(0.5, 0.5)] * 3, 'left_eye': [(0.3, 0.7)] * 2})
    reference = FaceLandmarks.from_mapping({'nose': [(0.5, 0.5)] * 2, 'left_eye': [(0.3, 0.7)] * 3})
    with pytest.raises(ComparisonUnavailableError):
        score(live, reference)


def test_layout_lists_present_regions_in_order(landmarks):
    assert landmarks.layout == (('face_contour', 4), ('left_eye', 3), ('right_eye', 3), ('nose', 3))
