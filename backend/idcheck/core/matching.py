"""Landmark-based face comparison.

Two faces are compared by the sum of squared Euclidean distances between
corresponding landmark points, in normalized space. No averaging by point
count and no per-region weighting: regions with many points (the face
contour) dominate the score.
"""

import logging
from typing import NamedTuple, Optional

import numpy as np

from ..models.landmarks import FaceLandmarks

logger = logging.getLogger(__name__)

# Strict upper bound: a score equal to the threshold is not a match.
MATCH_THRESHOLD = 0.1


class ComparisonUnavailableError(Exception):
    """Raised when two landmark sets cannot be compared point for point."""
    pass


def score(current: Optional[FaceLandmarks], reference: Optional[FaceLandmarks]) -> float:
    """Sum of squared distances between corresponding landmark points.

    Args:
        current: Landmarks of the live face.
        reference: Landmarks of the stored reference face.

    Returns:
        Dissimilarity score; 0.0 for identical landmark sets.

    Raises:
        ComparisonUnavailableError: If either set is missing or empty, or the
            region layouts differ (different regions present, or a different
            point count within a region).
    """
    if current is None or reference is None:
        raise ComparisonUnavailableError("Landmarks missing on one side of the comparison")

    current_points = current.all_points
    reference_points = reference.all_points
    if len(current_points) == 0 or len(reference_points) == 0:
        raise ComparisonUnavailableError("Landmark set has no points")
    if len(current_points) != len(reference_points):
        raise ComparisonUnavailableError(
            f"Landmark count mismatch: {len(current_points)} vs {len(reference_points)}"
        )
    if current.layout != reference.layout:
        raise ComparisonUnavailableError(
            f"Landmark regions differ: {current.layout} vs {reference.layout}"
        )

    deltas = current_points - reference_points
    return float(np.sum(deltas * deltas))


class MatchDecision(NamedTuple):
    score: float
    matched: bool


def is_match(value: float) -> bool:
    return value < MATCH_THRESHOLD


def compare(current: Optional[FaceLandmarks], reference: Optional[FaceLandmarks]) -> Optional[MatchDecision]:
    """Score and decide in one step.

    Returns:
        The score and decision, or None when no comparison was possible.
    """
    try:
        value = score(current, reference)
    except ComparisonUnavailableError as e:
        logger.debug(f"Comparison skipped: {str(e)}")
        return None
    logger.debug(f"Landmark score: {value:.5f} (threshold {MATCH_THRESHOLD})")
    return MatchDecision(score=value, matched=is_match(value))
