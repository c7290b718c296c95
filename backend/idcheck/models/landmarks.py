"""Facial landmark model.

A face is described by named landmark regions (eyes, brows, nose, lips,
contour), each an ordered sequence of points normalized against the face
bounding box with the origin at the bottom-left. Every region is optional:
detectors differ in what they report, and a missing region is skipped rather
than treated as an error.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

import numpy as np

from .geometry import Point, Rect

FACE_CONTOUR = "face_contour"
LEFT_EYE = "left_eye"
RIGHT_EYE = "right_eye"
LEFT_EYEBROW = "left_eyebrow"
RIGHT_EYEBROW = "right_eyebrow"
NOSE = "nose"
NOSE_CREST = "nose_crest"
MEDIAN_LINE = "median_line"
OUTER_LIPS = "outer_lips"
INNER_LIPS = "inner_lips"
LEFT_PUPIL = "left_pupil"
RIGHT_PUPIL = "right_pupil"

# (name, closed) in the order used to build ``FaceLandmarks.all_points``.
REGION_CATALOGUE: Tuple[Tuple[str, bool], ...] = (
    (FACE_CONTOUR, False),
    (LEFT_EYE, True),
    (RIGHT_EYE, True),
    (LEFT_EYEBROW, False),
    (RIGHT_EYEBROW, False),
    (NOSE, False),
    (NOSE_CREST, False),
    (MEDIAN_LINE, False),
    (OUTER_LIPS, True),
    (INNER_LIPS, True),
    (LEFT_PUPIL, True),
    (RIGHT_PUPIL, True),
)

REGION_NAMES: Tuple[str, ...] = tuple(name for name, _ in REGION_CATALOGUE)
CLOSED_REGIONS = frozenset(name for name, closed in REGION_CATALOGUE if closed)


class UnknownRegionError(ValueError):
    """Raised when a landmark region name is not in the catalogue."""
    pass


@dataclass(frozen=True)
class LandmarkRegion:
    name: str
    points: Tuple[Point, ...]
    closed: bool = False

    @classmethod
    def from_points(cls, name: str, points: Iterable[Sequence[float]]) -> "LandmarkRegion":
        """Build a region, taking ``closed`` from the catalogue.

        Raises:
            UnknownRegionError: If ``name`` is not a known region.
        """
        if name not in REGION_NAMES:
            raise UnknownRegionError(f"Unknown landmark region: {name}")
        return cls(
            name=name,
            points=tuple(Point(float(p[0]), float(p[1])) for p in points),
            closed=name in CLOSED_REGIONS,
        )

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class FaceLandmarks:
    """Landmark regions of one face, keyed by region name."""

    regions: Mapping[str, LandmarkRegion] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[Sequence[float]]]) -> "FaceLandmarks":
        regions: Dict[str, LandmarkRegion] = {}
        for name, points in mapping.items():
            region = LandmarkRegion.from_points(name, points)
            if len(region):
                regions[name] = region
        return cls(regions=regions)

    def get(self, name: str) -> Optional[LandmarkRegion]:
        return self.regions.get(name)

    def present_regions(self) -> Iterator[LandmarkRegion]:
        """Yield present, non-empty regions in catalogue order."""
        for name in REGION_NAMES:
            region = self.regions.get(name)
            if region is not None and len(region):
                yield region

    @property
    def all_points(self) -> np.ndarray:
        """Every present region's points concatenated in catalogue order, shape (N, 2)."""
        points = [p for region in self.present_regions() for p in region.points]
        if not points:
            return np.zeros((0, 2), dtype=np.float64)
        return np.asarray(points, dtype=np.float64)

    @property
    def layout(self) -> Tuple[Tuple[str, int], ...]:
        """(region name, point count) for each present region, in catalogue order.

        Two sets with equal layouts correspond index-for-index in ``all_points``.
        """
        return tuple((region.name, len(region)) for region in self.present_regions())

    @property
    def point_count(self) -> int:
        return sum(len(region) for region in self.present_regions())


@dataclass(frozen=True)
class FaceObservation:
    """One detected face: a normalized bounding box and, if available, its landmarks."""

    bounding_box: Rect
    landmarks: Optional[FaceLandmarks] = None

    @property
    def has_landmarks(self) -> bool:
        return self.landmarks is not None and self.landmarks.point_count > 0
