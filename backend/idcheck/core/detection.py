"""Face and landmark detection.

Wraps ``face_recognition`` (dlib) and converts its output into
``FaceObservation`` values: bounding boxes normalized against the image,
landmark points normalized against their face box, origin bottom-left.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import cv2
import face_recognition
import numpy as np

from .. import config
from ..models.geometry import Point, Rect, Size
from ..models.landmarks import (
    FACE_CONTOUR,
    INNER_LIPS,
    LEFT_EYE,
    LEFT_EYEBROW,
    NOSE,
    NOSE_CREST,
    OUTER_LIPS,
    RIGHT_EYE,
    RIGHT_EYEBROW,
    FaceLandmarks,
    FaceObservation,
    LandmarkRegion,
)
from .coordinates import to_normalized_space

logger = logging.getLogger(__name__)

# face_recognition region -> our region
DIRECT_REGIONS = {
    'chin': FACE_CONTOUR,
    'left_eye': LEFT_EYE,
    'right_eye': RIGHT_EYE,
    'left_eyebrow': LEFT_EYEBROW,
    'right_eyebrow': RIGHT_EYEBROW,
    'nose_bridge': NOSE_CREST,
    'nose_tip': NOSE,
}

# Lip points as laid out by face_recognition's 68-point model:
# top_lip    = p48..p54, p64, p63, p62, p61, p60
# bottom_lip = p54..p59, p48, p60, p67, p66, p65, p64
LIP_POINT_COUNT = 12


class FaceDetectionError(Exception):
    """Base exception for face detection errors."""
    pass


class LandmarkExtractionError(FaceDetectionError):
    """Exception raised when landmarks cannot be read for a detected face."""
    pass


def split_lips(top_lip: Sequence[Tuple[int, int]], bottom_lip: Sequence[Tuple[int, int]]) -> Dict[str, List[Tuple[int, int]]]:
    """Rebuild outer and inner lip contours from face_recognition's top/bottom lips.

    Returns:
        Mapping with ``outer_lips`` (12 points) and ``inner_lips`` (8 points),
        each ordered around the contour.

    Raises:
        LandmarkExtractionError: If either lip does not have 12 points.
    """
    if len(top_lip) != LIP_POINT_COUNT or len(bottom_lip) != LIP_POINT_COUNT:
        raise LandmarkExtractionError(
            f"Unexpected lip layout: {len(top_lip)} top / {len(bottom_lip)} bottom points"
        )
    outer = list(top_lip[:7]) + list(bottom_lip[1:6])
    inner = list(reversed(top_lip[7:12])) + list(reversed(bottom_lip[8:11]))
    return {OUTER_LIPS: outer, INNER_LIPS: inner}


def _normalize_in_box(point: Tuple[float, float], box: Rect) -> Point:
    return to_normalized_space(Point(point[0] - box.x, point[1] - box.y), box.size)


def to_face_landmarks(raw: Dict[str, Sequence[Tuple[int, int]]], face_box: Rect) -> FaceLandmarks:
    """Convert one face_recognition landmark dict into ``FaceLandmarks``.

    Args:
        raw: Output of ``face_recognition.face_landmarks`` for one face.
        face_box: The face bounding box in image pixels (top-left origin).

    Returns:
        Landmarks normalized against ``face_box``. Regions the model does not
        provide (pupils, median line) are absent.
    """
    regions: Dict[str, LandmarkRegion] = {}
    pixel_regions: Dict[str, Sequence[Tuple[int, int]]] = {}

    for source, target in DIRECT_REGIONS.items():
        if source in raw and raw[source]:
            pixel_regions[target] = raw[source]

    if 'top_lip' in raw and 'bottom_lip' in raw:
        try:
            pixel_regions.update(split_lips(raw['top_lip'], raw['bottom_lip']))
        except LandmarkExtractionError as e:
            logger.warning(f"Skipping lips: {str(e)}")

    for name, points in pixel_regions.items():
        regions[name] = LandmarkRegion.from_points(
            name, [_normalize_in_box(p, face_box) for p in points]
        )
    return FaceLandmarks(regions=regions)


class FaceLandmarkDetector:
    """Detects faces and their landmarks in BGR frames."""

    def __init__(
        self,
        model: str = config.FACE_DETECTION_MODEL,
        upsample: int = config.FACE_DETECTION_UPSAMPLE,
        landmark_model: str = config.LANDMARK_MODEL,
    ):
        self.model = model
        self.upsample = upsample
        self.landmark_model = landmark_model

    def detect(self, image: np.ndarray) -> List[FaceObservation]:
        """Detect every face in the frame.

        Args:
            image: Frame in BGR format.

        Returns:
            One observation per face; empty when no face is found.

        Raises:
            ValueError: If the frame is missing or empty.
        """
        if image is None or image.size == 0:
            raise ValueError("Input image is empty")

        height, width = image.shape[:2]
        image_size = Size(width, height)

        # face_recognition expects RGB
        rgb_image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        locations = face_recognition.face_locations(
            rgb_image,
            number_of_times_to_upsample=self.upsample,
            model=self.model,
        )
        if not locations:
            return []

        raw_landmarks = face_recognition.face_landmarks(
            rgb_image,
            face_locations=locations,
            model=self.landmark_model,
        )

        observations = []
        for (top, right, bottom, left), raw in zip(locations, raw_landmarks):
            face_box = Rect(x=left, y=top, width=right - left, height=bottom - top)
            if face_box.width <= 0 or face_box.height <= 0:
                logger.warning(f"Skipping degenerate face box {face_box}")
                continue
            observations.append(FaceObservation(
                bounding_box=to_normalized_space(face_box, image_size),
                landmarks=to_face_landmarks(raw, face_box),
            ))

        logger.debug(f"Detected {len(observations)} face(s) in {width}x{height} frame")
        return observations


_detector: Optional[FaceLandmarkDetector] = None


def get_detector() -> FaceLandmarkDetector:
    """Shared detector instance."""
    global _detector
    if _detector is None:
        _detector = FaceLandmarkDetector()
    return _detector
