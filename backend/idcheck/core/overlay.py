"""Overlay descriptor builder.

Builds the complete list of shapes to render for one frame. Nothing is kept
between frames: each call replaces the previous overlay entirely.
"""

from typing import List, Optional, Sequence

from ..models.geometry import Rect, Size
from ..models.landmarks import FaceLandmarks, FaceObservation
from ..models.overlay import (
    ALERT_STYLE,
    BOX_STYLE,
    GUIDE_STYLE,
    LABEL_STYLE,
    LIVE_LANDMARK_STYLE,
    REFERENCE_LANDMARK_STYLE,
    OverlayShape,
    ShapeKind,
)
from ..models.session import Phase
from .coordinates import card_guide_box, face_guide_box, project_into, rect_contains, to_pixel_space

CARD_CAPTION = "Fit your identity card in the box"
FACE_CAPTION = "Make sure the yellow square is inside the white"
MATCH_MESSAGE = "Face matches the identity card"

CAPTION_HEIGHT = 25.0
CAPTION_INSET = 10.0
BANNER_HEIGHT_FRACTION = 0.1


def _guide_shapes(guide: Rect, caption: str) -> List[OverlayShape]:
    label_rect = Rect(
        x=guide.x + CAPTION_INSET,
        y=guide.max_y,
        width=guide.width,
        height=CAPTION_HEIGHT,
    )
    return [
        OverlayShape(kind=ShapeKind.GUIDE_BOX, style=GUIDE_STYLE, rect=guide),
        OverlayShape(kind=ShapeKind.GUIDE_LABEL, style=LABEL_STYLE, rect=label_rect, text=caption),
    ]


def landmark_polylines(landmarks: Optional[FaceLandmarks], face_box: Rect, reference: bool = False) -> List[OverlayShape]:
    """One polyline per present region, projected into ``face_box`` (pixels).

    Absent or empty regions are skipped.
    """
    if landmarks is None:
        return []
    style = REFERENCE_LANDMARK_STYLE if reference else LIVE_LANDMARK_STYLE
    shapes = []
    for region in landmarks.present_regions():
        shapes.append(OverlayShape(
            kind=ShapeKind.LANDMARK_POLYLINE,
            style=style,
            points=tuple(project_into(point, face_box) for point in region.points),
            closed=region.closed,
            region=region.name,
            reference=reference,
        ))
    return shapes


def alert_banner(view_size: Size) -> OverlayShape:
    rect = Rect(x=0.0, y=0.0, width=view_size.width, height=BANNER_HEIGHT_FRACTION * view_size.height)
    return OverlayShape(kind=ShapeKind.ALERT_BANNER, style=ALERT_STYLE, rect=rect, text=MATCH_MESSAGE)


def build_card_overlay(
    faces: Sequence[FaceObservation],
    view_size: Size,
    text_regions: Sequence[Rect] = (),
) -> List[OverlayShape]:
    guide = card_guide_box(view_size)
    shapes = _guide_shapes(guide, CARD_CAPTION)

    for text_rect in text_regions:
        text_box = to_pixel_space(text_rect, view_size)
        if rect_contains(guide, text_box):
            shapes.append(OverlayShape(kind=ShapeKind.CARD_BOX, style=BOX_STYLE, rect=text_box))

    for face in faces:
        shapes.append(OverlayShape(
            kind=ShapeKind.FACE_BOX,
            style=BOX_STYLE,
            rect=to_pixel_space(face.bounding_box, view_size),
        ))
    return shapes


def build_face_overlay(
    faces: Sequence[FaceObservation],
    view_size: Size,
    reference: Optional[FaceObservation] = None,
    matched: bool = False,
) -> List[OverlayShape]:
    shapes = _guide_shapes(face_guide_box(view_size), FACE_CAPTION)

    for face in faces:
        face_box = to_pixel_space(face.bounding_box, view_size)
        shapes.append(OverlayShape(kind=ShapeKind.FACE_BOX, style=BOX_STYLE, rect=face_box))
        shapes.extend(landmark_polylines(face.landmarks, face_box))
        if reference is not None:
            # Reference landmarks are drawn over the live face for visual comparison.
            shapes.extend(landmark_polylines(reference.landmarks, face_box, reference=True))

    if matched:
        shapes.append(alert_banner(view_size))
    return shapes


def build_overlay(
    phase: Phase,
    faces: Sequence[FaceObservation],
    view_size: Size,
    text_regions: Sequence[Rect] = (),
    reference: Optional[FaceObservation] = None,
    matched: bool = False,
) -> List[OverlayShape]:
    """Build the full overlay for one frame.

    Args:
        phase: Current flow phase.
        faces: Faces detected in this frame, normalized against the image.
        view_size: Pixel size of the view the overlay is drawn on.
        text_regions: Normalized text rectangles; only used while capturing the card.
        reference: Stored reference face, drawn in reference style over live faces.
        matched: Whether the flow has reached a match; adds the alert banner.

    Returns:
        Ordered shapes, back to front.
    """
    if phase == Phase.CAPTURING_CARD:
        return build_card_overlay(faces, view_size, text_regions)
    if phase in (Phase.CAPTURING_FACE, Phase.MATCHED):
        return build_face_overlay(faces, view_size, reference, matched or phase == Phase.MATCHED)
    return []
