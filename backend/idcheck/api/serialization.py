"""Conversions between wire payloads and core types."""

from typing import Iterable, List, Optional, Sequence

from ..core.session import FrameResult, VerificationSession
from ..models.geometry import Rect
from ..models.landmarks import FaceLandmarks, FaceObservation
from ..models.overlay import OverlayShape
from ..models.types import Box, FrameResponse, ObservedFace, SessionStatus, ShapePayload


def box_to_rect(box: Box) -> Rect:
    return Rect(x=float(box['x']), y=float(box['y']), width=float(box['width']), height=float(box['height']))


def rect_to_box(rect: Rect) -> Box:
    return {'x': rect.x, 'y': rect.y, 'width': rect.width, 'height': rect.height}


def text_regions_from(boxes: Optional[Sequence[Box]]) -> List[Rect]:
    return [box_to_rect(b) for b in boxes or []]


def faces_from(observed: Iterable[ObservedFace]) -> List[FaceObservation]:
    """Build observations from client-side detector output.

    Raises:
        ValueError: If a landmark region name is unknown.
    """
    faces = []
    for face in observed:
        landmarks = face.get('landmarks')
        faces.append(FaceObservation(
            bounding_box=box_to_rect(face['boundingBox']),
            landmarks=FaceLandmarks.from_mapping(landmarks) if landmarks else None,
        ))
    return faces


def shape_to_payload(shape: OverlayShape) -> ShapePayload:
    payload: ShapePayload = {
        'kind': shape.kind.value,
        'style': {
            'color': list(shape.style.color),
            'lineWidth': shape.style.line_width,
            'opacity': shape.style.opacity,
            'cornerRadius': shape.style.corner_radius,
        },
    }
    if shape.rect is not None:
        payload['rect'] = rect_to_box(shape.rect)
    if shape.points:
        payload['points'] = [[p.x, p.y] for p in shape.points]
        payload['closed'] = shape.closed
        payload['reference'] = shape.reference
    if shape.text is not None:
        payload['text'] = shape.text
    if shape.region is not None:
        payload['region'] = shape.region
    return payload


def frame_response(result: FrameResult) -> FrameResponse:
    return {
        'phase': result.phase.value,
        'match': result.match,
        'score': result.score,
        'faceCount': result.face_count,
        'canConfirm': result.can_confirm,
        'shapes': [shape_to_payload(s) for s in result.shapes],
    }


def session_status(session: VerificationSession) -> SessionStatus:
    state = session.snapshot()
    return {
        'phase': state.phase.value,
        'hasReference': state.has_reference,
        'faceCount': session.current_face_count,
    }
