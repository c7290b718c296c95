"""Data models and type definitions"""
from .geometry import Point, NormalizedPoint, Size, Rect
from .landmarks import LandmarkRegion, FaceLandmarks, FaceObservation, REGION_NAMES
from .overlay import ShapeKind, Style, OverlayShape
from .session import Phase, SessionState
from .types import Box, FrameRequest, ObservationRequest, ShapePayload, FrameResponse, SessionStatus, ErrorResponse

__all__ = [
    'Point',
    'NormalizedPoint',
    'Size',
    'Rect',
    'LandmarkRegion',
    'FaceLandmarks',
    'FaceObservation',
    'REGION_NAMES',
    'ShapeKind',
    'Style',
    'OverlayShape',
    'Phase',
    'SessionState',
    'Box',
    'FrameRequest',
    'ObservationRequest',
    'ShapePayload',
    'FrameResponse',
    'SessionStatus',
    'ErrorResponse'
]
