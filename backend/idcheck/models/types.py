"""Wire payloads of the HTTP API"""
from typing import Dict, List, Optional
from typing_extensions import NotRequired, TypedDict

class Box(TypedDict):
    x: float
    y: float
    width: float
    height: float

class ObservedFace(TypedDict):
    boundingBox: Box
    landmarks: NotRequired[Dict[str, List[List[float]]]]

class FrameRequest(TypedDict):
    image: str
    viewWidth: NotRequired[float]
    viewHeight: NotRequired[float]
    textRegions: NotRequired[List[Box]]
    render: NotRequired[bool]

class ObservationRequest(TypedDict):
    faces: List[ObservedFace]
    viewWidth: float
    viewHeight: float
    textRegions: NotRequired[List[Box]]

class StylePayload(TypedDict):
    color: List[int]
    lineWidth: float
    opacity: float
    cornerRadius: float

class ShapePayload(TypedDict):
    kind: str
    style: StylePayload
    rect: NotRequired[Box]
    points: NotRequired[List[List[float]]]
    closed: NotRequired[bool]
    text: NotRequired[str]
    region: NotRequired[str]
    reference: NotRequired[bool]

class FrameResponse(TypedDict):
    phase: str
    match: Optional[bool]
    score: Optional[float]
    faceCount: int
    canConfirm: bool
    shapes: List[ShapePayload]
    annotatedImage: NotRequired[str]

class SessionStatus(TypedDict):
    phase: str
    hasReference: bool
    faceCount: int

class ErrorResponse(TypedDict):
    error: str
    traceback: Optional[str]
