"""Core landmark matching and overlay geometry"""
from .coordinates import (
    to_pixel_space,
    to_normalized_space,
    rect_contains,
    card_guide_box,
    face_guide_box
)
from .matching import (
    score,
    is_match,
    compare,
    ComparisonUnavailableError,
    MATCH_THRESHOLD
)
from .overlay import build_overlay
from .session import (
    VerificationSession,
    FrameResult,
    ConfirmationUnavailableError,
    PhaseTransitionError
)

__all__ = [
    'to_pixel_space',
    'to_normalized_space',
    'rect_contains',
    'card_guide_box',
    'face_guide_box',
    'score',
    'is_match',
    'compare',
    'ComparisonUnavailableError',
    'MATCH_THRESHOLD',
    'build_overlay',
    'VerificationSession',
    'FrameResult',
    'ConfirmationUnavailableError',
    'PhaseTransitionError'
]
