"""Identity check API routes.

This module provides the API endpoints for the card -> face verification
flow: per-frame analysis (server-side or client-side detection) and the
session actions that move the flow between phases.
"""

import logging
import traceback
from fastapi import APIRouter, HTTPException, status
from typing import Dict

from .. import config
from ..core.detection import get_detector
from ..core.session import VerificationSession, ConfirmationUnavailableError, PhaseTransitionError
from ..models.geometry import Size
from ..models.types import (
    FrameRequest,
    FrameResponse,
    ObservationRequest,
    SessionStatus,
    ErrorResponse
)
from ..utils.image import ImageProcessingError, decode_base64_image, encode_base64_image, resize_to_view
from ..utils.render import draw_overlay
from .serialization import faces_from, frame_response, session_status, text_regions_from

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()

# Single flow shared by all requests
session = VerificationSession()


def _internal_error(e: Exception) -> HTTPException:
    error_details: ErrorResponse = {
        'error': str(e),
        'traceback': traceback.format_exc()
    }
    logger.error("Error details:", extra=error_details)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_details
    )


def _view_size(request_data: Dict, default: Size) -> Size:
    width = request_data.get('viewWidth')
    height = request_data.get('viewHeight')
    if width is None and height is None:
        return default
    if width is None or height is None:
        raise ValueError("viewWidth and viewHeight must be given together")
    if width <= 0 or height <= 0:
        raise ValueError("View size must be positive")
    return Size(float(width), float(height))


@router.post("/frame", response_model=FrameResponse)
def analyze_frame(request_data: FrameRequest) -> Dict:
    """Detect faces in a camera frame and run it through the flow.

    Args:
        request_data: Dictionary containing the frame.
            - image: Base64 string of the camera frame
            - viewWidth/viewHeight: Size of the view the overlay is drawn on
              (defaults to the image size)
            - textRegions: Normalized text boxes found by the client
            - render: Also return the frame with the overlay drawn on it

    Returns:
        Dictionary containing frame results:
            - phase: Flow phase after this frame
            - match: True/False when a comparison was made, otherwise null
            - score: Landmark score when a comparison was made
            - faceCount: Number of faces detected
            - canConfirm: Whether the card step can be confirmed now
            - shapes: Overlay shapes, back to front

    Raises:
        HTTPException: If the image cannot be decoded or processing fails
    """
    try:
        image = decode_base64_image(request_data['image'])
        height, width = image.shape[:2]
        view_size = _view_size(request_data, Size(width, height))

        faces = get_detector().detect(image)
        result = session.process_frame(
            faces,
            view_size,
            text_regions=text_regions_from(request_data.get('textRegions'))
        )
        logger.info(
            f"Frame {width}x{height}: {result.face_count} face(s), "
            f"phase={result.phase.value}, match={result.match}"
        )

        response = frame_response(result)
        if request_data.get('render'):
            preview = resize_to_view(image, int(round(view_size.width)), int(round(view_size.height)))
            response['annotatedImage'] = encode_base64_image(
                draw_overlay(preview, result.shapes),
                quality=config.PREVIEW_JPEG_QUALITY
            )
        return response

    except ImageProcessingError as e:
        logger.warning(f"Image processing error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except ValueError as e:
        logger.warning(f"Validation error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        raise _internal_error(e)


@router.post("/observations", response_model=FrameResponse)
def analyze_observations(request_data: ObservationRequest) -> Dict:
    """Run faces detected on the client through the flow.

    Args:
        request_data: Dictionary containing detector output.
            - faces: Normalized bounding boxes and per-region landmark points
            - viewWidth/viewHeight: Size of the view the overlay is drawn on
            - textRegions: Normalized text boxes

    Returns:
        Same shape as /frame, without the annotated image.

    Raises:
        HTTPException: If the observations are malformed
    """
    try:
        view_size = _view_size(request_data, Size(0, 0))
        if view_size.width <= 0 or view_size.height <= 0:
            raise ValueError("viewWidth and viewHeight are required")

        result = session.process_frame(
            faces_from(request_data['faces']),
            view_size,
            text_regions=text_regions_from(request_data.get('textRegions'))
        )
        logger.info(
            f"Observations: {result.face_count} face(s), "
            f"phase={result.phase.value}, match={result.match}"
        )
        return frame_response(result)

    except ValueError as e:
        logger.warning(f"Validation error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        raise _internal_error(e)


@router.get("/session", response_model=SessionStatus)
def get_session() -> Dict:
    """Current phase and whether a reference face is stored."""
    return session_status(session)


@router.post("/session/confirm", response_model=SessionStatus)
def confirm_card() -> Dict:
    """Store the face of the latest frame as reference and switch to face capture.

    Raises:
        HTTPException: 409 if the latest frame does not hold exactly one face
            or the card step is already done
    """
    try:
        session.confirm_card()
    except ConfirmationUnavailableError as e:
        logger.warning(f"Confirmation unavailable: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    return session_status(session)


@router.post("/session/end", response_model=SessionStatus)
def end_session() -> Dict:
    """Stop the face step.

    Raises:
        HTTPException: 409 if the card step is not done or the session already ended
    """
    try:
        session.end()
    except PhaseTransitionError as e:
        logger.warning(f"Cannot end session: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    return session_status(session)


@router.post("/session/reset", response_model=SessionStatus)
def reset_session() -> Dict:
    session.reset()
    return session_status(session)
