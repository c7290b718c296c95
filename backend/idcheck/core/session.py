"""Verification flow: phase state machine and per-frame pipeline.

Phase and reference slot are shared between the per-frame analysis path and
the user actions (confirm, end, reset). All writes happen under one lock and
each frame works on an immutable snapshot, so a frame never sees a
half-updated reference.
"""

import logging
import threading
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from ..models.geometry import Rect, Size
from ..models.landmarks import FaceObservation
from ..models.overlay import OverlayShape
from ..models.session import Phase, SessionState
from .matching import compare
from .overlay import build_overlay

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base exception for verification flow errors."""
    pass


class ConfirmationUnavailableError(SessionError):
    """Raised when the card step cannot be confirmed with the current frame."""
    pass


class PhaseTransitionError(SessionError):
    """Raised when an action is not allowed in the current phase."""
    pass


@dataclass(frozen=True)
class FrameResult:
    shapes: List[OverlayShape]
    phase: Phase
    face_count: int
    can_confirm: bool
    match: Optional[bool] = None  # None: no decision this frame
    score: Optional[float] = None


class VerificationSession:
    """Holds the flow state and runs frames through the core."""

    def __init__(self):
        self._lock = threading.Lock()
        self._state = SessionState()
        self._current_faces: Tuple[FaceObservation, ...] = ()

    def snapshot(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def current_face_count(self) -> int:
        with self._lock:
            return len(self._current_faces)

    def process_frame(
        self,
        faces: Sequence[FaceObservation],
        view_size: Size,
        text_regions: Sequence[Rect] = (),
    ) -> FrameResult:
        """Run one frame: record faces, score against the reference, build the overlay.

        Args:
            faces: Faces detected in this frame.
            view_size: Pixel size of the view the overlay is drawn on.
            text_regions: Normalized text rectangles detected in this frame.

        Returns:
            Shapes to render plus the match decision, if one was made.
        """
        faces = tuple(faces)
        with self._lock:
            self._current_faces = faces
            state = self._state

        decision = None
        # Only a single live face is compared; zero or several faces means no decision.
        if state.phase == Phase.CAPTURING_FACE and state.reference is not None and len(faces) == 1:
            decision = compare(faces[0].landmarks, state.reference.landmarks)

        if decision is not None and decision.matched:
            marked = self._mark_matched(state)
            if marked is None:
                # The flow moved on while scoring; the decision belongs to the old state.
                decision = None
                state = self.snapshot()
            else:
                state = marked

        shapes = build_overlay(
            state.phase,
            faces,
            view_size,
            text_regions=text_regions,
            reference=state.reference,
            matched=state.phase == Phase.MATCHED,
        )
        return FrameResult(
            shapes=shapes,
            phase=state.phase,
            face_count=len(faces),
            can_confirm=state.phase == Phase.CAPTURING_CARD and len(faces) == 1,
            match=decision.matched if decision is not None else None,
            score=decision.score if decision is not None else None,
        )

    def _mark_matched(self, seen: SessionState) -> Optional[SessionState]:
        """Move to MATCHED unless the state changed since ``seen`` was taken.

        Returns:
            The new state, or None when ``seen`` is stale.
        """
        with self._lock:
            if self._state is not seen:
                return None
            self._state = replace(seen, phase=Phase.MATCHED)
            logger.info("Live face matches the reference")
            return self._state

    def confirm_card(self) -> SessionState:
        """Store the single current face as reference and move to face capture.

        Raises:
            ConfirmationUnavailableError: If not capturing the card, or the
                current frame does not hold exactly one face.
        """
        with self._lock:
            if self._state.phase != Phase.CAPTURING_CARD:
                raise ConfirmationUnavailableError(
                    f"Cannot confirm card in phase {self._state.phase.value}"
                )
            if not self._current_faces:
                raise ConfirmationUnavailableError("No face in the current frame")
            if len(self._current_faces) > 1:
                raise ConfirmationUnavailableError(
                    f"{len(self._current_faces)} faces in the current frame, expected one"
                )
            self._state = SessionState(phase=Phase.CAPTURING_FACE, reference=self._current_faces[0])
            self._current_faces = ()
            logger.info("Reference face captured, switching to face capture")
            return self._state

    def end(self) -> SessionState:
        """Stop the face step, with or without a match.

        Raises:
            PhaseTransitionError: If the card step is not done yet, or the
                session already ended. Use :meth:`reset` to start over.
        """
        with self._lock:
            if self._state.phase not in (Phase.CAPTURING_FACE, Phase.MATCHED):
                raise PhaseTransitionError(
                    f"Cannot end session in phase {self._state.phase.value}"
                )
            self._state = replace(self._state, phase=Phase.SESSION_ENDED)
            logger.info("Session ended")
            return self._state

    def reset(self) -> SessionState:
        with self._lock:
            self._state = SessionState()
            self._current_faces = ()
            logger.info("Session reset")
            return self._state
