"""Verification flow state."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .landmarks import FaceObservation


class Phase(str, Enum):
    CAPTURING_CARD = "capturing_card"
    CAPTURING_FACE = "capturing_face"
    MATCHED = "matched"
    SESSION_ENDED = "session_ended"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of the flow: current phase plus the reference slot."""

    phase: Phase = Phase.CAPTURING_CARD
    reference: Optional[FaceObservation] = None

    @property
    def has_reference(self) -> bool:
        return self.reference is not None
