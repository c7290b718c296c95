"""Overlay shape descriptors.

Shapes carry pixel-space geometry and a style; they say nothing about how to
draw. A renderer (``idcheck.utils.render`` or a client UI) turns them into
pixels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .geometry import Point, Rect

Color = Tuple[int, int, int]  # RGB

WHITE: Color = (255, 255, 255)
YELLOW: Color = (255, 255, 0)
GREEN: Color = (0, 255, 0)
RED: Color = (255, 0, 0)


class ShapeKind(str, Enum):
    GUIDE_BOX = "guide_box"
    GUIDE_LABEL = "guide_label"
    CARD_BOX = "card_box"
    FACE_BOX = "face_box"
    LANDMARK_POLYLINE = "landmark_polyline"
    ALERT_BANNER = "alert_banner"


@dataclass(frozen=True)
class Style:
    color: Color
    line_width: float = 2.0
    opacity: float = 1.0
    corner_radius: float = 0.0


GUIDE_STYLE = Style(color=WHITE, line_width=3.0, opacity=0.75, corner_radius=10.0)
LABEL_STYLE = Style(color=WHITE, line_width=1.0)
BOX_STYLE = Style(color=YELLOW, line_width=2.0, opacity=0.75, corner_radius=10.0)
LIVE_LANDMARK_STYLE = Style(color=GREEN, line_width=2.0)
REFERENCE_LANDMARK_STYLE = Style(color=RED, line_width=2.0)
ALERT_STYLE = Style(color=GREEN, line_width=0.0, opacity=0.85, corner_radius=10.0)


@dataclass(frozen=True)
class OverlayShape:
    """A renderable primitive.

    Which optional fields are set depends on ``kind``:

    - boxes, labels and banners use ``rect``; labels and banners also use ``text``
    - polylines use ``points``, ``closed``, ``region`` and ``reference``
    """

    kind: ShapeKind
    style: Style
    rect: Optional[Rect] = None
    points: Tuple[Point, ...] = ()
    closed: bool = False
    text: Optional[str] = None
    region: Optional[str] = None
    reference: bool = False
