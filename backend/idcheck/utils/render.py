"""Draw overlay shapes onto a frame with OpenCV.

Used for the annotated preview only; clients normally draw the shapes
themselves.
"""

from typing import Iterable

import cv2
import numpy as np

from ..models.overlay import Color, OverlayShape, ShapeKind

FONT = cv2.FONT_HERSHEY_SIMPLEX
FONT_SCALE = 0.6


def _bgr(color: Color):
    r, g, b = color
    return (int(b), int(g), int(r))


def _thickness(width: float) -> int:
    return max(1, int(round(width)))


def _draw_rect(canvas: np.ndarray, shape: OverlayShape, filled: bool = False):
    rect = shape.rect
    top_left = (int(round(rect.min_x)), int(round(rect.min_y)))
    bottom_right = (int(round(rect.max_x)), int(round(rect.max_y)))
    thickness = -1 if filled else _thickness(shape.style.line_width)
    cv2.rectangle(canvas, top_left, bottom_right, _bgr(shape.style.color), thickness)


def _draw_text(canvas: np.ndarray, shape: OverlayShape, color: Color):
    rect = shape.rect
    (_, text_height), baseline = cv2.getTextSize(shape.text, FONT, FONT_SCALE, 1)
    # vertically centre the text inside its rect
    origin = (
        int(round(rect.min_x)),
        int(round(rect.min_y + 0.5 * (rect.height + text_height))) - baseline // 2,
    )
    cv2.putText(canvas, shape.text, origin, FONT, FONT_SCALE, _bgr(color), 1, cv2.LINE_AA)


def _draw_polyline(canvas: np.ndarray, shape: OverlayShape):
    if not shape.points:
        return
    pts = np.array([[p.x, p.y] for p in shape.points], dtype=np.float32)
    pts = np.round(pts).astype(np.int32).reshape(-1, 1, 2)
    cv2.polylines(canvas, [pts], shape.closed, _bgr(shape.style.color), _thickness(shape.style.line_width), cv2.LINE_AA)


def draw_overlay(frame: np.ndarray, shapes: Iterable[OverlayShape]) -> np.ndarray:
    """Return a copy of ``frame`` (BGR) with ``shapes`` drawn back to front.

    Shape opacity is honoured by blending each shape's layer onto the frame.
    """
    canvas = frame.copy()
    for shape in shapes:
        layer = canvas.copy()
        if shape.kind in (ShapeKind.GUIDE_BOX, ShapeKind.CARD_BOX, ShapeKind.FACE_BOX):
            _draw_rect(layer, shape)
        elif shape.kind == ShapeKind.GUIDE_LABEL:
            _draw_text(layer, shape, shape.style.color)
        elif shape.kind == ShapeKind.ALERT_BANNER:
            _draw_rect(layer, shape, filled=True)
            _draw_text(layer, shape, (255, 255, 255))
        elif shape.kind == ShapeKind.LANDMARK_POLYLINE:
            _draw_polyline(layer, shape)

        alpha = float(shape.style.opacity)
        if alpha >= 1.0:
            canvas = layer
        else:
            canvas = cv2.addWeighted(layer, alpha, canvas, 1.0 - alpha, 0)
    return canvas
