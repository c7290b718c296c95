"""Plain geometry value types shared by the mapper, matcher and overlay builder.

Normalized values use the detector convention: components in [0, 1] with the
origin at the bottom-left. Pixel values use the screen convention with the
origin at the top-left. The same types carry both; the functions in
``idcheck.core.coordinates`` convert between them.
"""

from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


# Detector output; kept as an alias so signatures read like the data they take.
NormalizedPoint = Point


class Size(NamedTuple):
    width: float
    height: float


class Rect(NamedTuple):
    """Axis-aligned rectangle.

    ``(x, y)`` is the bottom-left corner in normalized space and the top-left
    corner in pixel space.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)
