"""Coordinate mapping between detector space and view space.

Detector output is normalized to [0, 1] with the origin at the bottom-left.
Views are measured in pixels with the origin at the top-left. Mapping is a
vertical flip (y' = 1 - y) followed by a scale by the target size. Inputs
outside [0, 1] are passed through unclamped.
"""

from typing import Union, overload

from ..models.geometry import Point, Rect, Size

# Width/height ratio of an ID-1 identity card.
CARD_ASPECT_RATIO = 1.586
# Fraction of the view width taken by the guide boxes.
GUIDE_WIDTH_FRACTION = 0.9
GUIDE_MARGIN_FRACTION = 0.05


@overload
def to_pixel_space(value: Point, target_size: Size) -> Point: ...
@overload
def to_pixel_space(value: Rect, target_size: Size) -> Rect: ...

def to_pixel_space(value: Union[Point, Rect], target_size: Size) -> Union[Point, Rect]:
    """Map a normalized point or rect into pixel space of ``target_size``.

    Args:
        value: Point or rect in normalized, bottom-left-origin coordinates.
        target_size: Pixel size of the target view or rectangle.

    Returns:
        The same kind of value in top-left-origin pixel coordinates.
    """
    width, height = target_size
    if isinstance(value, Rect):
        return Rect(
            x=value.x * width,
            y=(1.0 - value.y - value.height) * height,
            width=value.width * width,
            height=value.height * height,
        )
    return Point(value.x * width, (1.0 - value.y) * height)


@overload
def to_normalized_space(value: Point, target_size: Size) -> Point: ...
@overload
def to_normalized_space(value: Rect, target_size: Size) -> Rect: ...

def to_normalized_space(value: Union[Point, Rect], target_size: Size) -> Union[Point, Rect]:
    """Inverse of :func:`to_pixel_space`."""
    width, height = target_size
    if isinstance(value, Rect):
        norm_width = value.width / width
        norm_height = value.height / height
        return Rect(
            x=value.x / width,
            y=1.0 - value.y / height - norm_height,
            width=norm_width,
            height=norm_height,
        )
    return Point(value.x / width, 1.0 - value.y / height)


def project_into(point: Point, rect: Rect) -> Point:
    """Map a point normalized against ``rect`` into the view that ``rect`` lives in.

    Landmark points are normalized against the face bounding box, so they go
    through the same flip and scale as :func:`to_pixel_space` but relative to
    the box, then get offset by the box origin.
    """
    local = to_pixel_space(point, rect.size)
    return Point(rect.x + local.x, rect.y + local.y)


def rect_contains(outer: Rect, inner: Rect) -> bool:
    """Return True when ``inner`` lies entirely within ``outer`` (edges inclusive)."""
    return (
        inner.min_x >= outer.min_x
        and inner.max_x <= outer.max_x
        and inner.min_y >= outer.min_y
        and inner.max_y <= outer.max_y
    )


def _centered_guide_box(view_size: Size, height: float) -> Rect:
    width = GUIDE_WIDTH_FRACTION * view_size.width
    x = GUIDE_MARGIN_FRACTION * view_size.width
    y = 0.5 * view_size.height - 0.5 * height
    return Rect(x=x, y=y, width=width, height=height)


def card_guide_box(view_size: Size) -> Rect:
    """Card-shaped guide box, centred, 90% of the view width."""
    width = GUIDE_WIDTH_FRACTION * view_size.width
    return _centered_guide_box(view_size, width / CARD_ASPECT_RATIO)


def face_guide_box(view_size: Size) -> Rect:
    """Square guide box, centred, 90% of the view width."""
    return _centered_guide_box(view_size, GUIDE_WIDTH_FRACTION * view_size.width)
