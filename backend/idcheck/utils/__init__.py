"""Utility functions for image processing"""
from .image import (
    decode_base64_image,
    encode_base64_image,
    resize_to_view
)
from .render import draw_overlay

__all__ = [
    'decode_base64_image',
    'encode_base64_image',
    'resize_to_view',
    'draw_overlay'
]
