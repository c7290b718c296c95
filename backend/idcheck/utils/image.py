"""Image processing utilities.

This module provides utility functions for moving camera frames in and out
of the API as base64 strings.
"""

import cv2
import numpy as np
import base64

class ImageProcessingError(Exception):
    """Base exception for image processing errors."""
    pass

class ImageDecodingError(ImageProcessingError):
    """Exception raised when image decoding fails."""
    pass

class ImageFormatError(ImageProcessingError):
    """Exception raised when image format is invalid."""
    pass

class ImageEncodingError(ImageProcessingError):
    """Exception raised when an image cannot be encoded."""
    pass

def decode_base64_image(base64_string: str) -> np.ndarray:
    """Decode base64 string to OpenCV image.

    Args:
        base64_string: Base64 encoded image string, optionally with data URL prefix.
            Example formats:
            - "data:image/jpeg;base64,/9j/4AAQSkZ..."
            - "/9j/4AAQSkZ..." (without prefix)

    Returns:
        Decoded image as numpy array in BGR format.

    Raises:
        ImageDecodingError: If base64 decoding fails.
        ImageFormatError: If decoded data cannot be read as an image.
    """
    try:
        # Remove data URL prefix if present
        if ';base64,' in base64_string:
            base64_string = base64_string.split(';base64,')[1]
        elif ',' in base64_string:
            base64_string = base64_string.split(',')[1]

        try:
            image_bytes = base64.b64decode(base64_string)
        except Exception as e:
            raise ImageDecodingError(f"Failed to decode base64 string: {str(e)}")

        nparr = np.frombuffer(image_bytes, np.uint8)
        if nparr.size == 0:
            raise ImageFormatError("Empty image data")

        image = cv2.imdecode(nparr, cv2.IMREAD_COLOR)
        if image is None:
            raise ImageFormatError("Failed to decode image data")

        return image

    except ImageProcessingError:
        raise
    except Exception as e:
        raise ImageProcessingError(f"Unexpected error processing image: {str(e)}")

def encode_base64_image(image: np.ndarray, quality: int = 85) -> str:
    """Encode an OpenCV image as a base64 JPEG data URL.

    Args:
        image: Image in BGR format.
        quality: JPEG quality (0-100).

    Returns:
        "data:image/jpeg;base64,..." string.

    Raises:
        ImageEncodingError: If OpenCV cannot encode the image.
    """
    ok, buffer = cv2.imencode('.jpg', image, [cv2.IMWRITE_JPEG_QUALITY, int(quality)])
    if not ok:
        raise ImageEncodingError("Failed to encode image as JPEG")
    return "data:image/jpeg;base64," + base64.b64encode(buffer.tobytes()).decode('ascii')

def resize_to_view(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize a frame to the view size the overlay was built for.

    Returns the frame unchanged when it already has that size.
    """
    if image.shape[1] == width and image.shape[0] == height:
        return image
    return cv2.resize(image, (width, height), interpolation=cv2.INTER_LINEAR)
