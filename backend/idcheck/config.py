"""Service settings, read from the environment."""
import os

HOST = os.getenv("IDCHECK_HOST", "0.0.0.0")
PORT = int(os.getenv("IDCHECK_PORT", "3002"))
LOG_LEVEL = os.getenv("IDCHECK_LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("IDCHECK_CORS_ORIGINS", "*").split(",") if o.strip()]

# "hog" is fast on CPU, "cnn" is more accurate and wants a GPU
FACE_DETECTION_MODEL = os.getenv("IDCHECK_FACE_MODEL", "hog")
FACE_DETECTION_UPSAMPLE = int(os.getenv("IDCHECK_UPSAMPLE", "1"))
# "large" = 68 points, "small" = 5 points (eyes and nose only)
LANDMARK_MODEL = os.getenv("IDCHECK_LANDMARK_MODEL", "large")

# Quality of the annotated preview returned by /api/frame
PREVIEW_JPEG_QUALITY = int(os.getenv("IDCHECK_PREVIEW_JPEG_QUALITY", "85"))
