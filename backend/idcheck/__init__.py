"""
Identity check backend

Guides a user from an identity card to a live selfie:
- Card and face guide boxes, text and face boxes as overlay descriptors
- Facial landmarks from face_recognition, normalized per face box
- Landmark-geometry comparison of the live face against the card face
- FastAPI routes driving the card -> face -> matched flow
"""

__version__ = "1.0.0"
