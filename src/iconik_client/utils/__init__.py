"""
Utility helpers.
"""

from .mime import detect_mime_type

__all__ = ["detect_mime_type"]
