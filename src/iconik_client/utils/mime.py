"""
MIME type detection for uploaded media.
"""

import mimetypes
from pathlib import Path

DEFAULT_MIME_TYPE = "application/octet-stream"

# Platform MIME tables disagree on these; pin what Iconik expects.
VIDEO_MIME_TYPES = {
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".mxf": "application/mxf",
}


def detect_mime_type(path: Path) -> str:
    """Return the MIME type for ``path`` based on its extension."""
    suffix = Path(path).suffix.lower()
    if suffix in VIDEO_MIME_TYPES:
        return VIDEO_MIME_TYPES[suffix]

    ctype, _ = mimetypes.guess_type(str(path))
    return ctype or DEFAULT_MIME_TYPE
