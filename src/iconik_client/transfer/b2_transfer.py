"""
Backblaze B2 Transfer

Sends file bytes to the upload URL handed out by Iconik, either as a single
request or, for large files, as numbered parts of a large-file session. Uses
the B2 native upload headers; each request carries the SHA-1 of its body.
"""

import hashlib
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple
from urllib.parse import quote

import httpx

from ..models.file_models import NewAssetUpload

logger = logging.getLogger(__name__)

# Files larger than this are uploaded in parts of this size.
MULTIPART_FILESIZE_THRESHOLD = 100 * 1024 * 1024

DEFAULT_UPLOAD_TIMEOUT = 300.0


class TransferError(Exception):
    """Object store rejected an upload request."""

    def __init__(self, status_code: int, body: str, part_number: Optional[int] = None):
        self.status_code = status_code
        self.body = body
        self.part_number = part_number
        where = f" (part {part_number})" if part_number else ""
        super().__init__(f"Bad status during upload{where}: {status_code} because {body}")


def iter_parts(path: Path, part_size: int = MULTIPART_FILESIZE_THRESHOLD) -> Iterator[Tuple[int, bytes]]:
    """Yield ``(part_number, chunk)`` pairs, numbered from 1."""
    with open(path, "rb") as f:
        part_number = 1
        while True:
            chunk = f.read(part_size)
            if not chunk:
                break
            yield part_number, chunk
            part_number += 1


def _sha1_hex(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def _ensure_ok(response: httpx.Response, part_number: Optional[int] = None) -> None:
    if response.status_code != httpx.codes.OK:
        raise TransferError(response.status_code, response.text, part_number)


def upload_single(nau: NewAssetUpload, path: Path, http: httpx.Client) -> None:
    """
    Upload a whole file in one request.

    Args:
        nau: Upload state holding the URL, token, filename and MIME type
        path: Local file
        http: HTTP client used for the object-store request
    """
    data = Path(path).read_bytes()
    headers = {
        "Authorization": nau.upload_auth_token,
        "X-Bz-File-Name": quote(nau.upload_filename, safe=""),
        "X-Bz-Content-Sha1": _sha1_hex(data),
        "Content-Type": nau.mime_type,
    }
    logger.info(f"Uploading {len(data)} bytes to {nau.upload_url}")
    response = http.post(nau.upload_url, content=data, headers=headers)
    _ensure_ok(response)


def upload_multipart(
    nau: NewAssetUpload,
    path: Path,
    http: httpx.Client,
    part_size: int = MULTIPART_FILESIZE_THRESHOLD,
) -> List[str]:
    """
    Upload a file as consecutive parts of a large-file session.

    The ``contentSha1`` the store reports for each part is collected, in part
    order, into ``nau.sha1_list`` for the finish call.

    Returns:
        The collected SHA-1 list
    """
    shas: List[str] = []
    for part_number, chunk in iter_parts(path, part_size):
        headers = {
            "Authorization": nau.upload_auth_token,
            "X-Bz-Part-Number": str(part_number),
            "Content-Length": str(len(chunk)),
            "X-Bz-Content-Sha1": _sha1_hex(chunk),
        }
        logger.info(f"Uploading part {part_number} ({len(chunk)} bytes)")
        response = http.post(nau.upload_url, content=chunk, headers=headers)
        _ensure_ok(response, part_number)
        try:
            shas.append(response.json()["contentSha1"])
        except (ValueError, KeyError, TypeError):
            raise TransferError(response.status_code, response.text, part_number)

    nau.sha1_list = shas
    logger.info(f"Uploaded {len(shas)} parts")
    return shas


def transfer_file(
    nau: NewAssetUpload,
    path: Path,
    http: Optional[httpx.Client] = None,
    part_size: int = MULTIPART_FILESIZE_THRESHOLD,
) -> None:
    """Upload ``path`` single-part or multipart, as ``nau`` dictates."""
    own_client = http is None
    if own_client:
        http = httpx.Client(timeout=DEFAULT_UPLOAD_TIMEOUT)
    try:
        if nau.is_multipart:
            upload_multipart(nau, path, http, part_size)
        else:
            upload_single(nau, path, http)
    finally:
        if own_client:
            http.close()
