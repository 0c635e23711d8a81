"""
Object-store transfer of file bytes.
"""

from .b2_transfer import (
    MULTIPART_FILESIZE_THRESHOLD,
    TransferError,
    iter_parts,
    transfer_file,
    upload_multipart,
    upload_single,
)

__all__ = [
    "MULTIPART_FILESIZE_THRESHOLD",
    "TransferError",
    "iter_parts",
    "transfer_file",
    "upload_multipart",
    "upload_single",
]
