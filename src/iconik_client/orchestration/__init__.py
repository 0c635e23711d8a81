"""
Upload Orchestration Module

The multi-step "create an asset and upload a file" workflow built on top of
the Iconik client and the object-store transfer helpers.
"""

from iconik_client.orchestration.asset_upload import (
    finish_upload,
    make_new_asset,
    upload_file,
)

__all__ = [
    "finish_upload",
    "make_new_asset",
    "upload_file",
]
