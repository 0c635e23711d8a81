"""
Data Models for the Iconik Client

Pydantic models mirroring the JSON bodies exchanged with the Iconik API.
"""

from .errors import ErrorResponse, IconikError, UNPARSABLE_ERROR_MESSAGE
from .file_models import (
    Asset,
    Component,
    DownloadUrlResponse,
    FileSet,
    Format,
    IconikFileRecord,
    Job,
    MultipartUploadStart,
    NewAssetUpload,
    Storage,
    UploadCredentials,
    UrlListResponse,
    UrlObject,
)
from .search_models import (
    CollectionID,
    FilterTerm,
    IconikFile,
    IconikObject,
    IconikProxy,
    SearchCriteria,
    SearchFilter,
    SearchResponse,
)

__all__ = [
    "ErrorResponse",
    "IconikError",
    "UNPARSABLE_ERROR_MESSAGE",
    "Asset",
    "Component",
    "DownloadUrlResponse",
    "FileSet",
    "Format",
    "IconikFileRecord",
    "Job",
    "MultipartUploadStart",
    "NewAssetUpload",
    "Storage",
    "UploadCredentials",
    "UrlListResponse",
    "UrlObject",
    "CollectionID",
    "FilterTerm",
    "IconikFile",
    "IconikObject",
    "IconikProxy",
    "SearchCriteria",
    "SearchFilter",
    "SearchResponse",
]
