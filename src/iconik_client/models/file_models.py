"""
Data Models for Assets, Files and Jobs

Covers the asset -> format -> fileset -> file hierarchy used when ingesting
media, the URL listings returned for files, proxies and keyframes, and the
state carried through an upload.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Asset(BaseModel):
    """Asset record returned by ``assets/v1/assets/``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    title: Optional[str] = None
    created_by_user: Optional[str] = None
    status: Optional[str] = None


class Storage(BaseModel):
    """Storage matched for a purpose (e.g. FILES)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    method: Optional[str] = Field(None, description="Storage method, e.g. B2, S3, GCS")
    purpose: Optional[str] = None


class Component(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    type: Optional[str] = None


class Format(BaseModel):
    """Logical representation of an asset (ORIGINAL, PPRO_PROXY, ...)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    components: List[Component] = Field(default_factory=list)


class FileSet(BaseModel):
    """Group of files that make up one format on one storage."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: Optional[str] = None
    format_id: Optional[str] = None
    storage_id: Optional[str] = None
    base_dir: Optional[str] = None


class UploadCredentials(BaseModel):
    """Object-store credentials handed out with a new file record."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    authorization_token: Optional[str] = Field(None, alias="authorizationToken")
    bucket_id: Optional[str] = Field(None, alias="bucketId")


class IconikFileRecord(BaseModel):
    """File record returned by ``files/v1/assets/{asset_id}/files/``."""

    model_config = ConfigDict(extra="ignore")

    id: str
    original_name: Optional[str] = None
    status: Optional[str] = None
    upload_url: Optional[str] = None
    upload_filename: Optional[str] = None
    upload_credentials: Optional[UploadCredentials] = None


class MultipartUploadStart(BaseModel):
    """Large-file session opened on the object store."""

    model_config = ConfigDict(extra="ignore")

    file_id: str
    upload_url: str
    authorization_token: str


class Job(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    status: Optional[str] = None
    type: Optional[str] = None


class UrlObject(BaseModel):
    """Entry of a file, proxy or keyframe listing."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None


class UrlListResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    objects: List[UrlObject] = Field(default_factory=list)

    @field_validator("objects", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class DownloadUrlResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str


class NewAssetUpload(BaseModel):
    """
    State of an upload between creating the asset and closing it out.

    Produced by ``make_new_asset``; the transfer step fills in
    ``sha1_list`` for multipart uploads, and ``finish_upload`` consumes it.
    An empty ``multipart_file_id`` means a single-part upload.
    """

    asset_id: str
    collection_id: str
    storage_id: str
    format_id: str
    fileset_id: str
    file_id: str
    job_id: str = ""

    upload_url: str
    upload_auth_token: str
    upload_filename: str
    mime_type: str
    file_size: int
    file_date_created: Optional[datetime] = None

    multipart_file_id: str = ""
    sha1_list: List[str] = Field(default_factory=list)

    @property
    def is_multipart(self) -> bool:
        return bool(self.multipart_file_id)

    def summary(self) -> Dict[str, Any]:
        """Identifiers worth logging; leaves out the upload token."""
        return self.model_dump(
            include={"asset_id", "format_id", "fileset_id", "file_id", "job_id", "multipart_file_id"}
        )
