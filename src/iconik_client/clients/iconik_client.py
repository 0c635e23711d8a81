"""
Iconik API Client

Thin synchronous client for the Iconik REST API. Each public method maps to
a single endpoint: it builds the JSON body, dispatches the request with the
application credentials and decodes the response into our data models.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from ..config import DEFAULT_HOST, IconikConfig
from ..models.errors import IconikError
from ..models.file_models import (
    Asset,
    DownloadUrlResponse,
    FileSet,
    Format,
    IconikFileRecord,
    Job,
    MultipartUploadStart,
    Storage,
    UrlListResponse,
)
from ..models.search_models import CollectionID, SearchCriteria, SearchResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Object-store tokens handed out in file and multipart responses.
REDACTED_KEYS = {"authorizationToken", "authorization_token"}

SEARCH_ENDPOINT = "search/v1/search/"
ASSETS_ENDPOINT = "assets/v1/assets/"
COLLECTION_CONTENTS_TEMPLATE = "assets/v1/collections/{collection_id}/contents/"
MATCHING_STORAGE_TEMPLATE = "files/v1/storages/matching/{purpose}/"
PROXIES_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/proxies/"
PROXY_DOWNLOAD_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/proxies/{proxy_id}/download_url/"
FILES_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/files/"
FILE_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/files/{file_id}/"
KEYFRAMES_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/keyframes/"
FILE_KEYFRAMES_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/files/{file_id}/keyframes/"
FORMATS_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/formats/"
FILESETS_ENDPOINT_TEMPLATE = "files/v1/assets/{asset_id}/file_sets/"
MULTIPART_START_TEMPLATE = "files/v1/assets/{asset_id}/files/{file_id}/multipart/b2/start/"
MULTIPART_FINISH_TEMPLATE = "files/v1/assets/{asset_id}/files/{file_id}/multipart/b2/finish/"
JOBS_ENDPOINT = "jobs/v1/jobs/"
JOB_ENDPOINT_TEMPLATE = "jobs/v1/jobs/{job_id}/"


@dataclass
class Credentials:
    """
    Identification required by the Iconik API.

    ``app_id`` is the application key id you get when generating an
    application key; ``token`` is the string generated alongside it.
    """

    app_id: str
    token: str


class IconikClient:
    """
    Client for the Iconik API.

    Holds the credentials and one ``httpx.Client``. Calls are sequential and
    blocking; do not share an instance between threads.

    Any non-2xx response raises ``IconikError``. Transport failures
    propagate as ``httpx.HTTPError``. Nothing is retried.
    """

    def __init__(
        self,
        credentials: Credentials,
        host: str = "",
        debug: bool = False,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            credentials: Application id and token
            host: API base URL; empty selects the public Iconik API
            debug: Log requests and response bodies
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.credentials = credentials
        self.debug = debug
        self.host = _normalize_host(host or DEFAULT_HOST)

        self._http = httpx.Client(
            base_url=self.host,
            timeout=timeout,
            transport=transport,
            headers={
                "App-ID": credentials.app_id,
                "Auth-Token": credentials.token,
                "Accept": "application/json",
            },
        )

        logger.debug(f"Initialized IconikClient for host={self.host}")

    @classmethod
    def from_config(
        cls,
        config: IconikConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> "IconikClient":
        """Build a client from an ``IconikConfig``."""
        return cls(
            Credentials(app_id=config.app_id, token=config.auth_token),
            host=config.host,
            debug=config.debug,
            timeout=config.request_timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> "IconikClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        api_path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Dispatch an authorized API request."""
        if self.debug:
            logger.debug("----")
            logger.debug(f"{method} {self.host}{api_path} body={json.dumps(body) if body is not None else None}")

        try:
            response = self._http.request(method, api_path, json=body, params=params)
        except httpx.HTTPError as e:
            logger.error(f"{method} {api_path} failed: {e}")
            raise

        if self.debug:
            logger.debug(f"Response {response.status_code}: {_redacted_body(response)}")

        return response

    def _check(self, response: httpx.Response) -> None:
        """Raise ``IconikError`` for a non-2xx response."""
        if response.is_success:
            return
        error = IconikError.from_body(response.content, response.status_code)
        logger.debug(f"{response.request.method} {response.request.url} -> {response.status_code}: {error}")
        raise error

    def _parse(self, response: httpx.Response, model: Type[ModelT]) -> ModelT:
        """Check the status and decode the body into ``model``."""
        self._check(response)
        return model.model_validate_json(response.content)

    def _get(self, api_path: str, model: Type[ModelT], params: Optional[Dict[str, Any]] = None) -> ModelT:
        return self._parse(self._request("GET", api_path, params=params), model)

    def _post(self, api_path: str, body: Dict[str, Any], model: Optional[Type[ModelT]] = None) -> Optional[ModelT]:
        response = self._request("POST", api_path, body=body)
        if model is None:
            self._check(response)
            return None
        return self._parse(response, model)

    def _patch(self, api_path: str, body: Dict[str, Any]) -> None:
        self._check(self._request("PATCH", api_path, body=body))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, criteria: SearchCriteria) -> SearchResponse:
        """Run a search with explicit criteria."""
        return self._post(SEARCH_ENDPOINT, criteria.to_body(), SearchResponse)

    def search_with_tag(self, tag: str) -> SearchResponse:
        """
        Search for assets carrying a metadata tag.

        Args:
            tag: Tag value on Iconik, e.g. "TeachingVideos"

        Returns:
            SearchResponse with the matching assets
        """
        logger.debug(f"Searching assets with tag={tag!r}")
        return self.search(SearchCriteria.for_tag(tag))

    def search_with_title_and_tag(self, title: str, tag: str, exact: bool = False) -> SearchResponse:
        """
        Search for assets by title and/or tag.

        Args:
            title: Title to look for (free text unless ``exact``)
            tag: Tag value; empty to ignore
            exact: Require an exact title match

        Returns:
            SearchResponse with the matching assets
        """
        logger.debug(f"Searching assets with title={title!r} tag={tag!r} exact={exact}")
        return self.search(SearchCriteria.for_title_and_tag(title, tag, exact))

    def get_collection_ids(self, title: str) -> List[CollectionID]:
        """Return the ids of all collections with the given title."""
        response = self.search(SearchCriteria.for_collection_title(title))
        return [
            CollectionID(collection_id=obj.id, title=obj.title)
            for obj in response.objects
            if obj.id
        ]

    # ------------------------------------------------------------------
    # Signed URLs
    # ------------------------------------------------------------------

    def generate_signed_proxy_url(self, asset_id: str, proxy_id: Optional[str] = None) -> str:
        """
        Get a signed download URL for a proxy of an asset.

        Without ``proxy_id`` the first proxy listed for the asset is used.
        """
        if proxy_id:
            path = PROXY_DOWNLOAD_ENDPOINT_TEMPLATE.format(asset_id=asset_id, proxy_id=proxy_id)
            return self._get(path, DownloadUrlResponse).url

        path = PROXIES_ENDPOINT_TEMPLATE.format(asset_id=asset_id)
        listing = self._get(path, UrlListResponse)
        return _first_url(listing, f"proxy of asset {asset_id}")

    def generate_signed_file_url(self, asset_id: str) -> str:
        """Get a signed download URL for the first file of an asset."""
        path = FILES_ENDPOINT_TEMPLATE.format(asset_id=asset_id)
        listing = self._get(path, UrlListResponse)
        return _first_url(listing, f"file of asset {asset_id}")

    def get_keyframe_url(self, asset_id: str) -> str:
        """Get the URL of the first KEYFRAME image of an asset."""
        path = KEYFRAMES_ENDPOINT_TEMPLATE.format(asset_id=asset_id)
        listing = self._get(path, UrlListResponse)
        return _first_url(listing, f"keyframe of asset {asset_id}", object_type="KEYFRAME")

    # ------------------------------------------------------------------
    # Assets and collections
    # ------------------------------------------------------------------

    def create_asset(self, title: str) -> Asset:
        body = {
            "title": title,
            "type": "ASSET",
            "status": "ACTIVE",
            "archive_status": "NOT_ARCHIVED",
            "is_online": True,
        }
        return self._post(ASSETS_ENDPOINT, body, Asset)

    def add_asset_to_collection(self, collection_id: str, asset_id: str) -> None:
        body = {"object_type": "assets", "object_id": asset_id}
        self._post(COLLECTION_CONTENTS_TEMPLATE.format(collection_id=collection_id), body)

    # ------------------------------------------------------------------
    # Storages, formats, filesets and files
    # ------------------------------------------------------------------

    def get_matching_storage(self, purpose: str = "FILES") -> Storage:
        """Get the default storage Iconik selects for ``purpose``."""
        return self._get(MATCHING_STORAGE_TEMPLATE.format(purpose=purpose), Storage)

    def create_format(
        self,
        asset_id: str,
        user_id: Optional[str],
        mime_type: str,
        storage_method: Optional[str] = None,
    ) -> Format:
        """Create the ORIGINAL format of an asset."""
        body: Dict[str, Any] = {
            "name": "ORIGINAL",
            "metadata": [{"internet_media_type": mime_type}],
            "storage_methods": [storage_method] if storage_method else [],
        }
        if user_id:
            body["user_id"] = user_id
        return self._post(FORMATS_ENDPOINT_TEMPLATE.format(asset_id=asset_id), body, Format)

    def create_fileset(
        self,
        asset_id: str,
        format_id: str,
        storage_id: str,
        name: str,
        base_dir: str = "/",
    ) -> FileSet:
        body = {
            "format_id": format_id,
            "storage_id": storage_id,
            "base_dir": base_dir,
            "name": name,
            "component_ids": [],
        }
        return self._post(FILESETS_ENDPOINT_TEMPLATE.format(asset_id=asset_id), body, FileSet)

    def create_file(
        self,
        asset_id: str,
        format_id: str,
        fileset_id: str,
        storage_id: str,
        file_name: str,
        file_size: int,
        directory_path: str = "",
        file_date_created: Optional[datetime] = None,
    ) -> IconikFileRecord:
        """
        Create a file record and request its upload URL.

        Args:
            asset_id: Owning asset
            format_id: Format the file belongs to
            fileset_id: Fileset the file belongs to
            storage_id: Storage the bytes will land on
            file_name: Original file name
            file_size: Size in bytes
            directory_path: Directory on the storage
            file_date_created: Creation/modification date; defaults to now

        Returns:
            IconikFileRecord carrying the upload URL and credentials
        """
        file_date = (file_date_created or datetime.now(timezone.utc)).isoformat()
        body = {
            "original_name": file_name,
            "directory_path": directory_path,
            "size": file_size,
            "type": "FILE",
            "metadata": {},
            "format_id": format_id,
            "file_set_id": fileset_id,
            "storage_id": storage_id,
            "file_date_created": file_date,
            "file_date_modified": file_date,
        }
        return self._post(FILES_ENDPOINT_TEMPLATE.format(asset_id=asset_id), body, IconikFileRecord)

    def start_multipart_upload(self, asset_id: str, file_id: str) -> MultipartUploadStart:
        """Open a large-file session on the object store for ``file_id``."""
        path = MULTIPART_START_TEMPLATE.format(asset_id=asset_id, file_id=file_id)
        return self._post(path, {}, MultipartUploadStart)

    def finish_multipart_upload(
        self,
        asset_id: str,
        file_id: str,
        multipart_file_id: str,
        sha1_list: List[str],
    ) -> None:
        """Assemble the uploaded parts; ``sha1_list`` is in part order."""
        path = MULTIPART_FINISH_TEMPLATE.format(asset_id=asset_id, file_id=file_id)
        body = {"file_id": multipart_file_id, "part_sha1_array": sha1_list}
        self._post(path, body)

    def close_file(self, asset_id: str, file_id: str) -> None:
        """Mark a file as fully uploaded."""
        path = FILE_ENDPOINT_TEMPLATE.format(asset_id=asset_id, file_id=file_id)
        self._patch(path, {"status": "CLOSED", "progress_processed": 100})

    def generate_keyframes(self, asset_id: str, file_id: str) -> None:
        path = FILE_KEYFRAMES_ENDPOINT_TEMPLATE.format(asset_id=asset_id, file_id=file_id)
        self._post(path, {})

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def create_job(self, asset_id: str, title: str) -> Job:
        """Start a TRANSFER job tracking an upload to ``asset_id``."""
        body = {
            "object_type": "assets",
            "object_id": asset_id,
            "type": "TRANSFER",
            "status": "STARTED",
            "title": title,
        }
        return self._post(JOBS_ENDPOINT, body, Job)

    def finish_job(self, job_id: str) -> None:
        self._patch(
            JOB_ENDPOINT_TEMPLATE.format(job_id=job_id),
            {"status": "FINISHED", "progress_processed": 100},
        )


def _normalize_host(host: str) -> str:
    """Base URLs must end with a slash so endpoint paths append to them."""
    return host if host.endswith("/") else host + "/"


def _first_url(listing: UrlListResponse, what: str, object_type: Optional[str] = None) -> str:
    for obj in listing.objects:
        if object_type and obj.type != object_type:
            continue
        if obj.url:
            return obj.url
    raise IconikError([f"no {what} with a URL"])


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: "***" if k in REDACTED_KEYS else _redact(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(item) for item in value]
    return value


def _redacted_body(response: httpx.Response) -> str:
    """Response body for debug logs, with upload tokens masked."""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    return json.dumps(_redact(payload))
