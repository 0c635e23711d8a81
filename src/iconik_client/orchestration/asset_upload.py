"""
Asset Upload Workflow

Creates an asset and uploads a local file into it. The sequence is fixed:

1. create the asset and link it into a collection
2. allocate storage, ORIGINAL format and fileset
3. create the file record (upload URL and credentials)
4. open a multipart session when the file exceeds the threshold
5. start a TRANSFER job
6. transfer the bytes to the object store
7. finish the multipart session, close the file, finish the job

Nothing is retried; the first failing step raises and aborts the rest.
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import httpx

from iconik_client.clients.iconik_client import IconikClient
from iconik_client.models.errors import IconikError
from iconik_client.models.file_models import NewAssetUpload
from iconik_client.transfer.b2_transfer import MULTIPART_FILESIZE_THRESHOLD, transfer_file
from iconik_client.utils.mime import detect_mime_type

logger = logging.getLogger(__name__)


def make_new_asset(
    client: IconikClient,
    collection_id: str,
    file_name: str,
    title: str,
    storage_path: str,
    mime_type: str,
    file_size: int,
    file_date_created: Optional[datetime] = None,
    multipart_threshold: int = MULTIPART_FILESIZE_THRESHOLD,
) -> NewAssetUpload:
    """
    Create the Iconik records needed before the bytes can be uploaded.

    Args:
        client: Iconik client
        collection_id: Collection the new asset is added to
        file_name: Local file name (only the base name is sent)
        title: Asset title shown in Iconik
        storage_path: Directory on the storage to save into
        mime_type: MIME type of the file
        file_size: Size in bytes
        file_date_created: Date recorded on the file; defaults to now
        multipart_threshold: Sizes above this use a multipart upload

    Returns:
        NewAssetUpload describing where and how to send the bytes

    Raises:
        IconikError: If any API call fails or the file record has no upload URL
    """
    base_name = os.path.basename(file_name)

    asset = client.create_asset(title)
    logger.info(f"Created asset id={asset.id}")

    client.add_asset_to_collection(collection_id, asset.id)
    logger.info(f"Added asset {asset.id} to collection {collection_id}")

    storage = client.get_matching_storage("FILES")
    logger.info(f"Using storage id={storage.id}, method={storage.method}")

    fmt = client.create_format(asset.id, asset.created_by_user, mime_type, storage.method)
    logger.info(f"Created ORIGINAL format id={fmt.id}")

    fileset = client.create_fileset(asset.id, fmt.id, storage.id, base_name, base_dir=storage_path)
    logger.info(f"Created fileset id={fileset.id} name={base_name}")

    file_record = client.create_file(
        asset.id,
        fmt.id,
        fileset.id,
        storage.id,
        base_name,
        file_size,
        directory_path=storage_path,
        file_date_created=file_date_created,
    )
    credentials = file_record.upload_credentials
    if not file_record.upload_url or credentials is None or not credentials.authorization_token:
        raise IconikError([f"file {file_record.id} was created without upload URL or credentials"])
    logger.info(f"Created file id={file_record.id}")

    nau = NewAssetUpload(
        asset_id=asset.id,
        collection_id=collection_id,
        storage_id=storage.id,
        format_id=fmt.id,
        fileset_id=fileset.id,
        file_id=file_record.id,
        upload_url=file_record.upload_url,
        upload_auth_token=credentials.authorization_token,
        upload_filename=file_record.upload_filename or base_name,
        mime_type=mime_type,
        file_size=file_size,
        file_date_created=file_date_created,
    )

    if file_size > multipart_threshold:
        session = client.start_multipart_upload(asset.id, file_record.id)
        nau.multipart_file_id = session.file_id
        nau.upload_url = session.upload_url
        nau.upload_auth_token = session.authorization_token
        logger.info(f"Started multipart upload file_id={session.file_id}")

    job = client.create_job(asset.id, f"Upload {base_name}")
    nau.job_id = job.id
    logger.info(f"Started TRANSFER job id={job.id}")

    return nau


def finish_upload(client: IconikClient, nau: NewAssetUpload, keyframes: bool = True) -> None:
    """
    Close out an upload after the bytes have been transferred.

    Args:
        client: Iconik client
        nau: State returned by ``make_new_asset`` (with ``sha1_list`` filled
            in for multipart uploads)
        keyframes: Request keyframe generation for the new file
    """
    if nau.is_multipart:
        client.finish_multipart_upload(nau.asset_id, nau.file_id, nau.multipart_file_id, nau.sha1_list)
        logger.info(f"Finished multipart upload with {len(nau.sha1_list)} parts")

    client.close_file(nau.asset_id, nau.file_id)
    logger.info(f"Closed file id={nau.file_id}")

    if keyframes:
        client.generate_keyframes(nau.asset_id, nau.file_id)
        logger.info(f"Keyframes requested for asset_id={nau.asset_id}")

    client.finish_job(nau.job_id)
    logger.info(f"Finished job id={nau.job_id}")


def upload_file(
    client: IconikClient,
    path: Path,
    title: str,
    collection_id: str,
    storage_path: str = "/",
    keyframes: bool = True,
    http: Optional[httpx.Client] = None,
    multipart_threshold: int = MULTIPART_FILESIZE_THRESHOLD,
) -> NewAssetUpload:
    """
    Run the whole workflow for one local file.

    Args:
        client: Iconik client
        path: Local file to upload
        title: Asset title
        collection_id: Target collection
        storage_path: Directory on the storage
        keyframes: Request keyframe generation
        http: HTTP client for the object-store requests
        multipart_threshold: Sizes above this use a multipart upload;
            also the part size

    Returns:
        The completed NewAssetUpload
    """
    path = Path(path)
    stat = path.stat()
    mime_type = detect_mime_type(path)
    file_date = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
    logger.info(f"Uploading {path} ({stat.st_size} bytes, {mime_type})")

    nau = make_new_asset(
        client,
        collection_id,
        str(path),
        title,
        storage_path,
        mime_type,
        stat.st_size,
        file_date,
        multipart_threshold=multipart_threshold,
    )
    logger.debug(f"Upload state: {nau.summary()}")

    transfer_file(nau, path, http=http, part_size=multipart_threshold)
    finish_upload(client, nau, keyframes=keyframes)
    return nau
