"""Unit tests for the object-store transfer helpers."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from iconik_client.models.file_models import NewAssetUpload
from iconik_client.transfer.b2_transfer import (
    TransferError,
    iter_parts,
    transfer_file,
    upload_multipart,
    upload_single,
)
from tests.helpers import MockObjectStore


def make_nau(size: int, multipart_file_id: str = "") -> NewAssetUpload:
    return NewAssetUpload(
        asset_id="a",
        collection_id="c",
        storage_id="s",
        format_id="fmt",
        fileset_id="fs",
        file_id="f",
        upload_url="https://upload.store.test/upload",
        upload_auth_token="b2-token",
        upload_filename="lectures/week 1.mp4",
        mime_type="video/mp4",
        file_size=size,
        multipart_file_id=multipart_file_id,
    )


@pytest.fixture
def media_file(tmp_path: Path) -> Path:
    path = tmp_path / "week 1.mp4"
    path.write_bytes(b"0123456789" * 25)
    return path


@pytest.mark.unit
class TestIterParts:
    """Tests for splitting files into parts."""

    def test_parts_cover_file(self, media_file: Path) -> None:
        parts = list(iter_parts(media_file, part_size=100))

        assert [n for n, _ in parts] == [1, 2, 3]
        assert [len(chunk) for _, chunk in parts] == [100, 100, 50]
        assert b"".join(chunk for _, chunk in parts) == media_file.read_bytes()

    def test_empty_file_has_no_parts(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.bin"
        empty.write_bytes(b"")

        assert list(iter_parts(empty, part_size=100)) == []


@pytest.mark.unit
class TestUploadSingle:
    """Tests for single-request uploads."""

    def test_headers(self, media_file: Path, object_store: MockObjectStore) -> None:
        data = media_file.read_bytes()

        with object_store.client() as http:
            upload_single(make_nau(len(data)), media_file, http)

        assert len(object_store.requests) == 1
        request = object_store.requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "b2-token"
        assert request.headers["X-Bz-File-Name"] == "lectures%2Fweek%201.mp4"
        assert request.headers["X-Bz-Content-Sha1"] == hashlib.sha1(data).hexdigest()
        assert request.headers["Content-Type"] == "video/mp4"
        assert request.content == data

    def test_bad_status_raises(self, media_file: Path) -> None:
        store = MockObjectStore(status_code=401, error_body='{"code": "bad_auth_token"}')

        with store.client() as http:
            with pytest.raises(TransferError) as exc_info:
                upload_single(make_nau(250), media_file, http)

        assert exc_info.value.status_code == 401
        assert "bad_auth_token" in str(exc_info.value)


@pytest.mark.unit
class TestUploadMultipart:
    """Tests for multipart uploads."""

    def test_parts_and_sha_list(self, media_file: Path, object_store: MockObjectStore) -> None:
        nau = make_nau(250, multipart_file_id="large-1")
        data = media_file.read_bytes()

        with object_store.client() as http:
            shas = upload_multipart(nau, media_file, http, part_size=100)

        expected = [hashlib.sha1(data[i:i + 100]).hexdigest() for i in (0, 100, 200)]
        assert shas == expected
        assert nau.sha1_list == expected
        assert [r.headers["X-Bz-Part-Number"] for r in object_store.requests] == ["1", "2", "3"]
        assert [r.headers["Content-Length"] for r in object_store.requests] == ["100", "100", "50"]
        assert all(r.headers["Authorization"] == "b2-token" for r in object_store.requests)

    def test_failed_part_stops_upload(self, media_file: Path) -> None:
        store = MockObjectStore(status_code=503)

        with store.client() as http:
            with pytest.raises(TransferError) as exc_info:
                upload_multipart(make_nau(250, "large-1"), media_file, http, part_size=100)

        assert exc_info.value.part_number == 1
        assert len(store.requests) == 1

    @pytest.mark.parametrize("body", ["ok", '{"fileId": "x"}', "[]"])
    def test_part_response_without_sha_raises(self, media_file: Path, body: str) -> None:
        store = MockObjectStore(success_body=body)
        nau = make_nau(250, "large-1")

        with store.client() as http:
            with pytest.raises(TransferError) as exc_info:
                upload_multipart(nau, media_file, http, part_size=100)

        assert exc_info.value.status_code == 200
        assert exc_info.value.part_number == 1
        assert body in str(exc_info.value)
        assert nau.sha1_list == []
        assert len(store.requests) == 1


@pytest.mark.unit
def test_transfer_file_dispatches_on_multipart(media_file: Path, object_store: MockObjectStore) -> None:
    """Multipart state selects the part upload; otherwise one request is sent."""
    with object_store.client() as http:
        transfer_file(make_nau(250), media_file, http=http, part_size=100)
        assert len(object_store.requests) == 1

        transfer_file(make_nau(250, "large-1"), media_file, http=http, part_size=100)
        assert len(object_store.requests) == 4
