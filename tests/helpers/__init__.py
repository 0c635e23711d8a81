"""Test helper utilities."""

from .mock_iconik import (
    TEST_HOST,
    MockIconikAPI,
    MockObjectStore,
    RecordedRequest,
)
from .payloads import register_upload_routes, search_payload, url_listing

__all__ = [
    # Mocks
    "TEST_HOST",
    "MockIconikAPI",
    "MockObjectStore",
    "RecordedRequest",
    # Payloads
    "register_upload_routes",
    "search_payload",
    "url_listing",
]
