"""Mock Iconik API and object store for unit testing.

Both mocks are ``httpx.MockTransport`` handlers that route on method and
path and record every request they receive.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx

TEST_HOST = "https://iconik.test/API/"
API_PREFIX = "/API/"

Payload = Union[Dict[str, Any], List[Any], str, bytes, None]


@dataclass
class RecordedRequest:
    """A request seen by a mock."""

    method: str
    path: str
    headers: httpx.Headers
    content: bytes

    @property
    def json(self) -> Any:
        return json.loads(self.content) if self.content else None


def _to_response(status_code: int, payload: Payload) -> httpx.Response:
    if isinstance(payload, (bytes, str)):
        return httpx.Response(status_code, content=payload)
    if payload is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, json=payload)


class MockIconikAPI:
    """Routes requests for the Iconik API by ``(method, api_path)``."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, Payload]] = {}
        self.requests: List[RecordedRequest] = []

    def add(self, method: str, api_path: str, payload: Payload = None, status_code: int = 200) -> None:
        """Register a canned response for ``method api_path``."""
        self.routes[(method.upper(), api_path)] = (status_code, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        api_path = path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path.lstrip("/")
        self.requests.append(
            RecordedRequest(request.method, api_path, request.headers, request.read())
        )
        route = self.routes.get((request.method, api_path))
        if route is None:
            return httpx.Response(404, json={"errors": [f"no route for {request.method} {api_path}"]})
        status_code, payload = route
        return _to_response(status_code, payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self) -> List[Tuple[str, str]]:
        """``(method, api_path)`` of every request, in order."""
        return [(r.method, r.path) for r in self.requests]

    def last(self, method: str, api_path: str) -> Optional[RecordedRequest]:
        for r in reversed(self.requests):
            if r.method == method and r.path == api_path:
                return r
        return None


@dataclass
class MockObjectStore:
    """Accepts B2-style uploads and answers with the part SHA-1."""

    status_code: int = 200
    error_body: str = '{"code": "bad_request"}'
    success_body: Optional[str] = None
    requests: List[RecordedRequest] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        recorded = RecordedRequest(request.method, request.url.path, request.headers, request.read())
        self.requests.append(recorded)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text=self.error_body)
        if self.success_body is not None:
            return httpx.Response(200, text=self.success_body)
        return httpx.Response(
            200,
            json={"contentSha1": recorded.headers.get("X-Bz-Content-Sha1", "")},
        )

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))
