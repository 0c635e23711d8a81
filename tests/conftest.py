"""Shared pytest fixtures for all tests."""

from __future__ import annotations

from typing import Dict, Generator

import pytest
from dotenv import load_dotenv

from iconik_client.clients.iconik_client import Credentials, IconikClient
from tests.helpers.mock_iconik import TEST_HOST, MockIconikAPI, MockObjectStore


@pytest.fixture(scope="session", autouse=True)
def load_env() -> None:
    """Load environment variables from .env file for all tests."""
    load_dotenv()


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> Dict[str, str]:
    """
    Mock environment variables for unit tests.
    
    Returns:
        Dictionary of mocked environment variables
    """
    env_vars = {
        "ICONIK_APP_ID": "testAppID",
        "ICONIK_AUTH_TOKEN": "testToken",
        "ICONIK_HOST": TEST_HOST,
        "ICONIK_REQUEST_TIMEOUT": "5",
        "ICONIK_DEBUG": "false",
        "LOG_LEVEL": "INFO",
    }
    
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    
    return env_vars


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(app_id="testAppID", token="testToken")


@pytest.fixture
def mock_api() -> MockIconikAPI:
    """Empty mock Iconik API; tests register the routes they need."""
    return MockIconikAPI()


@pytest.fixture
def client(credentials: Credentials, mock_api: MockIconikAPI) -> Generator[IconikClient, None, None]:
    """
    Iconik client wired to the mock API.
    
    Yields:
        IconikClient using a mock transport
    """
    iconik = IconikClient(credentials, host=TEST_HOST, debug=True, transport=mock_api.transport)
    yield iconik
    iconik.close()


@pytest.fixture
def object_store() -> MockObjectStore:
    return MockObjectStore()
