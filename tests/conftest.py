"""Test configuration for Orka SDK tests."""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from orka import OrkaClient
from orka._http import Connection
from orka.auth.credentials import CredentialStore
from orka.auth.dispatcher import AuthDispatcher

BASE_URL = "http://orka.test"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.orka and ORKA_* variables."""
    monkeypatch.setenv("HOME", str(tmp_path))
    for var in ("ORKA_API_URL", "ORKA_TOKEN", "ORKA_LICENSE_KEY"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def _make_response(body=None, status_code=200, text=None):
    mock_response = MagicMock(spec=httpx.Response)
    mock_response.status_code = status_code
    if body is None:
        mock_response.content = b""
    else:
        mock_response.content = json.dumps(body).encode()
        mock_response.json.return_value = body
    if text is not None:
        mock_response.text = text
    else:
        mock_response.text = json.dumps(body) if body is not None else ""
    return mock_response


@pytest.fixture
def make_response():
    """Factory for fake httpx responses."""
    return _make_response


@pytest.fixture
def client():
    """Shared OrkaClient fixture with both credentials configured."""
    client = OrkaClient(BASE_URL, token="tok", license_key="lic")
    yield client
    client.close()


@pytest.fixture
def conn():
    """A Connection whose send/request calls are recorded instead of sent."""
    mock_conn = MagicMock(spec=Connection)
    mock_conn.base_url = BASE_URL
    return mock_conn


@pytest.fixture
def dispatcher():
    return AuthDispatcher(CredentialStore(token="tok", license_key="lic"))
