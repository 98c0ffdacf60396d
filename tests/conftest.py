import json
from typing import Any, Dict, List, Optional

import pytest

import gist_uploader.github_gist as gg


class StubResponse:
    def __init__(self, status: int, body: bytes, read_error: Optional[BaseException] = None):
        self.status = status
        self._body = body
        self._read_error = read_error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def read(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._body


class FakeApi:
    """Stands in for aiohttp.ClientSession and records every POST."""

    def __init__(self):
        self.status = 201
        self.body = json.dumps({"html_url": "https://example/1"}).encode()
        self.read_error: Optional[BaseException] = None
        self.error: Optional[BaseException] = None
        self.calls: List[Dict[str, Any]] = []
        self.session_kwargs: List[Dict[str, Any]] = []

    def respond(self, status: int, body, read_error: Optional[BaseException] = None):
        self.status = status
        self.body = body.encode() if isinstance(body, str) else body
        self.read_error = read_error

    @property
    def payload(self) -> Dict[str, Any]:
        return json.loads(self.calls[-1]["data"])

    def session(self, **kwargs):
        self.session_kwargs.append(kwargs)
        return StubSession(self)


class StubSession:
    def __init__(self, api: FakeApi):
        self._api = api

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def post(self, url, data=None, headers=None):
        self._api.calls.append({"url": url, "data": data, "headers": headers})
        if self._api.error is not None:
            raise self._api.error
        return StubResponse(self._api.status, self._api.body, self._api.read_error)


@pytest.fixture
def fake_api(monkeypatch) -> FakeApi:
    api = FakeApi()
    monkeypatch.setattr(gg.aiohttp, "ClientSession", api.session)
    return api


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    # Keep a developer's own config.toml and credential out of the tests.
    monkeypatch.setenv("GIST_CONFIG", str(tmp_path / "absent.toml"))
    monkeypatch.delenv("GISTAUTH", raising=False)
