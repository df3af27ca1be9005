from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from avalanche_archive.config import Settings


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200, payload=None):
        self.content = content
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            return json.loads(self.content.decode("utf-8"))
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"Status {self.status_code}", response=self)


class FakeGet:
    """Stand-in for requests.get: url -> FakeResponse or exception. Records (url, timeout)."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def __call__(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        for prefix, answer in self.routes.items():
            if url.startswith(prefix):
                if isinstance(answer, Exception):
                    raise answer
                return answer
        raise requests.ConnectionError(f"no route for {url}")


@pytest.fixture
def fake_get(monkeypatch):
    fake = FakeGet()
    monkeypatch.setattr(requests, "get", fake)
    return fake


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "data", site_dir=tmp_path / "site")


@pytest.fixture
def write_pdf():
    def _write(path: Path, content: bytes = b"%PDF-1.4 test") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _write
