from __future__ import annotations

import io
from typing import Any

import pytest
import requests
from rich.console import Console

from biome_repro.config import Settings
from biome_repro.versions import fetch_catalog, resolve_versions


class FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.urls: list[str] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


REGISTRY_PAYLOAD = {
    "dist-tags": {"latest": "1.9.4", "nightly": "2.0.0-nightly"},
    "versions": {"1.8.0": {}, "1.9.4": {}, "2.0.0-nightly": {}},
}


def test_fetch_catalog_newest_first():
    session = FakeSession(FakeResponse(REGISTRY_PAYLOAD))
    catalog, latest = fetch_catalog(Settings(), session=session)
    assert catalog == ("2.0.0-nightly", "1.9.4", "1.8.0")
    assert latest == "1.9.4"
    assert session.urls == ["https://registry.npmjs.org/@biomejs%2Fbiome"]


def test_fetch_catalog_without_latest_tag():
    session = FakeSession(FakeResponse({"versions": {"0.1.0": {}}}))
    assert fetch_catalog(Settings(), session=session) == (("0.1.0",), None)


def test_empty_catalog_is_absent():
    session = FakeSession(FakeResponse({"versions": {}, "dist-tags": {"latest": "1.0.0"}}))
    catalog, latest = fetch_catalog(Settings(), session=session)
    assert catalog is None
    assert latest == "1.0.0"


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("offline")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse({}, status_code=404)),
        FakeSession(FakeResponse(ValueError("not json"))),
        FakeSession(FakeResponse(["not", "an", "object"])),
        FakeSession(FakeResponse({"versions": ["1.0.0"]})),
    ],
)
def test_unavailable_registry_degrades(session: FakeSession):
    assert fetch_catalog(Settings(), session=session) == (None, None)


def test_resolve_versions_reports_progress():
    out = io.StringIO()
    console = Console(file=out, width=200, color_system=None)
    resolve_versions(Settings(), console, session=FakeSession(FakeResponse(REGISTRY_PAYLOAD)))
    assert "Fetched versions" in out.getvalue()

    out.truncate(0)
    out.seek(0)
    result = resolve_versions(Settings(), console, session=FakeSession(error=requests.ConnectionError()))
    assert result == (None, None)
    assert "Could not fetch versions" in out.getvalue()
