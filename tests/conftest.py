from __future__ import annotations

import json
from typing import Any

import pytest

from readmeforge.options import API_KEY_ENV, API_URL_ENV, TIMEOUT_ENV


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records every POST and replays canned replies."""

    def __init__(self, response: FakeResponse | None = None, exc: Exception | None = None) -> None:
        self.response = response or FakeResponse(200, {"readme": "# Hello", "creditsRemaining": 5})
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (API_KEY_ENV, API_URL_ENV, TIMEOUT_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
