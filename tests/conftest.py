"""Shared fakes for requests sessions and the Flask app."""

from __future__ import annotations

import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from tuberelay.server import create_app
from tuberelay.utils import Config


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code=200, json_data=None, text=None, content=b"",
                 headers=None, reason=None, chunk_size=None):
        self.status_code = status_code
        self.reason = reason or ("OK" if status_code < 400 else "Error")
        self.headers = CaseInsensitiveDict(headers or {})
        self._json = json_data
        self.content = content
        self.text = text if text is not None else (json.dumps(json_data) if json_data is not None else "")
        self.chunk_size = chunk_size
        self.closed = False
        self.iterated = False

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json

    def iter_content(self, chunk_size=1):
        self.iterated = True
        size = self.chunk_size or chunk_size
        for i in range(0, len(self.content), size):
            yield self.content[i:i + size]

    def raise_for_status(self):
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeSession:
    """Returns queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def _next(self, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        if not self.outcomes:
            raise AssertionError(f"Unexpected {method} {url}")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)

    @property
    def urls(self):
        return [url for _, url, _ in self.calls]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def make_config(tmp_path):
    def _make(**environ):
        return Config(tmp_path / "settings.json", environ=environ)
    return _make


@pytest.fixture
def app(make_config, session):
    app = create_app(make_config(RAPIDAPI_KEY="test-key"), session=session)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
