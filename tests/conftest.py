# locust patches the standard library with gevent on import; that has to
# happen before requests pulls in ssl
import locust  # noqa: F401

import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import requests

from ochub_loadtest.config.environments import get_environment
from ochub_loadtest.config.settings import get_settings
from ochub_loadtest.helpers.checks import CheckRecorder


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")


def build_response(status=200, body=None, elapsed_ms=100, url="https://example.test/"):
    """A real requests.Response with a canned body and elapsed time."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.elapsed = timedelta(milliseconds=elapsed_ms)
    if body is not None:
        response._content = body.encode() if isinstance(body, str) else json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def dev_env():
    return get_environment("dev")


@pytest.fixture
def recorder():
    return CheckRecorder()


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.request.return_value = build_response(200, {"status": "ok"})
    return session


@pytest.fixture
def clean_settings(monkeypatch):
    """Clear cached settings and selection variables around a test."""
    for name in ("TEST_ENV", "TEST_TYPE", "TEST_TARGET", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
