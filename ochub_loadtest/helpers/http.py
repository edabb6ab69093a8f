"""
HTTP request helpers with default parameters, tagging and built-in checks.

`HttpHelper` wraps a requests-compatible session (Locust's `HttpSession`
inside a run, a plain `requests.Session` elsewhere) and applies:
- the default 10s timeout
- TLS verification according to the active environment
- request tags: `name` groups statistics, the rest travel as request context
- a '<name> status OK' check on every request
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional, Union

import requests

from ..config.environments import EnvironmentURLs
from ..utils.durations import parse_duration
from .checks import CheckRecorder, check, has_json_field, latency_ms, status_of

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = "10s"


@dataclass
class RequestResult:
    """Response plus the outcome of its built-in check."""

    response: requests.Response
    ok: bool
    healthy: Optional[bool] = None


def _failed_response(url: str, error: Exception) -> requests.Response:
    """Stand-in response for a request that never got one (status 0)."""
    response = requests.Response()
    response.status_code = 0
    response.url = url
    response.elapsed = timedelta(0)
    response.reason = f"{type(error).__name__}: {error}"
    response.error = error  # type: ignore[attr-defined]
    return response


class HttpHelper:
    """Issues requests for one scenario with shared defaults and checks."""

    def __init__(
        self,
        session: Any,
        env: EnvironmentURLs,
        recorder: Optional[CheckRecorder] = None,
        tags: Optional[Mapping[str, str]] = None,
        timeout: Union[str, float] = DEFAULT_TIMEOUT,
        runtime_session: bool = False,
    ):
        """
        Args:
            session: object with a requests-style `request()` method
            env: active environment (decides TLS verification)
            recorder: where check outcomes go (module default if omitted)
            tags: tags attached to every request and check, e.g. {'scenario': 'wine-health'}
            timeout: default per-request timeout
            runtime_session: True for Locust's HttpSession, which accepts
                `name` and `context` keyword arguments
        """
        self.session = session
        self.env = env
        self.recorder = recorder
        self.tags = dict(tags or {})
        self.timeout = parse_duration(timeout)
        self.runtime_session = runtime_session

    def _request(
        self,
        method: str,
        url: str,
        name: str,
        timeout: Optional[Union[str, float]] = None,
        tags: Optional[Mapping[str, str]] = None,
        **kwargs: Any,
    ) -> requests.Response:
        kwargs.setdefault("verify", not self.env.insecure_skip_tls_verify)
        kwargs["timeout"] = parse_duration(timeout) if timeout is not None else self.timeout
        if self.runtime_session:
            kwargs["name"] = name
            kwargs["context"] = {**self.tags, **(tags or {}), "name": name}
        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return _failed_response(url, e)

    def _check_ok(self, response: requests.Response, name: str) -> bool:
        return check(
            response,
            {f"{name} status OK": lambda r: 200 <= status_of(r) < 400},
            recorder=self.recorder,
            tags=self.tags,
        )

    def get(self, url: str, name: str, **kwargs: Any) -> RequestResult:
        """GET with a status check."""
        response = self._request("GET", url, name, **kwargs)
        return RequestResult(response=response, ok=self._check_ok(response, name))

    def post_json(self, url: str, body: Any, name: str, **kwargs: Any) -> RequestResult:
        """POST a JSON body with a status check."""
        headers: Dict[str, str] = {"Content-Type": "application/json", **kwargs.pop("headers", {})}
        response = self._request("POST", url, name, json=body, headers=headers, **kwargs)
        return RequestResult(response=response, ok=self._check_ok(response, name))

    def health_check(self, url: str, name: str) -> RequestResult:
        """
        GET with relaxed success criteria.

        `ok` means the service answered at all; `healthy` means 2xx/3xx.
        """
        response = self._request("GET", url, name, tags={"type": "health"})
        responds = check(
            response,
            {f"{name} responds": lambda r: status_of(r) > 0},
            recorder=self.recorder,
            tags=self.tags,
        )
        healthy = check(
            response,
            {f"{name} healthy": lambda r: 200 <= status_of(r) < 400},
            recorder=self.recorder,
            tags=self.tags,
        )
        return RequestResult(response=response, ok=responds, healthy=healthy)

    def check_duration(self, response: requests.Response, name: str, max_ms: float) -> bool:
        return check(
            response,
            {f"{name} duration < {max_ms}ms": lambda r: latency_ms(r) < max_ms},
            recorder=self.recorder,
            tags=self.tags,
        )

    def check_has_field(self, response: requests.Response, name: str, field: str) -> bool:
        return check(
            response,
            {f"{name} has {field}": lambda r: has_json_field(r, field)},
            recorder=self.recorder,
            tags=self.tags,
        )
