"""
Named check functions.

A check is a named boolean assertion about a response. Failed checks do not
raise: they are recorded in a `CheckRecorder` so the run keeps going and the
`checks` threshold can judge the overall pass rate.

Names follow '<service>: <assertion>' (e.g. 'wine-health: status OK') so
failures are easy to find in reports.

Available checks:
- check_health()     : service responds, 2xx/3xx status, latency under 2s
- check_status()     : exact status code
- check_latency()    : response time under a limit
- check_json_field() : JSON field present (dot notation for nested fields)
- check_prediction() : ML prediction response
- check_completion() : OpenAI-compatible completion response
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]

_MISSING = object()


@dataclass(frozen=True)
class CheckStats:
    passes: int
    fails: int

    @property
    def total(self) -> int:
        return self.passes + self.fails

    @property
    def rate(self) -> Optional[float]:
        """Pass rate, or None when nothing was checked."""
        return self.passes / self.total if self.total else None


class CheckRecorder:
    """Counts check outcomes overall, per check name and per tag.

    Tag keys use the threshold selector form, e.g. 'scenario:wine-health'.
    """

    def __init__(self) -> None:
        self._passes: Counter = Counter()
        self._fails: Counter = Counter()

    def record(self, name: str, passed: bool, tags: Optional[Mapping[str, str]] = None) -> None:
        keys = ["", f"check:{name}"]
        keys.extend(f"{key}:{value}" for key, value in (tags or {}).items())
        counter = self._passes if passed else self._fails
        for key in keys:
            counter[key] += 1
        if not passed:
            logger.debug("Check failed: %s", name)

    def stats(self, key: str = "") -> CheckStats:
        return CheckStats(passes=self._passes[key], fails=self._fails[key])

    def by_name(self) -> Dict[str, CheckStats]:
        names = {k for k in (*self._passes, *self._fails) if k.startswith("check:")}
        return {k[len("check:"):]: self.stats(k) for k in sorted(names)}

    def reset(self) -> None:
        self._passes.clear()
        self._fails.clear()


default_recorder = CheckRecorder()


def check(
    response: Any,
    predicates: Mapping[str, Predicate],
    recorder: Optional[CheckRecorder] = None,
    tags: Optional[Mapping[str, str]] = None,
) -> bool:
    """
    Evaluate named predicates against a response and record each outcome.

    A predicate that raises counts as failed.

    Returns:
        True if every predicate passed
    """
    recorder = recorder or default_recorder
    all_passed = True
    for name, predicate in predicates.items():
        try:
            passed = bool(predicate(response))
        except Exception as e:  # noqa: BLE001
            logger.debug("Check %s raised %s: %s", name, type(e).__name__, e)
            passed = False
        recorder.record(name, passed, tags)
        all_passed = all_passed and passed
    return all_passed


def status_of(response: Any) -> int:
    return getattr(response, "status_code", 0) or 0


def latency_ms(response: Any) -> float:
    """Elapsed request time in milliseconds."""
    elapsed = getattr(response, "elapsed", None)
    if elapsed is None:
        return float("inf")
    return elapsed.total_seconds() * 1000


def json_field(payload: Any, path: str) -> Any:
    """Walk a dot-separated path; returns a sentinel when any step is missing."""
    current = payload
    for part in path.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return _MISSING
    return current


def has_json_field(response: Any, path: str) -> bool:
    try:
        payload = response.json()
    except Exception:  # noqa: BLE001
        return False
    return json_field(payload, path) is not _MISSING


# -----------------------------------------------------------------------------
# Health Check
# -----------------------------------------------------------------------------
def check_health(response: Any, service_name: str, **kwargs: Any) -> bool:
    """
    Standard health check: the service responds, returns a success status,
    and answers within 2 seconds.
    """
    return check(
        response,
        {
            f"{service_name}: responds": lambda r: status_of(r) > 0,
            f"{service_name}: status OK": lambda r: 200 <= status_of(r) < 400,
            f"{service_name}: latency < 2s": lambda r: latency_ms(r) < 2000,
        },
        **kwargs,
    )


def check_status(response: Any, service_name: str, expected_status: int = 200, **kwargs: Any) -> bool:
    """Check the response status equals `expected_status`."""
    return check(
        response,
        {f"{service_name}: status {expected_status}": lambda r: status_of(r) == expected_status},
        **kwargs,
    )


def check_latency(response: Any, service_name: str, max_ms: float = 2000, **kwargs: Any) -> bool:
    """Check the response time is under `max_ms` milliseconds."""
    return check(
        response,
        {f"{service_name}: latency < {max_ms}ms": lambda r: latency_ms(r) < max_ms},
        **kwargs,
    )


def check_json_field(response: Any, service_name: str, field: str, **kwargs: Any) -> bool:
    """
    Check the JSON body contains `field`.

    Nested fields use dot notation ('data.items'). A field present with a
    null value counts as present.
    """
    return check(
        response,
        {f"{service_name}: has {field}": lambda r: has_json_field(r, field)},
        **kwargs,
    )


def check_prediction(response: Any, service_name: str, **kwargs: Any) -> bool:
    """Check an ML prediction response: status 200, a prediction field, under 5s."""
    return check(
        response,
        {
            f"{service_name}: status 200": lambda r: status_of(r) == 200,
            f"{service_name}: has prediction": lambda r: (
                has_json_field(r, "prediction") or has_json_field(r, "predictions")
            ),
            f"{service_name}: latency < 5s": lambda r: latency_ms(r) < 5000,
        },
        **kwargs,
    )


def _has_choices(response: Any) -> bool:
    try:
        choices = response.json().get("choices")
    except Exception:  # noqa: BLE001
        return False
    return isinstance(choices, list) and len(choices) > 0


def check_completion(response: Any, service_name: str, **kwargs: Any) -> bool:
    """Check an OpenAI-compatible completion response with a non-empty choices array."""
    return check(
        response,
        {
            f"{service_name}: status 200": lambda r: status_of(r) == 200,
            f"{service_name}: has choices": _has_choices,
        },
        **kwargs,
    )
