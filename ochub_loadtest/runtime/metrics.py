"""Request metrics collected from runtime request events, indexed by tag."""

from __future__ import annotations

import logging
import math
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass
class MetricSeries:
    """Durations (ms) and failure count for one tag selector."""

    durations: List[float] = field(default_factory=list)
    failures: int = 0

    @property
    def count(self) -> int:
        return len(self.durations)

    @property
    def failure_rate(self) -> Optional[float]:
        return self.failures / self.count if self.count else None

    def percentile(self, pct: float) -> Optional[float]:
        """Linearly interpolated percentile, `pct` in 0..100."""
        if not self.durations:
            return None
        ordered = sorted(self.durations)
        rank = (len(ordered) - 1) * pct / 100.0
        low = math.floor(rank)
        high = math.ceil(rank)
        if low == high:
            return ordered[int(rank)]
        return ordered[low] + (ordered[high] - ordered[low]) * (rank - low)

    def aggregate(self, stat: str) -> Optional[float]:
        """avg, min, med, max or p(N)."""
        if not self.durations:
            return None
        if stat == "avg":
            return sum(self.durations) / self.count
        if stat == "min":
            return min(self.durations)
        if stat == "max":
            return max(self.durations)
        if stat == "med":
            return self.percentile(50)
        if stat.startswith("p(") and stat.endswith(")"):
            return self.percentile(float(stat[2:-1]))
        raise ValueError(f"Unknown aggregate: {stat}")


class RequestMetrics:
    """
    Collects every request once per matching selector key.

    Keys: '' for all requests, 'name:<request name>', and '<tag>:<value>'
    for each context tag (e.g. 'scenario:wine-health').
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._series: Dict[str, MetricSeries] = defaultdict(MetricSeries)
        self.started_at: Optional[float] = None
        self.stopped_at: Optional[float] = None

    def record(
        self,
        response_time: float,
        failed: bool,
        name: Optional[str] = None,
        tags: Optional[Mapping[str, Any]] = None,
    ) -> None:
        keys = {""}
        if name:
            keys.add(f"name:{name}")
        keys.update(f"{key}:{value}" for key, value in (tags or {}).items())
        for key in keys:
            series = self._series[key]
            series.durations.append(float(response_time))
            if failed:
                series.failures += 1

    def on_request(
        self,
        request_type: str,
        name: str,
        response_time: float,
        response_length: int,
        exception: Optional[BaseException] = None,
        context: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        """Listener for the runtime's request event."""
        self.record(response_time, exception is not None, name=name, tags=context)

    def series(self, key: str = "") -> MetricSeries:
        return self._series.get(key) or MetricSeries()

    def start(self, **kwargs: Any) -> None:
        self.started_at = self._clock()
        self.stopped_at = None

    def stop(self, **kwargs: Any) -> None:
        self.stopped_at = self._clock()

    @property
    def elapsed(self) -> float:
        """Seconds between start and stop (or now, while running)."""
        if self.started_at is None:
            return 0.0
        end = self.stopped_at if self.stopped_at is not None else self._clock()
        return max(end - self.started_at, 0.0)

    def request_rate(self, key: str = "") -> Optional[float]:
        """Requests per second for a selector key."""
        elapsed = self.elapsed
        if elapsed <= 0:
            return None
        return self.series(key).count / elapsed

    def attach(self, events: Any) -> None:
        """Register on a runtime event hub (`environment.events`)."""
        events.request.add_listener(self.on_request)
        events.test_start.add_listener(self.start)
        events.test_stop.add_listener(self.stop)
        logger.debug("Request metrics attached")
