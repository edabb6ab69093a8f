"""Concurrency and arrival rate of a scenario over wall-clock time."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from ..utils.durations import parse_duration
from .models import Executor, ScenarioSpec

# Level a ramping-vus scenario starts from before its first stage
RAMP_START_VUS = 1


def _ramp_value(elapsed: float, initial: float, stages: Sequence[Tuple[float, int]]) -> Optional[float]:
    """Linear interpolation through (seconds, target) stages; None once past the last."""
    previous = initial
    for seconds, target in stages:
        if elapsed < seconds:
            return previous + (target - previous) * (elapsed / seconds)
        elapsed -= seconds
        previous = target
    return None


class ScenarioTimeline:
    """Resolves one ScenarioSpec into users (and, for arrival-rate, iterations/s) at time t.

    All times are seconds since the run started.
    """

    def __init__(self, spec: ScenarioSpec):
        self.spec = spec
        self.name = spec.name
        self.start = spec.start_offset
        profile = spec.profile
        self.executor = Executor(profile.executor)
        self._stages = tuple((stage.seconds, stage.target) for stage in profile.stages)

        if self.executor is Executor.CONSTANT_VUS:
            self.duration = parse_duration(profile.duration)
        else:
            self.duration = sum(seconds for seconds, _ in self._stages)

        self._time_unit = parse_duration(profile.time_unit or "1s") or 1.0

    @property
    def end(self) -> float:
        return self.start + self.duration

    @property
    def is_arrival_rate(self) -> bool:
        return self.executor is Executor.RAMPING_ARRIVAL_RATE

    def is_active(self, elapsed: float) -> bool:
        return self.start <= elapsed < self.end

    def is_done(self, elapsed: float) -> bool:
        return elapsed >= self.end

    def users_at(self, elapsed: float) -> int:
        """Number of concurrent users the scenario wants at `elapsed`."""
        if not self.is_active(elapsed):
            return 0
        profile = self.spec.profile
        if self.executor is Executor.CONSTANT_VUS:
            return profile.vus
        if self.executor is Executor.RAMPING_VUS:
            value = _ramp_value(elapsed - self.start, RAMP_START_VUS, self._stages)
            return int(round(value)) if value is not None else 0
        # arrival-rate: a fixed pool, paced by rate_at()
        pool = profile.pre_allocated_vus or profile.max_vus or 1
        if profile.max_vus is not None:
            pool = min(pool, profile.max_vus)
        return pool

    def rate_at(self, elapsed: float) -> float:
        """Target iterations per second (arrival-rate scenarios only; 0 otherwise)."""
        if not self.is_arrival_rate or not self.is_active(elapsed):
            return 0.0
        start_rate = self.spec.profile.start_rate or 0
        value = _ramp_value(elapsed - self.start, start_rate, self._stages)
        if value is None:
            return 0.0
        return value / self._time_unit

    def pacing_interval(self, elapsed: float) -> float:
        """Seconds each pooled user waits between iterations to hold the target rate."""
        rate = self.rate_at(elapsed)
        users = self.users_at(elapsed)
        if rate <= 0 or users <= 0:
            return 1.0
        return users / rate


class RunTimeline:
    """All scenario timelines of a run configuration."""

    def __init__(self, scenarios: Sequence[ScenarioSpec]):
        self.scenarios = tuple(ScenarioTimeline(spec) for spec in scenarios)

    @property
    def end(self) -> float:
        return max((t.end for t in self.scenarios), default=0.0)

    def total_users(self, elapsed: float) -> int:
        return sum(t.users_at(elapsed) for t in self.scenarios)

    def active(self, elapsed: float) -> Tuple[ScenarioTimeline, ...]:
        return tuple(t for t in self.scenarios if t.users_at(elapsed) > 0)

    def is_done(self, elapsed: float) -> bool:
        return all(t.is_done(elapsed) for t in self.scenarios)

