"""Run-configuration data model.

- `Stage` / `LoadProfile`: the concurrency shape of one scenario
- `ScenarioOverride`: explicit partial record supplied by a test script
- `ScenarioSpec`: a fully merged, named scenario
- `RunConfiguration`: the object handed to the runtime
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..utils.durations import format_seconds, parse_duration
from ..utils.errors import ConfigurationError


class TestType(str, Enum):
    """Supported test types."""

    __test__ = False  # not a pytest class

    SMOKE = "smoke"
    LOAD = "load"
    STRESS = "stress"
    SPIKE = "spike"
    SOAK = "soak"
    BREAKPOINT = "breakpoint"


class Executor(str, Enum):
    """Load profile executors understood by the runtime adapter."""

    CONSTANT_VUS = "constant-vus"
    RAMPING_VUS = "ramping-vus"
    RAMPING_ARRIVAL_RATE = "ramping-arrival-rate"


ThresholdSet = Mapping[str, Tuple[str, ...]]


def as_predicates(value: Union[str, Sequence[str]]) -> Tuple[str, ...]:
    """Normalize one threshold value to a tuple of predicate strings."""
    if isinstance(value, str):
        return (value,)
    predicates = tuple(value)
    if not all(isinstance(p, str) for p in predicates):
        raise ConfigurationError(f"Threshold predicates must be strings, got {value!r}")
    return predicates


def _check_count(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{label} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class Stage:
    """One step of a ramp: reach `target` over `duration`."""

    duration: str
    target: int

    def __post_init__(self) -> None:
        parse_duration(self.duration)
        _check_count(self.target, "Stage target")

    @classmethod
    def coerce(cls, value: Union["Stage", Mapping[str, Any]]) -> "Stage":
        if isinstance(value, Stage):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(duration=value["duration"], target=value["target"])
            except KeyError as exc:
                raise ConfigurationError(f"Stage is missing {exc.args[0]!r}: {dict(value)!r}") from exc
        raise ConfigurationError(f"Invalid stage: {value!r}")

    @property
    def seconds(self) -> float:
        return parse_duration(self.duration)

    def to_dict(self) -> Dict[str, Any]:
        return {"duration": self.duration, "target": self.target}


def _coerce_stages(stages: Optional[Sequence[Any]]) -> Optional[Tuple[Stage, ...]]:
    if stages is None:
        return None
    if isinstance(stages, (str, bytes)) or not isinstance(stages, Sequence):
        raise ConfigurationError(f"Stages must be a sequence, got {stages!r}")
    return tuple(Stage.coerce(s) for s in stages)


# Runtime payload key for each profile/override field
_RUNTIME_KEYS = {
    "executor": "executor",
    "vus": "vus",
    "duration": "duration",
    "stages": "stages",
    "start_rate": "startRate",
    "time_unit": "timeUnit",
    "pre_allocated_vus": "preAllocatedVUs",
    "max_vus": "maxVUs",
    "start_time": "startTime",
    "exec": "exec",
    "tags": "tags",
}


@dataclass(frozen=True)
class LoadProfile:
    """
    Concurrency/duration shape for a scenario.

    Three forms are valid:
    - constant-vus: `vus` users for `duration`
    - ramping-vus: ordered `stages`
    - ramping-arrival-rate: `start_rate` per `time_unit`, ramped by `stages`,
      served by `pre_allocated_vus` (at most `max_vus`)
    """

    executor: str
    vus: Optional[int] = None
    duration: Optional[str] = None
    stages: Tuple[Stage, ...] = ()
    start_rate: Optional[int] = None
    time_unit: Optional[str] = None
    pre_allocated_vus: Optional[int] = None
    max_vus: Optional[int] = None

    def __post_init__(self) -> None:
        try:
            executor = Executor(self.executor)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown executor: {self.executor!r}") from exc
        object.__setattr__(self, "executor", executor.value)
        object.__setattr__(self, "stages", _coerce_stages(self.stages) or ())

        for name in ("vus", "start_rate", "pre_allocated_vus", "max_vus"):
            value = getattr(self, name)
            if value is not None:
                _check_count(value, name)
        for name in ("duration", "time_unit"):
            value = getattr(self, name)
            if value is not None:
                parse_duration(value)

        if executor is Executor.CONSTANT_VUS and (self.vus is None or self.duration is None):
            raise ConfigurationError("constant-vus profile requires vus and duration")
        if executor is not Executor.CONSTANT_VUS and not self.stages:
            raise ConfigurationError(f"{executor.value} profile requires at least one stage")

    def to_dict(self) -> Dict[str, Any]:
        """Runtime-shaped payload, omitting unset fields."""
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "stages":
                if not value:
                    continue
                value = [s.to_dict() for s in value]
            out[_RUNTIME_KEYS[f.name]] = value
        return out


_PROFILE_FIELDS = tuple(f.name for f in fields(LoadProfile))
_ALIASES = {runtime: name for name, runtime in _RUNTIME_KEYS.items()}


@dataclass(frozen=True)
class ScenarioOverride:
    """
    Partial scenario supplied by a test script.

    Every field is optional; a set field replaces the base profile's value
    wholesale. Supplying `stages` replaces the whole stage list.
    """

    executor: Optional[str] = None
    vus: Optional[int] = None
    duration: Optional[str] = None
    stages: Optional[Tuple[Stage, ...]] = None
    start_rate: Optional[int] = None
    time_unit: Optional[str] = None
    pre_allocated_vus: Optional[int] = None
    max_vus: Optional[int] = None
    start_time: Optional[str] = None
    exec: Optional[str] = None
    tags: Optional[Mapping[str, str]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stages", _coerce_stages(self.stages))
        start_time = self.start_time
        if isinstance(start_time, str) and not start_time.strip():
            # Empty means "assign the next staggered offset"
            start_time = None
        elif isinstance(start_time, (int, float)) and not isinstance(start_time, bool):
            start_time = format_seconds(parse_duration(start_time))
        elif start_time is not None:
            parse_duration(start_time)
        object.__setattr__(self, "start_time", start_time)
        if self.tags is not None:
            object.__setattr__(self, "tags", dict(self.tags))

    @classmethod
    def from_mapping(cls, data: Union["ScenarioOverride", Mapping[str, Any], None]) -> "ScenarioOverride":
        """Build an override from snake_case keys or the runtime's camelCase keys."""
        if isinstance(data, ScenarioOverride):
            return data
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Scenario override must be a mapping, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in _RUNTIME_KEYS:
                raise ConfigurationError(f"Unknown scenario field: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    def apply(self, base: LoadProfile) -> LoadProfile:
        """Shallow, field-by-field merge onto `base` (override wins)."""
        merged = {}
        for name in _PROFILE_FIELDS:
            value = getattr(self, name)
            merged[name] = getattr(base, name) if value is None else value
        return LoadProfile(**merged)


@dataclass(frozen=True)
class ScenarioSpec:
    """A named unit of work inside a run configuration."""

    name: str
    profile: LoadProfile
    start_time: str = "0s"
    exec: Optional[str] = None
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    @property
    def start_offset(self) -> float:
        """Start offset in seconds."""
        return parse_duration(self.start_time)

    def to_dict(self) -> Dict[str, Any]:
        out = self.profile.to_dict()
        out["startTime"] = self.start_time
        if self.exec is not None:
            out["exec"] = self.exec
        out["tags"] = dict(self.tags)
        return out


@dataclass(frozen=True)
class RunConfiguration:
    """Fully merged configuration for one test run. Read-only once built."""

    scenarios: Mapping[str, ScenarioSpec]
    thresholds: ThresholdSet
    tags: Mapping[str, str]
    summary_trend_stats: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "scenarios", MappingProxyType(dict(self.scenarios)))
        object.__setattr__(
            self,
            "thresholds",
            MappingProxyType({k: as_predicates(v) for k, v in self.thresholds.items()}),
        )
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))
        object.__setattr__(self, "summary_trend_stats", tuple(self.summary_trend_stats))

    @property
    def test_type(self) -> str:
        return self.tags["test_type"]

    @property
    def test_target(self) -> Optional[str]:
        return self.tags.get("test_target")

    def to_dict(self) -> Dict[str, Any]:
        """Payload in the shape the runtime reads before execution."""
        return {
            "scenarios": {name: spec.to_dict() for name, spec in self.scenarios.items()},
            "thresholds": {k: list(v) for k, v in self.thresholds.items()},
            "tags": dict(self.tags),
            "summaryTrendStats": list(self.summary_trend_stats),
        }
