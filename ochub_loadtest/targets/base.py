"""Base record for a load-test target."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

from ..config.environments import EnvironmentURLs
from ..core.models import RunConfiguration, TestType
from ..core.options import DEFAULT_SCENARIO, build_options
from ..runtime.context import ScenarioContext
from ..utils.errors import ConfigurationError

EntryPoint = Callable[[ScenarioContext], None]
ThinkTime = Tuple[float, float]

DEFAULT_THINK_TIME: ThinkTime = (0.5, 0.5)


def entrypoint(think_time: Union[float, ThinkTime] = DEFAULT_THINK_TIME) -> Callable[[EntryPoint], EntryPoint]:
    """
    Mark a function as a scenario entry point.

    Args:
        think_time: pause after each iteration in seconds; a (min, max)
            pair picks uniformly between the bounds
    """
    if isinstance(think_time, (int, float)):
        think_time = (float(think_time), float(think_time))

    def decorator(func: EntryPoint) -> EntryPoint:
        func.think_time = tuple(think_time)  # type: ignore[attr-defined]
        return func

    return decorator


def think_time_of(func: EntryPoint) -> ThinkTime:
    return getattr(func, "think_time", DEFAULT_THINK_TIME)


@dataclass(frozen=True)
class Target:
    """
    One service (or group of services) under test.

    Attributes:
        name: target label, also the `test_target` tag (e.g. 'model-wine')
        description: one line for listings
        base_url: resolves the primary base URL from an environment
        entrypoints: exec name -> entry point
        scenarios: scenario name -> exec name, used by every test type
            except breakpoint
        thresholds: extra thresholds merged over the test type's defaults
        breakpoint_exec: entry point of the single breakpoint scenario
    """

    name: str
    description: str
    base_url: Callable[[EnvironmentURLs], str]
    entrypoints: Mapping[str, EntryPoint]
    scenarios: Mapping[str, str]
    thresholds: Mapping[str, Sequence[str]] = field(default_factory=dict)
    breakpoint_exec: Optional[str] = None

    def __post_init__(self) -> None:
        for exec_name in (*self.scenarios.values(), self.breakpoint_exec):
            if exec_name is not None and exec_name not in self.entrypoints:
                raise ConfigurationError(f"Target {self.name} has no entry point {exec_name!r}")

    def options(self, test_type: Union[str, TestType]) -> RunConfiguration:
        """Run configuration for this target under `test_type`."""
        key = test_type.value if isinstance(test_type, TestType) else test_type
        if key == TestType.BREAKPOINT.value and self.breakpoint_exec:
            return build_options(key, self.name, {DEFAULT_SCENARIO: {"exec": self.breakpoint_exec}})
        scenarios = {name: {"exec": exec_name} for name, exec_name in self.scenarios.items()}
        return build_options(key, self.name, scenarios, self.thresholds)

    def resolve(self, exec_name: Optional[str]) -> EntryPoint:
        """
        Entry point for a scenario's `exec`; None runs every scenario's
        entry point in turn.

        Raises:
            ConfigurationError: if the target has no such entry point
        """
        if exec_name is None:
            return self.run_all
        try:
            return self.entrypoints[exec_name]
        except KeyError:
            raise ConfigurationError(
                f"Target {self.name} has no entry point {exec_name!r}. "
                f"Available: {', '.join(self.entrypoints)}"
            ) from None

    def run_all(self, ctx: ScenarioContext) -> None:
        for exec_name in dict.fromkeys(self.scenarios.values()):
            self.entrypoints[exec_name](ctx)

    def describe(self, env: EnvironmentURLs) -> Dict[str, str]:
        return {"name": self.name, "description": self.description, "base_url": self.base_url(env)}
