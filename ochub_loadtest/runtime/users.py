"""One Locust user class per scenario of a run configuration."""

from __future__ import annotations

import logging
import random
import re
from typing import Dict, Tuple, Type

from locust import HttpUser, task

from ..config.environments import EnvironmentURLs
from ..core.models import RunConfiguration, ScenarioSpec
from ..core.timeline import ScenarioTimeline
from ..helpers.checks import CheckRecorder
from ..helpers.http import HttpHelper
from ..targets.base import EntryPoint, Target, think_time_of
from .context import ScenarioContext

logger = logging.getLogger(__name__)


class ScenarioUser(HttpUser):
    """
    Runs one scenario's entry point in a loop.

    Concrete subclasses are built by `build_user_classes()`; they carry the
    scenario, its timeline, the resolved entry point and shared run state
    as class attributes.
    """

    abstract = True

    scenario: ScenarioSpec
    timeline: ScenarioTimeline
    entry: EntryPoint
    think_time: Tuple[float, float] = (0.5, 0.5)
    env_urls: EnvironmentURLs
    recorder: CheckRecorder
    test_type: str

    def on_start(self) -> None:
        tags = dict(self.scenario.tags)
        http = HttpHelper(
            self.client,
            self.env_urls,
            recorder=self.recorder,
            tags=tags,
            runtime_session=True,
        )
        self.ctx = ScenarioContext(
            scenario=self.scenario.name,
            test_type=self.test_type,
            env=self.env_urls,
            http=http,
            recorder=self.recorder,
            tags=tags,
        )

    def run_time(self) -> float:
        """Seconds since the load shape started."""
        shape = self.environment.shape_class
        return shape.get_run_time() if shape is not None else 0.0

    def wait_time(self) -> float:
        if self.timeline.is_arrival_rate:
            return self.timeline.pacing_interval(self.run_time())
        low, high = self.think_time
        return random.uniform(low, high) if high > low else low

    @task
    def iterate(self) -> None:
        self.entry(self.ctx)
        self.ctx.iteration += 1


def user_class_name(scenario: str) -> str:
    """'wine-health' -> 'WineHealthUser'."""
    parts = [p for p in re.split(r"[^0-9a-zA-Z]+", scenario) if p]
    return "".join(p[0].upper() + p[1:] for p in parts) + "User"


def build_user_classes(
    target: Target,
    options: RunConfiguration,
    env: EnvironmentURLs,
    recorder: CheckRecorder,
) -> Dict[str, Type[ScenarioUser]]:
    """
    Build a concrete ScenarioUser subclass for every scenario.

    Returns:
        Scenario name -> user class, in scenario order

    Raises:
        ConfigurationError: if a scenario's `exec` is not one of the
            target's entry points
    """
    host = target.base_url(env)
    classes: Dict[str, Type[ScenarioUser]] = {}
    for name, spec in options.scenarios.items():
        entry = target.resolve(spec.exec)
        attrs = {
            "abstract": False,
            "host": host,
            "scenario": spec,
            "timeline": ScenarioTimeline(spec),
            "entry": staticmethod(entry),
            "think_time": think_time_of(entry),
            "env_urls": env,
            "recorder": recorder,
            "test_type": options.test_type,
            "__module__": __name__,
        }
        classes[name] = type(ScenarioUser)(user_class_name(name), (ScenarioUser,), attrs)
        logger.debug("Scenario %s -> %s (exec=%s)", name, classes[name].__name__, spec.exec or "all")
    return classes
