"""Per-user context handed to every entry-point function."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ..config.environments import EnvironmentURLs
from ..helpers.checks import CheckRecorder
from ..helpers.http import HttpHelper


@dataclass
class ScenarioContext:
    """What an entry point needs for one iteration of its scenario."""

    scenario: str
    test_type: str
    env: EnvironmentURLs
    http: HttpHelper
    recorder: CheckRecorder
    tags: Mapping[str, str] = field(default_factory=dict)
    iteration: int = 0

    @property
    def is_smoke(self) -> bool:
        return self.test_type == "smoke"

    def verify(self, check_fn: Callable[..., bool], response: Any, *args: Any) -> bool:
        """Run a named check from `helpers.checks` with this scenario's recorder and tags."""
        return check_fn(response, *args, recorder=self.recorder, tags=self.tags)
