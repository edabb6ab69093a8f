"""Core run-configuration components.

`build_options` lives in `core.options`; it is not re-exported here because
the threshold tables import this package's models.
"""

from .models import (
    Executor,
    LoadProfile,
    RunConfiguration,
    ScenarioOverride,
    ScenarioSpec,
    Stage,
    TestType,
)

__all__ = [
    "Executor",
    "LoadProfile",
    "RunConfiguration",
    "ScenarioOverride",
    "ScenarioSpec",
    "Stage",
    "TestType",
]
