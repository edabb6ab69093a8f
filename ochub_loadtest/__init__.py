"""
ochub-loadtest: load-test configuration and scripts for the OpenCloudHub
ML platform, run with Locust.

Build the run configuration for a target:
    options = get_target("model-wine").options("load")
"""

__version__ = "0.1.0"

from .config import get_environment, get_settings
from .core.models import LoadProfile, RunConfiguration, ScenarioOverride, Stage, TestType
from .core.options import build_options, merge_thresholds
from .targets import TARGETS, get_target
from .utils.errors import ConfigurationError, EmptyDataError, FixtureLoadError, LoadTestError

__all__ = [
    "ConfigurationError",
    "EmptyDataError",
    "FixtureLoadError",
    "LoadProfile",
    "LoadTestError",
    "RunConfiguration",
    "ScenarioOverride",
    "Stage",
    "TARGETS",
    "TestType",
    "build_options",
    "get_environment",
    "get_settings",
    "get_target",
    "merge_thresholds",
]
