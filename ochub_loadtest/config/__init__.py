"""Static configuration: environments, endpoints, thresholds and load profiles."""

from .environments import ENVIRONMENTS, EnvironmentURLs, get_environment
from .settings import LoadTestSettings, get_settings
from .thresholds import LOAD_PROFILES, SUMMARY_TREND_STATS, THRESHOLDS

__all__ = [
    "ENVIRONMENTS",
    "EnvironmentURLs",
    "get_environment",
    "LoadTestSettings",
    "get_settings",
    "LOAD_PROFILES",
    "SUMMARY_TREND_STATS",
    "THRESHOLDS",
]
