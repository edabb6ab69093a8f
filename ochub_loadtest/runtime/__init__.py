"""
Runtime adapter between run configurations and Locust.

Import the Locust-backed modules (`users`, `shape`, `suite`) explicitly;
this package itself only exposes the runtime-independent pieces.
"""

from .context import ScenarioContext
from .metrics import MetricSeries, RequestMetrics
from .thresholds import ThresholdOutcome, evaluate_thresholds, render_report

__all__ = [
    "MetricSeries",
    "RequestMetrics",
    "ScenarioContext",
    "ThresholdOutcome",
    "evaluate_thresholds",
    "render_report",
]
