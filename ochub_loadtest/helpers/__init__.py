"""HTTP, check and data helpers used by target scripts."""

from .checks import (
    CheckRecorder,
    check,
    check_completion,
    check_health,
    check_json_field,
    check_latency,
    check_prediction,
    check_status,
)
from .data import load_json_data, random_sample, sequential_sample
from .http import HttpHelper, RequestResult

__all__ = [
    "CheckRecorder",
    "check",
    "check_completion",
    "check_health",
    "check_json_field",
    "check_latency",
    "check_prediction",
    "check_status",
    "load_json_data",
    "random_sample",
    "sequential_sample",
    "HttpHelper",
    "RequestResult",
]
