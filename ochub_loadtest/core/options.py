"""Options builder: assembles one RunConfiguration per test script."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from ..config.thresholds import LOAD_PROFILES, SUMMARY_TREND_STATS, THRESHOLDS
from ..utils.durations import format_seconds
from ..utils.errors import ConfigurationError
from .models import (
    RunConfiguration,
    ScenarioOverride,
    ScenarioSpec,
    TestType,
    ThresholdSet,
    as_predicates,
)

logger = logging.getLogger(__name__)

# Seconds between automatically assigned scenario start offsets
SCENARIO_STAGGER_SECONDS = 2

DEFAULT_SCENARIO = "default"

ScenarioInput = Mapping[str, Union[ScenarioOverride, Mapping[str, Any]]]
ThresholdInput = Mapping[str, Union[str, Sequence[str]]]


def merge_thresholds(base: ThresholdInput, extra: Optional[ThresholdInput] = None) -> Dict[str, tuple]:
    """Overlay `extra` on `base`; an overlapping selector is replaced, not combined."""
    merged = {selector: as_predicates(value) for selector, value in base.items()}
    for selector, value in (extra or {}).items():
        merged[selector] = as_predicates(value)
    return merged


def build_options(
    test_type: Union[str, TestType],
    test_target: str,
    scenarios: Optional[ScenarioInput] = None,
    extra_thresholds: Optional[ThresholdInput] = None,
) -> RunConfiguration:
    """
    Build the run configuration for a test script.

    Args:
        test_type: smoke, load, stress, spike, soak or breakpoint
        test_target: target label used for dashboard filtering (e.g. 'model-wine')
        scenarios: scenario name -> partial override (optional). Without it a
            single 'default' scenario runs the test type's profile unchanged.
            Each scenario is tagged with its name; that tag wins over a
            `scenario` key in the override's own tags.
        extra_thresholds: thresholds overlaid on the test type's defaults,
            e.g. {'http_req_duration{scenario:wine-predict}': ['p(95)<5000']}

    Returns:
        RunConfiguration with merged scenarios, thresholds, tags and summary stats

    Raises:
        ConfigurationError: for an unknown test type or an invalid override

    Example:
        options = build_options('load', 'model-wine', {
            'wine-health': {'exec': 'health'},
            'wine-predict': {'exec': 'predict'},
        })
    """
    key = test_type.value if isinstance(test_type, TestType) else test_type
    profile = LOAD_PROFILES.get(key)
    base_thresholds = THRESHOLDS.get(key)
    if profile is None or base_thresholds is None:
        raise ConfigurationError(
            f"Unknown test type: {test_type}. Available: {', '.join(LOAD_PROFILES)}"
        )

    overrides = {
        name: ScenarioOverride.from_mapping(override)
        for name, override in (scenarios or {DEFAULT_SCENARIO: None}).items()
    }

    configured: Dict[str, ScenarioSpec] = {}
    next_offset = 0
    for name, override in overrides.items():
        if override.start_time is None:
            start_time = format_seconds(next_offset)
            next_offset += SCENARIO_STAGGER_SECONDS
        else:
            start_time = override.start_time
        configured[name] = ScenarioSpec(
            name=name,
            profile=override.apply(profile),
            start_time=start_time,
            exec=override.exec,
            tags={**(override.tags or {}), "scenario": name},
        )

    options = RunConfiguration(
        scenarios=configured,
        thresholds=merge_thresholds(base_thresholds, extra_thresholds),
        tags={"test_type": key, "test_target": test_target},
        summary_trend_stats=SUMMARY_TREND_STATS,
    )
    logger.debug(
        "Built %s options for %s: scenarios=%s", key, test_target, ", ".join(configured)
    )
    return options
