"""
Wires one target and its run configuration into a Locust process.

`LoadTestSuite.from_settings()` resolves environment, target and test type
from `LoadTestSettings`; `register()` hooks metrics collection and the
threshold verdict into the runtime's events. A failed threshold sets the
process exit code to 1.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from ..config.environments import EnvironmentURLs, get_environment
from ..config.settings import LoadTestSettings, get_settings
from ..core.models import TestType
from ..helpers.checks import CheckRecorder
from ..targets import Target, get_target
from .metrics import RequestMetrics
from .shape import build_shape_class
from .thresholds import (
    ThresholdOutcome,
    all_passed,
    evaluate_thresholds,
    parse_thresholds,
    render_report,
)
from .users import build_user_classes

logger = logging.getLogger(__name__)


class LoadTestSuite:
    """Everything a locustfile exposes for one (target, test type) run."""

    def __init__(
        self,
        target: Target,
        test_type: Union[str, TestType],
        env: EnvironmentURLs,
        recorder: Optional[CheckRecorder] = None,
        metrics: Optional[RequestMetrics] = None,
    ):
        self.target = target
        self.env = env
        self.options = target.options(test_type)
        # Invalid threshold expressions fail here, before any load is generated
        parse_thresholds(self.options.thresholds)
        self.recorder = recorder or CheckRecorder()
        self.metrics = metrics or RequestMetrics()
        self.user_classes = build_user_classes(target, self.options, env, self.recorder)
        self.shape_class = build_shape_class(self.options, list(self.user_classes.values()))
        self.outcomes: List[ThresholdOutcome] = []

    @classmethod
    def from_settings(cls, settings: Optional[LoadTestSettings] = None) -> "LoadTestSuite":
        settings = settings or get_settings()
        return cls(
            target=get_target(settings.test_target),
            test_type=settings.test_type,
            env=get_environment(settings.test_env),
        )

    def exports(self) -> Dict[str, type]:
        """Class name -> class, for the locustfile's module namespace."""
        classes: Dict[str, type] = {cls.__name__: cls for cls in self.user_classes.values()}
        classes[self.shape_class.__name__] = self.shape_class
        return classes

    def register(self, events: Any) -> None:
        """Attach to a runtime event hub (`locust.events` or `environment.events`)."""
        self.metrics.attach(events)
        events.test_start.add_listener(self.on_test_start)
        events.quitting.add_listener(self.on_quitting)

    def on_test_start(self, environment: Any = None, **kwargs: Any) -> None:
        logger.info("=" * 60)
        logger.info(
            "%s test: %s (%s)",
            self.options.test_type.capitalize(),
            self.target.name,
            self.target.description,
        )
        logger.info("Environment: %s, base URL: %s", self.env.name, self.target.base_url(self.env))
        logger.info("Scenarios: %s", ", ".join(self.options.scenarios))
        logger.info("=" * 60)

    def evaluate(self) -> List[ThresholdOutcome]:
        self.outcomes = evaluate_thresholds(self.options.thresholds, self.metrics, self.recorder)
        return self.outcomes

    def on_quitting(self, environment: Any = None, **kwargs: Any) -> None:
        outcomes = self.evaluate()
        render_report(outcomes)
        if all_passed(outcomes):
            logger.info("All %d threshold(s) passed", len(outcomes))
            return
        failed = [f"{o.selector} {o.expression}" for o in outcomes if not o.passed]
        logger.error("Thresholds failed: %s", "; ".join(failed))
        if environment is not None:
            environment.process_exit_code = 1
