"""
Threshold evaluation.

Parses selectors like `http_req_duration{scenario:wine-health}` and
predicates like `p(95)<2500`, evaluates them against the collected
request metrics and check outcomes, and renders the verdict.

Supported metrics:
- http_req_failed   : rate (failed / total), count (failed)
- http_req_duration : avg, min, med, max, p(N), count (milliseconds)
- http_reqs         : rate (requests per second), count
- checks            : rate (pass rate), count (passes)

A selector without samples passes.
"""

import operator
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from rich.box import ROUNDED
from rich.console import Console
from rich.table import Table

from ..helpers.checks import CheckRecorder
from ..utils.errors import ConfigurationError
from .metrics import RequestMetrics

_SELECTOR = re.compile(r"^(?P<metric>[a-z_]+)(?:\{(?P<tag>[a-zA-Z_]+):(?P<value>[^}]+)\})?$")
_EXPRESSION = re.compile(
    r"^\s*(?P<stat>rate|count|avg|min|max|med|p\((?P<pct>\d+(?:\.\d+)?)\))"
    r"\s*(?P<op><=|>=|==|!=|<|>)\s*(?P<value>-?\d+(?:\.\d+)?)\s*$"
)

_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}

_TREND_STATS = ("avg", "min", "max", "med", "count")
METRIC_STATS: Dict[str, Tuple[str, ...]] = {
    "http_req_failed": ("rate", "count"),
    "http_req_duration": _TREND_STATS,
    "http_reqs": ("rate", "count"),
    "checks": ("rate", "count"),
}


@dataclass(frozen=True)
class Selector:
    metric: str
    scope: str = ""  # 'tag:value', empty for the whole run

    @classmethod
    def parse(cls, text: str) -> "Selector":
        match = _SELECTOR.match(text.strip())
        if not match:
            raise ConfigurationError(f"Invalid threshold selector: {text!r}")
        metric = match.group("metric")
        if metric not in METRIC_STATS:
            raise ConfigurationError(f"Unknown threshold metric: {metric!r}")
        scope = f"{match.group('tag')}:{match.group('value')}" if match.group("tag") else ""
        return cls(metric=metric, scope=scope)


@dataclass(frozen=True)
class Expression:
    stat: str
    op: str
    limit: float

    @classmethod
    def parse(cls, text: str, metric: str) -> "Expression":
        match = _EXPRESSION.match(text)
        if not match:
            raise ConfigurationError(f"Invalid threshold expression for {metric}: {text!r}")
        stat = match.group("stat")
        allowed = METRIC_STATS[metric]
        if stat not in allowed and not (match.group("pct") and metric == "http_req_duration"):
            raise ConfigurationError(f"{stat} is not available for {metric}")
        return cls(stat=stat, op=match.group("op"), limit=float(match.group("value")))

    def holds(self, observed: float) -> bool:
        return _OPERATORS[self.op](observed, self.limit)


@dataclass(frozen=True)
class ThresholdOutcome:
    selector: str
    expression: str
    observed: Optional[float]
    passed: bool


def parse_thresholds(thresholds: Mapping[str, Sequence[str]]) -> List[Tuple[str, Selector, str, Expression]]:
    """
    Parse every selector and predicate.

    Raises:
        ConfigurationError: on the first invalid selector or expression
    """
    parsed = []
    for selector_text, predicates in thresholds.items():
        selector = Selector.parse(selector_text)
        for text in predicates:
            parsed.append((selector_text, selector, text, Expression.parse(text, selector.metric)))
    return parsed


def observe(
    selector: Selector,
    stat: str,
    metrics: RequestMetrics,
    recorder: CheckRecorder,
) -> Optional[float]:
    """Observed value of `stat` for a selector, or None without samples."""
    if selector.metric == "checks":
        stats = recorder.stats(selector.scope)
        if not stats.total:
            return None
        return float(stats.passes) if stat == "count" else stats.rate

    series = metrics.series(selector.scope)
    if not series.count:
        return None
    if selector.metric == "http_req_failed":
        return float(series.failures) if stat == "count" else series.failure_rate
    if selector.metric == "http_reqs":
        return float(series.count) if stat == "count" else metrics.request_rate(selector.scope)
    if stat == "count":
        return float(series.count)
    return series.aggregate(stat)


def evaluate_thresholds(
    thresholds: Mapping[str, Sequence[str]],
    metrics: RequestMetrics,
    recorder: CheckRecorder,
) -> List[ThresholdOutcome]:
    outcomes = []
    for selector_text, selector, text, expression in parse_thresholds(thresholds):
        observed = observe(selector, expression.stat, metrics, recorder)
        passed = True if observed is None else expression.holds(observed)
        outcomes.append(
            ThresholdOutcome(selector=selector_text, expression=text, observed=observed, passed=passed)
        )
    return outcomes


def all_passed(outcomes: Sequence[ThresholdOutcome]) -> bool:
    return all(o.passed for o in outcomes)


def render_report(outcomes: Sequence[ThresholdOutcome], console: Optional[Console] = None) -> Table:
    """Print a pass/fail table of threshold outcomes and return it."""
    table = Table(box=ROUNDED, show_header=True, header_style="bold", title="Thresholds")
    table.add_column("Selector", style="cyan")
    table.add_column("Expression")
    table.add_column("Observed", justify="right")
    table.add_column("Result", justify="center")

    for outcome in outcomes:
        observed = "-" if outcome.observed is None else f"{outcome.observed:.3f}"
        result = "[green]PASS[/green]" if outcome.passed else "[red]FAIL[/red]"
        table.add_row(outcome.selector, outcome.expression, observed, result)

    (console or Console()).print(table)
    return table
