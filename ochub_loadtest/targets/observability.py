"""Observability stack: Grafana."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_health, check_json_field, check_status
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint


def grafana_url(env: EnvironmentURLs) -> str:
    return env.platform_url("observability", "grafana")


@entrypoint(think_time=0.5)
def grafana(ctx: ScenarioContext) -> None:
    url = grafana_url(ctx.env)
    result = ctx.http.get(endpoint_url(url, "platform/grafana", "health"), "grafana-health")
    ctx.verify(check_health, result.response, "grafana-health")
    ctx.verify(check_json_field, result.response, "grafana-health", "database")

    result = ctx.http.get(endpoint_url(url, "platform/grafana", "root"), "grafana-root")
    ctx.verify(check_status, result.response, "grafana-root", 200)


@entrypoint(think_time=0)
def grafana_health(ctx: ScenarioContext) -> None:
    ctx.http.get(endpoint_url(grafana_url(ctx.env), "platform/grafana", "health"), "grafana-health")


TARGET = Target(
    name="platform-obs",
    description="Grafana health API and UI",
    base_url=grafana_url,
    entrypoints={"grafana": grafana, "grafana_health": grafana_health},
    scenarios={"grafana": "grafana"},
    thresholds={"http_req_duration{scenario:grafana}": ["p(95)<2000"]},
    breakpoint_exec="grafana_health",
)
