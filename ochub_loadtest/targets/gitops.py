"""GitOps platform services: ArgoCD."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_health, check_json_field, check_status
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint


def argocd_url(env: EnvironmentURLs) -> str:
    return env.platform_url("gitops", "argocd")


@entrypoint(think_time=0.5)
def argocd(ctx: ScenarioContext) -> None:
    url = argocd_url(ctx.env)
    result = ctx.http.get(endpoint_url(url, "platform/argocd", "health"), "argocd-health")
    ctx.verify(check_health, result.response, "argocd-health")

    result = ctx.http.get(endpoint_url(url, "platform/argocd", "root"), "argocd-root")
    ctx.verify(check_status, result.response, "argocd-root", 200)

    result = ctx.http.get(endpoint_url(url, "platform/argocd", "api"), "argocd-version")
    ctx.verify(check_status, result.response, "argocd-version", 200)
    ctx.verify(check_json_field, result.response, "argocd-version", "Version")


@entrypoint(think_time=0)
def argocd_health(ctx: ScenarioContext) -> None:
    ctx.http.get(endpoint_url(argocd_url(ctx.env), "platform/argocd", "health"), "argocd-health")


TARGET = Target(
    name="platform-gitops",
    description="ArgoCD server: health, UI and version API",
    base_url=argocd_url,
    entrypoints={"argocd": argocd, "argocd_health": argocd_health},
    scenarios={"argocd": "argocd"},
    thresholds={"http_req_duration{scenario:argocd}": ["p(95)<2000"]},
    breakpoint_exec="argocd_health",
)
