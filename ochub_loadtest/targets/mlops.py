"""MLOps platform services: MLflow and Argo Workflows."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_health, check_json_field
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint

CATEGORY = "mlops"


def mlflow_url(env: EnvironmentURLs) -> str:
    return env.platform_url(CATEGORY, "mlflow")


def argo_url(env: EnvironmentURLs) -> str:
    return env.platform_url(CATEGORY, "argo-workflows")


@entrypoint(think_time=0.5)
def mlflow(ctx: ScenarioContext) -> None:
    url = mlflow_url(ctx.env)
    result = ctx.http.health_check(endpoint_url(url, "platform/mlflow", "root"), "mlflow-root")
    if result.healthy:
        ctx.http.check_duration(result.response, "mlflow-root", 2000)

    result = ctx.http.get(endpoint_url(url, "platform/mlflow", "health"), "mlflow-health")
    if result.ok:
        ctx.http.check_duration(result.response, "mlflow-health", 2000)

    result = ctx.http.get(
        endpoint_url(url, "platform/mlflow", "api"), "mlflow-experiments", params={"max_results": 1}
    )
    ctx.verify(check_json_field, result.response, "mlflow-experiments", "experiments")


@entrypoint(think_time=0.5)
def argo_workflows(ctx: ScenarioContext) -> None:
    url = argo_url(ctx.env)
    result = ctx.http.health_check(
        endpoint_url(url, "platform/argo-workflows", "root"), "argo-workflows-root"
    )
    if result.healthy:
        ctx.http.check_duration(result.response, "argo-workflows-root", 2000)

    result = ctx.http.get(endpoint_url(url, "platform/argo-workflows", "info"), "argo-workflows-info")
    ctx.verify(check_health, result.response, "argo-workflows-info")


@entrypoint(think_time=0)
def mlflow_health(ctx: ScenarioContext) -> None:
    ctx.http.get(endpoint_url(mlflow_url(ctx.env), "platform/mlflow", "health"), "mlflow-health")


TARGET = Target(
    name="platform-mlops",
    description="MLflow tracking server and Argo Workflows UI/API",
    base_url=mlflow_url,
    entrypoints={
        "mlflow": mlflow,
        "argo_workflows": argo_workflows,
        "mlflow_health": mlflow_health,
    },
    scenarios={"mlflow": "mlflow", "argo-workflows": "argo_workflows"},
    thresholds={
        "http_req_duration{scenario:mlflow}": ["p(95)<2000"],
        "http_req_duration{scenario:argo-workflows}": ["p(95)<2000"],
    },
    breakpoint_exec="mlflow_health",
)
