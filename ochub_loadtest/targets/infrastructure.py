"""Infrastructure services: MinIO object storage and pgAdmin."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check, check_health, check_status, status_of
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint

CATEGORY = "infrastructure"


def minio_console_url(env: EnvironmentURLs) -> str:
    return env.platform_url(CATEGORY, "minio-console")


def minio_api_url(env: EnvironmentURLs) -> str:
    return env.platform_url(CATEGORY, "minio-api")


def pgadmin_url(env: EnvironmentURLs) -> str:
    return env.platform_url(CATEGORY, "pgadmin")


@entrypoint(think_time=0.5)
def minio(ctx: ScenarioContext) -> None:
    result = ctx.http.get(
        endpoint_url(minio_console_url(ctx.env), "platform/minio-console", "root"),
        "minio-console-root",
    )
    ctx.verify(check_status, result.response, "minio-console-root", 200)

    result = ctx.http.get(
        endpoint_url(minio_api_url(ctx.env), "platform/minio-api", "health"), "minio-api-health"
    )
    ctx.verify(check_health, result.response, "minio-api-health")


@entrypoint(think_time=0.5)
def pgadmin(ctx: ScenarioContext) -> None:
    # pgAdmin redirects anonymous users to its login page
    result = ctx.http.get(
        endpoint_url(pgadmin_url(ctx.env), "platform/pgadmin", "root"),
        "pgadmin-root",
        allow_redirects=False,
    )
    ctx.verify(
        check,
        result.response,
        {"pgadmin-root: status 200 or 302": lambda r: status_of(r) in (200, 302)},
    )


@entrypoint(think_time=0)
def minio_health(ctx: ScenarioContext) -> None:
    ctx.http.health_check(
        endpoint_url(minio_api_url(ctx.env), "platform/minio-api", "health"), "minio-api-health"
    )


TARGET = Target(
    name="platform-infra",
    description="MinIO console/API and pgAdmin",
    base_url=minio_console_url,
    entrypoints={"minio": minio, "pgadmin": pgadmin, "minio_health": minio_health},
    scenarios={"minio": "minio", "pgadmin": "pgadmin"},
    thresholds={
        "http_req_duration{scenario:minio}": ["p(95)<2000"],
        "http_req_duration{scenario:pgadmin}": ["p(95)<3000"],
    },
    breakpoint_exec="minio_health",
)
