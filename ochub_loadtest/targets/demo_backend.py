"""RAG demo backend (FastAPI application answering questions with an LLM)."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_health, check_status
from ..helpers.data import load_json_data, random_sample
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint

APP_NAME = "demo-backend"

SMOKE_QUERY = "What is MLOps?"
QUERY_TIMEOUT = "30s"

RAG_QUERIES = load_json_data("rag-queries", "rag-queries.json")


def base_url(env: EnvironmentURLs) -> str:
    return env.app_url(APP_NAME)


def _url(ctx: ScenarioContext, operation: str) -> str:
    return endpoint_url(base_url(ctx.env), APP_NAME, operation)


@entrypoint(think_time=0.5)
def health(ctx: ScenarioContext) -> None:
    result = ctx.http.get(_url(ctx, "health"), "backend-health")
    ctx.verify(check_health, result.response, "backend-health")

    result = ctx.http.get(_url(ctx, "root"), "backend-root")
    ctx.verify(check_status, result.response, "backend-root", 200)


def _rag_query(ctx: ScenarioContext) -> None:
    if not RAG_QUERIES:
        return
    sample = random_sample(RAG_QUERIES)
    result = ctx.http.post_json(
        _url(ctx, "query"),
        {"question": sample["question"], "stream": False},
        "backend-query",
        timeout=QUERY_TIMEOUT,
    )
    if result.ok:
        ctx.http.check_duration(result.response, "backend-query", 30000)


@entrypoint(think_time=(1.0, 2.0))
def api(ctx: ScenarioContext) -> None:
    """Prompt endpoint for smoke runs, RAG queries (the real workload) otherwise."""
    if ctx.is_smoke:
        result = ctx.http.post_json(_url(ctx, "prompt"), {"query": SMOKE_QUERY}, "backend-prompt")
        ctx.verify(check_status, result.response, "backend-prompt", 200)
        return
    _rag_query(ctx)


@entrypoint(think_time=0)
def query(ctx: ScenarioContext) -> None:
    _rag_query(ctx)


TARGET = Target(
    name="app-backend",
    description="RAG demo backend: health, prompt and question answering",
    base_url=base_url,
    entrypoints={"health": health, "api": api, "query": query},
    scenarios={"backend-health": "health", "backend-api": "api"},
    thresholds={
        "http_req_duration{scenario:backend-health}": ["p(95)<2000"],
        "http_req_duration{scenario:backend-api}": ["p(95)<5000"],
        "http_req_duration{name:backend-query}": ["p(95)<30000"],
    },
    breakpoint_exec="query",
)
