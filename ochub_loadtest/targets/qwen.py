"""Qwen 0.5B base model behind an OpenAI-compatible API (vLLM)."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_completion, check_health, check_json_field
from ..helpers.data import load_json_data, random_sample
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint

MODEL_NAME = "qwen-0.5b"

SMOKE_MESSAGES = [{"role": "user", "content": "Hello, who are you?"}]

# LLM responses take far longer than the default request timeout
COMPLETION_TIMEOUT = "60s"

PROMPTS = load_json_data("qwen-prompts", "qwen-prompts.json")


def base_url(env: EnvironmentURLs) -> str:
    return env.base_model_url(MODEL_NAME)


def _has_prompts(ctx: ScenarioContext) -> bool:
    return ctx.is_smoke or bool(PROMPTS)


def _chat_payload(ctx: ScenarioContext, max_tokens: int) -> dict:
    if ctx.is_smoke:
        messages = SMOKE_MESSAGES
    else:
        messages = random_sample(PROMPTS)["messages"]
    payload = {"model": MODEL_NAME, "messages": messages, "max_tokens": max_tokens}
    if not ctx.is_smoke:
        payload["temperature"] = 0.7
    return payload


@entrypoint(think_time=0.5)
def health(ctx: ScenarioContext) -> None:
    result = ctx.http.get(endpoint_url(base_url(ctx.env), "base-model", "models"), "qwen-models")
    ctx.verify(check_health, result.response, "qwen-models")
    ctx.verify(check_json_field, result.response, "qwen-models", "data")


@entrypoint(think_time=1.0)
def completion(ctx: ScenarioContext) -> None:
    if not _has_prompts(ctx):
        return
    result = ctx.http.post_json(
        endpoint_url(base_url(ctx.env), "base-model", "chat"),
        _chat_payload(ctx, max_tokens=50),
        "qwen-chat",
        timeout=COMPLETION_TIMEOUT,
    )
    ctx.verify(check_completion, result.response, "qwen-chat")
    if result.ok and not ctx.is_smoke:
        ctx.http.check_duration(result.response, "qwen-chat", 15000)


@entrypoint(think_time=0)
def completion_minimal(ctx: ScenarioContext) -> None:
    """Ten-token completions for maximum throughput."""
    if not _has_prompts(ctx):
        return
    ctx.http.post_json(
        endpoint_url(base_url(ctx.env), "base-model", "chat"),
        _chat_payload(ctx, max_tokens=10),
        "qwen-chat",
        timeout=COMPLETION_TIMEOUT,
    )


TARGET = Target(
    name="model-qwen",
    description="Qwen 0.5B chat completions (OpenAI-compatible)",
    base_url=base_url,
    entrypoints={
        "health": health,
        "completion": completion,
        "completion_minimal": completion_minimal,
    },
    scenarios={"qwen-health": "health", "qwen-completion": "completion"},
    thresholds={
        "http_req_duration{scenario:qwen-health}": ["p(95)<2000"],
        "http_req_duration{scenario:qwen-completion}": ["p(95)<30000"],
    },
    breakpoint_exec="completion_minimal",
)
