"""Wine quality classifier (custom model served by Ray Serve)."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_health, check_json_field, check_prediction
from ..helpers.data import load_json_data, random_sample
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint

MODEL_NAME = "wine"

WINE_DATA = load_json_data("wine-samples", "wine.json")


def base_url(env: EnvironmentURLs) -> str:
    return env.custom_model_url(MODEL_NAME)


@entrypoint(think_time=0.5)
def health(ctx: ScenarioContext) -> None:
    url = base_url(ctx.env)
    result = ctx.http.get(endpoint_url(url, "custom-model", "health"), "wine-health")
    ctx.verify(check_health, result.response, "wine-health")

    result = ctx.http.get(endpoint_url(url, "custom-model", "info"), "wine-info")
    ctx.verify(check_json_field, result.response, "wine-info", "model_name")


@entrypoint(think_time=0.5)
def predict(ctx: ScenarioContext) -> None:
    if not WINE_DATA:
        return
    sample = random_sample(WINE_DATA)
    result = ctx.http.post_json(
        endpoint_url(base_url(ctx.env), "custom-model", "predict"), sample, "wine-predict"
    )
    ctx.verify(check_prediction, result.response, "wine-predict")


@entrypoint(think_time=0)
def predict_batch(ctx: ScenarioContext) -> None:
    """Single-row batch prediction, as fast as the arrival rate allows."""
    if not WINE_DATA:
        return
    sample = random_sample(WINE_DATA)
    ctx.http.post_json(
        endpoint_url(base_url(ctx.env), "custom-model", "predict"),
        {"features": [sample["features"]]},
        "wine-predict",
    )


TARGET = Target(
    name="model-wine",
    description="Wine quality classifier: health, info and predictions",
    base_url=base_url,
    entrypoints={"health": health, "predict": predict, "predict_batch": predict_batch},
    scenarios={"wine-health": "health", "wine-predict": "predict"},
    thresholds={
        "http_req_duration{scenario:wine-health}": ["p(95)<2000"],
        "http_req_duration{scenario:wine-predict}": ["p(95)<3000"],
    },
    breakpoint_exec="predict_batch",
)
