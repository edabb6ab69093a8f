"""Fashion-MNIST image classifier (custom model served by Ray Serve)."""

from __future__ import annotations

from ..config.endpoints import endpoint_url
from ..config.environments import EnvironmentURLs
from ..helpers.checks import check_health, check_json_field, check_prediction
from ..helpers.data import load_json_data, random_sample
from ..runtime.context import ScenarioContext
from .base import Target, entrypoint

MODEL_NAME = "fashion-mnist"

# Each sample is a flat list of 784 grayscale pixels
MNIST_DATA = load_json_data("fashion-mnist-samples", "fashion-mnist.json")


def base_url(env: EnvironmentURLs) -> str:
    return env.custom_model_url(MODEL_NAME)


@entrypoint(think_time=0.5)
def health(ctx: ScenarioContext) -> None:
    url = base_url(ctx.env)
    result = ctx.http.get(endpoint_url(url, "custom-model", "health"), "fashion-health")
    ctx.verify(check_health, result.response, "fashion-health")

    result = ctx.http.get(endpoint_url(url, "custom-model", "info"), "fashion-info")
    ctx.verify(check_json_field, result.response, "fashion-info", "model_uri")


@entrypoint(think_time=0.5)
def predict(ctx: ScenarioContext) -> None:
    if not MNIST_DATA:
        return
    payload = {"images": [random_sample(MNIST_DATA)]}
    result = ctx.http.post_json(
        endpoint_url(base_url(ctx.env), "custom-model", "predict"), payload, "fashion-predict"
    )
    ctx.verify(check_prediction, result.response, "fashion-predict")


TARGET = Target(
    name="model-fashion-mnist",
    description="Fashion-MNIST classifier: health, info and image predictions",
    base_url=base_url,
    entrypoints={"health": health, "predict": predict},
    scenarios={"fashion-health": "health", "fashion-predict": "predict"},
    thresholds={
        "http_req_duration{scenario:fashion-health}": ["p(95)<2000"],
        "http_req_duration{scenario:fashion-predict}": ["p(95)<5000"],
    },
    breakpoint_exec="predict",
)
