"""Unit tests for load-test targets and their entry points."""

import pytest

from ochub_loadtest.core.models import TestType
from ochub_loadtest.helpers.http import HttpHelper
from ochub_loadtest.runtime.context import ScenarioContext
from ochub_loadtest.targets import (
    TARGETS,
    demo_backend,
    fashion_mnist,
    get_target,
    list_targets,
    qwen,
    wine,
)
from ochub_loadtest.targets.base import DEFAULT_THINK_TIME, Target, entrypoint, think_time_of
from ochub_loadtest.utils.errors import ConfigurationError

EXPECTED_TARGETS = [
    "model-wine",
    "model-fashion-mnist",
    "model-qwen",
    "app-backend",
    "platform-mlops",
    "platform-gitops",
    "platform-infra",
    "platform-obs",
]


def make_context(session, env, recorder, test_type="load", scenario="s"):
    tags = {"scenario": scenario}
    return ScenarioContext(
        scenario=scenario,
        test_type=test_type,
        env=env,
        http=HttpHelper(session, env, recorder=recorder, tags=tags),
        recorder=recorder,
        tags=tags,
    )


def requested(session):
    return [(c.args[0], c.args[1]) for c in session.request.call_args_list]


@pytest.mark.unit
class TestRegistry:
    def test_all_targets_registered(self):
        assert list_targets() == EXPECTED_TARGETS

    def test_get_target(self):
        assert get_target(" model-wine ").name == "model-wine"

    def test_unknown_target(self):
        with pytest.raises(ConfigurationError, match="Unknown target: model-iris"):
            get_target("model-iris")


@pytest.mark.unit
@pytest.mark.parametrize("name", EXPECTED_TARGETS)
class TestTargetOptions:
    @pytest.mark.parametrize("test_type", [t for t in TestType if t is not TestType.BREAKPOINT])
    def test_scenarios_and_thresholds(self, name, test_type):
        target = TARGETS[name]
        options = target.options(test_type)

        assert list(options.scenarios) == list(target.scenarios)
        assert options.test_target == name
        for selector, predicates in target.thresholds.items():
            assert options.thresholds[selector] == tuple(predicates)
        for spec in options.scenarios.values():
            assert target.resolve(spec.exec) is target.entrypoints[spec.exec]

    def test_breakpoint_single_default_scenario(self, name):
        target = TARGETS[name]
        options = target.options("breakpoint")

        assert list(options.scenarios) == ["default"]
        assert options.scenarios["default"].exec == target.breakpoint_exec
        assert options.scenarios["default"].profile.executor == "ramping-arrival-rate"

    def test_base_url_resolves(self, name, dev_env):
        assert TARGETS[name].base_url(dev_env).startswith("https://")


@pytest.mark.unit
class TestTargetRecord:
    def test_unknown_exec_rejected(self):
        with pytest.raises(ConfigurationError, match="no entry point 'missing'"):
            Target(
                name="t",
                description="",
                base_url=lambda env: "https://host",
                entrypoints={},
                scenarios={"s": "missing"},
            )

    def test_resolve_unknown(self):
        with pytest.raises(ConfigurationError):
            get_target("model-wine").resolve("testPredict")

    def test_resolve_none_runs_all(self, mock_session, dev_env, recorder):
        target = get_target("platform-obs")
        ctx = make_context(mock_session, dev_env, recorder)

        target.resolve(None)(ctx)

        assert len(requested(mock_session)) == 2

    def test_entrypoint_think_time(self):
        @entrypoint(think_time=(1, 2))
        def work(ctx):
            pass

        assert think_time_of(work) == (1, 2)
        assert think_time_of(lambda ctx: None) == DEFAULT_THINK_TIME
        assert think_time_of(get_target("model-wine").entrypoints["predict_batch"]) == (0.0, 0.0)


@pytest.mark.unit
class TestEntryPoints:
    def test_wine_health(self, mock_session, dev_env, recorder, make_response):
        mock_session.request.return_value = make_response(200, {"model_name": "wine", "status": "ok"})
        ctx = make_context(mock_session, dev_env, recorder, scenario="wine-health")

        get_target("model-wine").entrypoints["health"](ctx)

        base = dev_env.custom_model_url("wine")
        assert requested(mock_session) == [("GET", f"{base}/health"), ("GET", f"{base}/info")]
        assert recorder.by_name()["wine-info: has model_name"].passes == 1
        assert recorder.stats("scenario:wine-health").fails == 0

    def test_wine_predict_posts_sample(self, mock_session, dev_env, recorder, make_response):
        mock_session.request.return_value = make_response(200, {"prediction": 1})
        ctx = make_context(mock_session, dev_env, recorder)

        get_target("model-wine").entrypoints["predict"](ctx)

        body = mock_session.request.call_args.kwargs["json"]
        assert len(body["features"]) == 13
        assert recorder.by_name()["wine-predict: has prediction"].passes == 1

    def test_wine_breakpoint_batch_payload(self, mock_session, dev_env, recorder):
        ctx = make_context(mock_session, dev_env, recorder, test_type="breakpoint")

        get_target("model-wine").entrypoints["predict_batch"](ctx)

        body = mock_session.request.call_args.kwargs["json"]
        assert len(body["features"]) == 1 and len(body["features"][0]) == 13

    def test_fashion_payload(self, mock_session, dev_env, recorder):
        ctx = make_context(mock_session, dev_env, recorder)

        get_target("model-fashion-mnist").entrypoints["predict"](ctx)

        body = mock_session.request.call_args.kwargs["json"]
        assert len(body["images"]) == 1 and len(body["images"][0]) == 784

    def test_qwen_smoke_completion(self, mock_session, dev_env, recorder, make_response):
        mock_session.request.return_value = make_response(200, {"choices": [{"message": {}}]})
        ctx = make_context(mock_session, dev_env, recorder, test_type="smoke")

        get_target("model-qwen").entrypoints["completion"](ctx)

        kwargs = mock_session.request.call_args.kwargs
        assert kwargs["json"] == {
            "model": "qwen-0.5b",
            "messages": [{"role": "user", "content": "Hello, who are you?"}],
            "max_tokens": 50,
        }
        assert kwargs["timeout"] == 60
        assert recorder.by_name()["qwen-chat: has choices"].passes == 1

    def test_qwen_load_uses_prompt_fixture(self, mock_session, dev_env, recorder):
        ctx = make_context(mock_session, dev_env, recorder, test_type="load")

        get_target("model-qwen").entrypoints["completion_minimal"](ctx)

        body = mock_session.request.call_args.kwargs["json"]
        assert body["max_tokens"] == 10
        assert body["temperature"] == 0.7
        assert body["messages"][-1]["role"] == "user"

    def test_backend_smoke_prompt(self, mock_session, dev_env, recorder):
        ctx = make_context(mock_session, dev_env, recorder, test_type="smoke")

        get_target("app-backend").entrypoints["api"](ctx)

        method, url = requested(mock_session)[0]
        assert (method, url) == ("POST", f"{dev_env.app_url('demo-backend')}/api/prompt")
        assert mock_session.request.call_args.kwargs["json"] == {"query": "What is MLOps?"}

    def test_backend_load_rag_query(self, mock_session, dev_env, recorder):
        ctx = make_context(mock_session, dev_env, recorder, test_type="load")

        get_target("app-backend").entrypoints["api"](ctx)

        kwargs = mock_session.request.call_args.kwargs
        assert requested(mock_session)[0][1].endswith("/api/query")
        assert kwargs["json"]["stream"] is False
        assert kwargs["json"]["question"]
        assert kwargs["timeout"] == 30

    def test_pgadmin_accepts_redirect(self, mock_session, dev_env, recorder, make_response):
        mock_session.request.return_value = make_response(302)
        ctx = make_context(mock_session, dev_env, recorder)

        get_target("platform-infra").entrypoints["pgadmin"](ctx)

        assert mock_session.request.call_args.kwargs["allow_redirects"] is False
        assert recorder.by_name()["pgadmin-root: status 200 or 302"].passes == 1

    def test_mlflow_experiments_search(self, mock_session, dev_env, recorder):
        ctx = make_context(mock_session, dev_env, recorder)

        get_target("platform-mlops").entrypoints["mlflow"](ctx)

        urls = [url for _, url in requested(mock_session)]
        assert urls[-1].endswith("/api/2.0/mlflow/experiments/search")
        assert mock_session.request.call_args.kwargs["params"] == {"max_results": 1}

    def test_gitops_checks_version(self, mock_session, dev_env, recorder, make_response):
        mock_session.request.return_value = make_response(200, {"Version": "v2.10"})
        ctx = make_context(mock_session, dev_env, recorder, scenario="argocd")

        get_target("platform-gitops").entrypoints["argocd"](ctx)

        assert len(requested(mock_session)) == 3
        assert recorder.stats("scenario:argocd").fails == 0


@pytest.mark.unit
class TestEmptyFixtures:
    @pytest.mark.parametrize(
        "module,fixture,target,exec_name,test_type",
        [
            (wine, "WINE_DATA", "model-wine", "predict", "load"),
            (wine, "WINE_DATA", "model-wine", "predict_batch", "breakpoint"),
            (fashion_mnist, "MNIST_DATA", "model-fashion-mnist", "predict", "load"),
            (fashion_mnist, "MNIST_DATA", "model-fashion-mnist", "predict", "breakpoint"),
            (demo_backend, "RAG_QUERIES", "app-backend", "api", "load"),
            (demo_backend, "RAG_QUERIES", "app-backend", "query", "breakpoint"),
            (qwen, "PROMPTS", "model-qwen", "completion", "load"),
            (qwen, "PROMPTS", "model-qwen", "completion_minimal", "breakpoint"),
        ],
    )
    def test_workload_skipped(
        self, monkeypatch, mock_session, dev_env, recorder, module, fixture, target, exec_name, test_type
    ):
        monkeypatch.setattr(module, fixture, ())
        ctx = make_context(mock_session, dev_env, recorder, test_type=test_type)

        get_target(target).entrypoints[exec_name](ctx)

        assert mock_session.request.call_count == 0
        assert recorder.stats("").total == 0

    def test_qwen_smoke_ignores_prompt_fixture(self, monkeypatch, mock_session, dev_env, recorder):
        monkeypatch.setattr(qwen, "PROMPTS", ())
        ctx = make_context(mock_session, dev_env, recorder, test_type="smoke")

        get_target("model-qwen").entrypoints["completion"](ctx)

        assert mock_session.request.call_count == 1
        assert mock_session.request.call_args.kwargs["json"]["messages"] == qwen.SMOKE_MESSAGES
