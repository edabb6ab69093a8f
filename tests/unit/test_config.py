"""Unit tests for environments, endpoints and settings."""

import pytest
from pydantic import ValidationError

from ochub_loadtest.config.endpoints import (
    PLATFORM_ENDPOINTS,
    SERVICE_ENDPOINTS,
    endpoint_url,
    endpoints_for,
)
from ochub_loadtest.config.environments import ENVIRONMENTS, get_environment
from ochub_loadtest.config.settings import LoadTestSettings, get_settings
from ochub_loadtest.utils.errors import ConfigurationError


@pytest.mark.unit
class TestEnvironments:
    def test_default_is_dev(self):
        assert get_environment().name == "dev"
        assert get_environment(None) is ENVIRONMENTS["dev"]

    def test_unknown_environment(self):
        with pytest.raises(ConfigurationError, match="Unknown environment: prod"):
            get_environment("prod")

    def test_custom_model_url(self, dev_env):
        assert (
            dev_env.custom_model_url("wine")
            == "https://api.opencloudhub.org/models/custom/wine-classifier"
        )

    def test_base_model_url(self):
        env = get_environment("internal")
        assert env.base_model_url("qwen-0.5b").endswith("/models/base/qwen-0.5b/v1")
        assert env.base_model_url("qwen-0.5b").startswith("http://istio-ingressgateway")

    def test_unknown_model(self, dev_env):
        with pytest.raises(ConfigurationError, match="Custom model not found"):
            dev_env.custom_model_url("iris")
        with pytest.raises(ConfigurationError, match="Base model not found"):
            dev_env.base_model_url("llama")

    def test_platform_and_app_urls(self, dev_env):
        assert dev_env.platform_url("gitops", "argocd") == "https://argocd.internal.opencloudhub.org"
        assert dev_env.app_url("demo-backend") == "https://demo-app.opencloudhub.org"
        with pytest.raises(ConfigurationError):
            dev_env.platform_url("gitops", "flux")
        with pytest.raises(ConfigurationError):
            dev_env.app_url("frontend")

    def test_platform_services_flat_list(self, dev_env):
        services = dev_env.platform_services()
        names = {(s.category, s.name) for s in services}

        assert ("mlops", "mlflow") in names
        assert ("infrastructure", "pgadmin") in names
        assert len(services) == sum(len(v) for v in dev_env.platform.values())

    def test_internal_has_no_dashboards(self):
        env = get_environment("internal")
        assert all(route.dashboard is None for route in env.models.custom.values())

    def test_environment_is_frozen(self, dev_env):
        with pytest.raises(ValidationError):
            dev_env.name = "changed"


@pytest.mark.unit
class TestEndpoints:
    def test_platform_keys_prefixed(self):
        for name in PLATFORM_ENDPOINTS:
            assert f"platform/{name}" in SERVICE_ENDPOINTS

    def test_endpoints_for_returns_copy(self):
        paths = endpoints_for("custom-model")
        paths["predict"] = "/changed"
        assert endpoints_for("custom-model")["predict"] == "/predict"

    def test_unknown_service_type(self):
        with pytest.raises(ConfigurationError, match="Unknown service type"):
            endpoints_for("kafka")

    def test_endpoint_url_joins_without_double_slash(self):
        assert endpoint_url("https://host/", "base-model", "chat") == "https://host/chat/completions"
        assert endpoint_url("https://host", "demo-backend", "root") == "https://host/api/"

    def test_unknown_operation(self):
        with pytest.raises(ConfigurationError, match="no 'predict' endpoint"):
            endpoint_url("https://host", "platform/grafana", "predict")


@pytest.mark.unit
class TestSettings:
    def test_defaults(self, clean_settings):
        settings = LoadTestSettings(_env_file=None)

        assert settings.test_env == "dev"
        assert settings.test_type == "smoke"
        assert settings.test_target == "model-wine"
        assert settings.log_level == "INFO"

    def test_reads_environment(self, clean_settings):
        clean_settings.setenv("TEST_ENV", "internal")
        clean_settings.setenv("TEST_TYPE", "load")
        clean_settings.setenv("TEST_TARGET", "platform-obs")

        settings = get_settings()

        assert (settings.test_env, settings.test_type, settings.test_target) == (
            "internal",
            "load",
            "platform-obs",
        )
        assert get_settings() is settings

    def test_reads_env_file(self, clean_settings, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TEST_TARGET=model-qwen\n")

        settings = LoadTestSettings(_env_file=env_file)

        assert settings.test_target == "model-qwen"
