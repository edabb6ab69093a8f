"""
Base URLs for every service, organized by environment and category.

Environments:
- dev      : external HTTPS routes through the ingress (default)
- internal : Kubernetes service DNS, for in-cluster runs that bypass the gateway

Categories:
- models.custom            : custom ML models (fashion-mnist, wine)
- models.base              : base LLM models (qwen-0.5b)
- platform.mlops           : MLflow, Argo Workflows
- platform.gitops          : ArgoCD
- platform.infrastructure  : MinIO, pgAdmin
- platform.observability   : Grafana
- apps                     : demo applications
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ModelRoute(BaseModel):
    """Gateway path and optional Ray dashboard for one model."""

    model_config = ConfigDict(frozen=True)

    path: str
    dashboard: Optional[str] = None


class ModelURLs(BaseModel):
    model_config = ConfigDict(frozen=True)

    api: str
    custom: Dict[str, ModelRoute] = Field(default_factory=dict)
    base: Dict[str, ModelRoute] = Field(default_factory=dict)


class PlatformService(BaseModel):
    """One entry of the flattened platform service list."""

    model_config = ConfigDict(frozen=True)

    category: str
    name: str
    url: str


class EnvironmentURLs(BaseModel):
    """URL tree for one deployment environment."""

    model_config = ConfigDict(frozen=True)

    name: str
    insecure_skip_tls_verify: bool = False
    models: ModelURLs
    platform: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    apps: Dict[str, str] = Field(default_factory=dict)

    def custom_model_url(self, name: str) -> str:
        """Full URL for a custom model endpoint."""
        route = self.models.custom.get(name)
        if route is None:
            raise ConfigurationError(f"Custom model not found: {name}")
        return f"{self.models.api}{route.path}"

    def base_model_url(self, name: str) -> str:
        """Full URL for a base model endpoint."""
        route = self.models.base.get(name)
        if route is None:
            raise ConfigurationError(f"Base model not found: {name}")
        return f"{self.models.api}{route.path}"

    def platform_url(self, category: str, name: str) -> str:
        try:
            return self.platform[category][name]
        except KeyError:
            raise ConfigurationError(f"Platform service not found: {category}/{name}") from None

    def app_url(self, name: str) -> str:
        try:
            return self.apps[name]
        except KeyError:
            raise ConfigurationError(f"Application not found: {name}") from None

    def platform_services(self) -> List[PlatformService]:
        """All platform services as a flat list, e.g. for health sweeps."""
        return [
            PlatformService(category=category, name=name, url=url)
            for category, services in self.platform.items()
            for name, url in services.items()
        ]


DEFAULT_ENVIRONMENT = "dev"

ENVIRONMENTS: Dict[str, EnvironmentURLs] = {
    # External HTTPS routes; validates the full user path. Used for local
    # runs and for in-cluster runs alike.
    "dev": EnvironmentURLs(
        name="dev",
        insecure_skip_tls_verify=True,
        models=ModelURLs(
            api="https://api.opencloudhub.org",
            custom={
                "fashion-mnist": ModelRoute(
                    path="/models/custom/fashion-mnist-classifier",
                    dashboard="https://fashion-mnist-classifier.dashboard.opencloudhub.org",
                ),
                "wine": ModelRoute(
                    path="/models/custom/wine-classifier",
                    dashboard="https://wine-classifier.dashboard.opencloudhub.org",
                ),
            },
            base={
                "qwen-0.5b": ModelRoute(
                    path="/models/base/qwen-0.5b/v1",
                    dashboard="https://qwen-0.5b.dashboard.opencloudhub.org",
                ),
            },
        ),
        platform={
            "mlops": {
                "mlflow": "https://mlflow.internal.opencloudhub.org",
                "argo-workflows": "https://argo-workflows.internal.opencloudhub.org",
            },
            "gitops": {
                "argocd": "https://argocd.internal.opencloudhub.org",
            },
            "infrastructure": {
                "minio-console": "https://minio.internal.opencloudhub.org",
                "minio-api": "https://minio-api.internal.opencloudhub.org",
                "pgadmin": "https://pgadmin.internal.opencloudhub.org",
            },
            "observability": {
                "grafana": "https://grafana.internal.opencloudhub.org",
            },
        },
        apps={
            "demo-backend": "https://demo-app.opencloudhub.org",
        },
    ),
    # Direct service DNS, bypassing the ingress.
    "internal": EnvironmentURLs(
        name="internal",
        insecure_skip_tls_verify=True,
        models=ModelURLs(
            api="http://istio-ingressgateway.istio-ingress.svc.cluster.local",
            custom={
                "fashion-mnist": ModelRoute(path="/models/custom/fashion-mnist-classifier"),
                "wine": ModelRoute(path="/models/custom/wine-classifier"),
            },
            base={
                "qwen-0.5b": ModelRoute(path="/models/base/qwen-0.5b/v1"),
            },
        ),
        platform={
            "mlops": {
                "mlflow": "http://mlflow.mlops.svc.cluster.local:5000",
                "argo-workflows": "http://argo-workflows-server.mlops.svc.cluster.local:2746",
            },
            "gitops": {
                "argocd": "http://argocd-server.argocd.svc.cluster.local",
            },
            "infrastructure": {
                "minio-console": "http://minio-console.minio-tenant.svc.cluster.local:9090",
                "minio-api": "http://minio.minio-tenant.svc.cluster.local:9000",
                "pgadmin": "http://pgadmin.storage.svc.cluster.local",
            },
            "observability": {
                "grafana": "http://grafana.observability.svc.cluster.local:3000",
            },
        },
        apps={
            "demo-backend": "http://demo-app-backend.demo-app.svc.cluster.local:8000",
        },
    ),
}


def get_environment(name: Optional[str] = None) -> EnvironmentURLs:
    """Look up an environment by name (`dev` when unset)."""
    name = name or DEFAULT_ENVIRONMENT
    env = ENVIRONMENTS.get(name)
    if env is None:
        raise ConfigurationError(
            f"Unknown environment: {name}. Available: {', '.join(sorted(ENVIRONMENTS))}"
        )
    logger.debug("Using environment %s (models api=%s)", name, env.models.api)
    return env
