"""
API endpoint paths by service type.

- custom-model : FastAPI models served by Ray Serve (fashion-mnist, wine)
- base-model   : OpenAI-compatible LLM endpoints served by vLLM (qwen)
- ray-dashboard: per-model Ray Serve dashboards
- platform     : MLflow, ArgoCD, Argo Workflows, MinIO, Grafana, pgAdmin
- demo-backend : RAG demo application

Paths are relative; join them onto a base URL from `environments`.
"""

from __future__ import annotations

from typing import Dict

from ..utils.errors import ConfigurationError

CUSTOM_MODEL_ENDPOINTS: Dict[str, str] = {
    "root": "/",
    "health": "/health",
    "info": "/info",
    "predict": "/predict",
    "docs": "/docs",
    "openapi": "/openapi.json",
}

BASE_MODEL_ENDPOINTS: Dict[str, str] = {
    "models": "/models",
    "completions": "/completions",
    "chat": "/chat/completions",
}

RAY_DASHBOARD_ENDPOINTS: Dict[str, str] = {
    "root": "/",
}

# Availability varies with each service's configuration.
PLATFORM_ENDPOINTS: Dict[str, Dict[str, str]] = {
    "mlflow": {
        "root": "/",
        "health": "/health",
        "api": "/api/2.0/mlflow/experiments/search",
    },
    "argocd": {
        "root": "/",
        "health": "/healthz",
        "api": "/api/version",
    },
    "argo-workflows": {
        "root": "/",
        "health": "/healthz",
        "info": "/api/v1/info",
    },
    "minio-console": {
        "root": "/",
    },
    "minio-api": {
        "health": "/minio/health/live",
    },
    "grafana": {
        "root": "/",
        "health": "/api/health",
    },
    "pgadmin": {
        "root": "/",
    },
}

DEMO_BACKEND_ENDPOINTS: Dict[str, str] = {
    "root": "/api/",
    "health": "/api/health",
    "docs": "/api/docs",
    "prompt": "/api/prompt",
    "query": "/api/query",
    "reload_prompt": "/api/admin/reload-prompt",
}

SERVICE_ENDPOINTS: Dict[str, Dict[str, str]] = {
    "custom-model": CUSTOM_MODEL_ENDPOINTS,
    "base-model": BASE_MODEL_ENDPOINTS,
    "ray-dashboard": RAY_DASHBOARD_ENDPOINTS,
    "demo-backend": DEMO_BACKEND_ENDPOINTS,
    **{f"platform/{name}": paths for name, paths in PLATFORM_ENDPOINTS.items()},
}


def endpoints_for(service_type: str) -> Dict[str, str]:
    """Return a copy of the operation -> path table for a service type."""
    try:
        return dict(SERVICE_ENDPOINTS[service_type])
    except KeyError:
        raise ConfigurationError(
            f"Unknown service type: {service_type}. "
            f"Available: {', '.join(sorted(SERVICE_ENDPOINTS))}"
        ) from None


def endpoint_url(base_url: str, service_type: str, operation: str) -> str:
    """Join a base URL and the path of `operation` for `service_type`."""
    paths = endpoints_for(service_type)
    if operation not in paths:
        raise ConfigurationError(f"Service type {service_type!r} has no {operation!r} endpoint")
    return f"{base_url.rstrip('/')}{paths[operation]}"
