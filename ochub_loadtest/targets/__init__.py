"""
Load-test targets.

Each target module defines the entry points for one service (or group of
services) and a `TARGET` record tying them to scenarios and thresholds.
"""

from typing import Dict, List

from ..utils.errors import ConfigurationError
from . import (
    demo_backend,
    fashion_mnist,
    gitops,
    infrastructure,
    mlops,
    observability,
    qwen,
    wine,
)
from .base import Target, entrypoint

TARGETS: Dict[str, Target] = {
    module.TARGET.name: module.TARGET
    for module in (
        wine,
        fashion_mnist,
        qwen,
        demo_backend,
        mlops,
        gitops,
        infrastructure,
        observability,
    )
}


def get_target(name: str) -> Target:
    """
    Look up a target by name.

    Raises:
        ConfigurationError: if no target has that name
    """
    target = TARGETS.get(name.strip())
    if target is None:
        raise ConfigurationError(
            f"Unknown target: {name}. Available: {', '.join(TARGETS)}"
        )
    return target


def list_targets() -> List[str]:
    return list(TARGETS)


__all__ = ["TARGETS", "Target", "entrypoint", "get_target", "list_targets"]
