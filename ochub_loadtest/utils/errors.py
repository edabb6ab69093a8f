"""Custom exceptions for the load-testing suite."""

from __future__ import annotations


class LoadTestError(Exception):
    """Base exception for all ochub-loadtest errors."""
    pass


class ConfigurationError(LoadTestError):
    """Raised when a test type, environment, target or profile is invalid.

    Always fatal: a script that cannot build its configuration must not start.
    """
    pass


class FixtureLoadError(LoadTestError):
    """Raised when a sample-data fixture is missing or malformed."""

    def __init__(self, message: str, *, path: str):
        self.path = path
        super().__init__(f"{message} (file={path})")


class EmptyDataError(LoadTestError):
    """Raised when sampling from an empty fixture."""
    pass
