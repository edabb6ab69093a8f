from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoadTestSettings(BaseSettings):
    """Process-wide selection of environment, test type and target.

    Read once from the environment (and an optional `.env` file), then
    passed explicitly to whatever needs it.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    test_env: str = Field(default="dev")  # TEST_ENV
    test_type: str = Field(default="smoke")  # TEST_TYPE
    test_target: str = Field(default="model-wine")  # TEST_TARGET
    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> LoadTestSettings:
    return LoadTestSettings()
