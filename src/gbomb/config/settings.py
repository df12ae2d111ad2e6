"""Client configuration using pydantic-settings.

Loads configuration from environment variables (prefix ``GIANTBOMB_``) or a
``.env`` file in the working directory.

Example:
    export GIANTBOMB_API_KEY=0123456789abcdef
    export GIANTBOMB_REQUEST_INTERVAL=31
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from gbomb.api.rate_limiter import DEFAULT_REQUEST_INTERVAL

DEFAULT_ENDPOINT = "https://www.giantbomb.com"


class GiantBombSettings(BaseSettings):
    """Settings for building an ``Invoker``.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="GIANTBOMB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    endpoint: str = DEFAULT_ENDPOINT
    api_key: str = ""

    # Seconds between requests
    request_interval: float = DEFAULT_REQUEST_INTERVAL

    # HTTP settings
    http_timeout: float = 30.0
    user_agent: str = "gbomb/1.0"


@lru_cache
def get_settings() -> GiantBombSettings:
    """Get cached settings instance.

    Returns:
        GiantBombSettings loaded from the environment.
    """
    return GiantBombSettings()
