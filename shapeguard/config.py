"""Process-level settings loaded from environment variables.

Only logging is configured here. Validator behaviour is set per instance
through `ValidatorOptions` and never depends on the environment.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Logging settings, read from `SHAPEGUARD_*` variables or a `.env` file."""

    LOG_LEVEL: str = "warning"
    DEBUG: bool = False

    model_config = {
        "env_prefix": "SHAPEGUARD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
