"""
Client settings.

Read from DOCS_* environment variables or a local .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Connection settings for the Docs API."""

    base_url: str = "http://localhost:8000/api"
    token: str = ""
    timeout: float = 30.0

    model_config = {"env_prefix": "DOCS_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
