# mockshop/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process settings, read from the environment or a local .env file.

    PORT defaults to 3000 so browser suites can point at
    http://localhost:3000 without extra setup.
    """

    PROJECT_NAME: str = "Mock Shop"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
