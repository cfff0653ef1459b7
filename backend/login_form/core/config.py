from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_title: str = "Login form"
    log_level: str = "INFO"
    # optional JSON rule table replacing DEFAULT_RULES
    rules_file: Path | None = None

    model_config = SettingsConfigDict(env_file=".env", env_prefix="LOGIN_FORM_")


@lru_cache
def get_settings() -> Settings: return Settings()
