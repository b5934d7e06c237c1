from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    endpoint: str = Field(default="http://localhost:8000", alias="RQPUSH_ENDPOINT")
    shared_secret: str | None = Field(default=None, alias="RQPUSH_SHARED_SECRET")
    timeout_s: float = Field(default=10.0, alias="RQPUSH_TIMEOUT_S")
    defaults_path: str | None = Field(default=None, alias="RQPUSH_DEFAULTS_PATH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
