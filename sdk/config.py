# sdk/config.py
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOOSTSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = "http://127.0.0.1:8085"
    session_token: Optional[str] = None
    timeout: float = 10.0
    log_level: str = "INFO"


settings = Settings()
