# school_scheduler/config.py

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    redis_url: str = "redis://localhost:6379/0"
    store_key_prefix: str = "school:"

    timezone: str = "Asia/Tokyo"
    catalog_weeks: int = 52

    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash"
    drafting_timeout_seconds: float = 15.0

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_prefix="SCHOOL_",
        extra="ignore",
    )


settings = Settings()
