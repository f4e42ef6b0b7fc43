# preconsult/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    num_questions: int = Field(5, gt=0, validation_alias="NUM_QUESTIONS")
    save_delay_seconds: float = Field(2.0, ge=0, validation_alias="SAVE_DELAY_SECONDS")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"], validation_alias="CORS_ALLOW_ORIGINS"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
