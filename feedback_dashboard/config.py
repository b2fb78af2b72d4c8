import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Cloudflare D1
    d1_account_id: str = ""
    d1_database_id: str = ""
    cloudflare_api_token: str = ""
    d1_api_base: str = "https://api.cloudflare.com/client/v4"
    d1_timeout_seconds: float = Field(default=30.0, gt=0)
    feedback_table: str = Field(default="feedback", pattern=r"^[A-Za-z_][A-Za-z0-9_]*$")

    # Dashboard
    dashboard_title: str = "Customer Feedback Dashboard"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


settings = Settings()
