from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "AI Response Generator"
    secret_key: str = Field(default="dev-change-me")
    session_cookie: str = "tone_reply_session"
    max_sessions: int = Field(default=1000, ge=1)
    # Empty or "none" disables the timeout; N8N workflows that call an LLM can be slow.
    webhook_timeout_seconds: Optional[float] = Field(default=120.0)
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @field_validator("webhook_timeout_seconds", mode="before")
    @classmethod
    def blank_timeout_means_none(cls, value):
        if isinstance(value, str) and value.strip().lower() in {"", "none"}:
            return None
        return value


settings = Settings()
