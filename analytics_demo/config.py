import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =========================
# Configuration (ENV-DRIVEN via Pydantic)
# =========================


class Settings(BaseSettings):
    """Application settings read from environment and validated by Pydantic.

    Only a single `.env` file at the project root is read. Real environment
    variables always take precedence over `.env` values.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
    )

    # App/UI
    app_title: str = Field(default="Lumist Analytics (Demo)", alias="APP_TITLE")
    port: int = Field(default=8050, ge=1, le=65535, alias="PORT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Simulated backend latency
    query_latency_min_ms: int = Field(default=50, ge=0, alias="QUERY_LATENCY_MIN_MS")
    query_latency_max_ms: int = Field(default=150, ge=0, alias="QUERY_LATENCY_MAX_MS")
    rpc_latency_ms: int = Field(default=100, ge=0, alias="RPC_LATENCY_MS")
    functions_latency_ms: int = Field(default=200, ge=0, alias="FUNCTIONS_LATENCY_MS")
    auth_callback_delay_ms: int = Field(default=100, ge=0, alias="AUTH_CALLBACK_DELAY_MS")
    platform_latency_ms: int = Field(default=50, ge=0, alias="PLATFORM_LATENCY_MS")

    # Demo identity
    demo_user_id: str = Field(default="demo-user-id", alias="DEMO_USER_ID")
    demo_user_email: str = Field(default="demo@lumist.ai", alias="DEMO_USER_EMAIL")
    demo_user_name: str = Field(default="Demo User", alias="DEMO_USER_NAME")
    jwt_secret: str = Field(default="dev-secret", alias="JWT_SECRET")
    session_ttl_seconds: int = Field(default=3600, ge=1, alias="SESSION_TTL_SECONDS")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode="after")
    def _check_latency_bounds(self):
        if self.query_latency_max_ms < self.query_latency_min_ms:
            raise ValueError("QUERY_LATENCY_MAX_MS must be >= QUERY_LATENCY_MIN_MS")
        return self


# Singleton accessor to avoid repeated disk reads/parsing
_settings_singleton: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the singleton Settings instance, initializing it on first call."""
    global _settings_singleton
    if _settings_singleton is None:
        _settings_singleton = Settings()
    return _settings_singleton


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Route package loggers to stderr at the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Convenience module-level constants used by app.py when running as a script
PORT: int = get_settings().port
DEBUG: bool = get_settings().debug
