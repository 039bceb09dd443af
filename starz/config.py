from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Starz Coaching Service"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Business hours
    business_timezone: str = "America/New_York"
    business_hours_start: int = 9
    business_hours_end: int = 18
    business_days: list[str] = ["mon", "tue", "wed", "thu", "fri"]

    # Coaching
    coaching_confidence_threshold: int = 75
    coaching_signals_path: str | None = None
    coaching_mode: str = "fixture"
    coaching_model: str = "gpt-4o-mini"
    coaching_temperature: float = 0.3
    coaching_system_prompt_path: str = "configs/coaching/system_prompt.md"

    # Providers
    openai_api_key: str | None = None

    # Security
    cors_origins: list[str] = []  # Empty by default for security

    # Metrics
    metrics_backend: str = "stdout"
    metrics_namespace: str = "starz"
    metrics_disable: bool = False
    metrics_sample_rate: float = 1.0

    model_config = ConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()
