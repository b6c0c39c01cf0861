"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from .formulas import PeriodMode, Separator


class Settings(BaseSettings):
    """Settings pulled from .env / environment (CIQ_ prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="CIQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Generation defaults
    default_period_mode: PeriodMode = PeriodMode.LATEST_FISCAL_YEAR
    default_separator: Separator = Separator.SEMICOLON

    # Output
    preview_limit: int = 20
    download_filename: str = "capital_iq_output.csv"


settings = Settings()
