"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"

    # Overlay paint
    silhouette_color: str = "#a9a9a9"
    shimmer_color: str = "#ffffff"
    shimmer_alpha: int = Field(default=0x40, ge=0, le=255)
    # Shimmer band width as a fraction of the silhouette width
    shimmer_width: float = Field(default=0.33, gt=0.0, le=1.0)

    # Animation
    shimmer_period_ms: int = Field(default=1200, gt=0)
    cross_fade_enabled: bool = True
    cross_fade_duration_ms: int = Field(default=750, ge=0)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "SHIMMERTRACE_"}


settings = Settings()
