"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    mandala_env: str = "development"
    mandala_log_level: str = "info"

    # Raise on clock contract violations ("debug"); clamp or ignore otherwise
    mandala_strict_contracts: bool = True

    # Curve flattening error bound, in outline units
    mandala_tolerance: float = 0.01

    # Animation
    mandala_smoothing_duration: float = 0.5
    mandala_fps: float = 60.0
    mandala_petal_count: int = 12

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
