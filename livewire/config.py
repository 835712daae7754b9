"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    livewire_log_level: str = "info"

    # Cost model weights (must sum to 1.0)
    livewire_weight_zero_crossing: float = 0.43
    livewire_weight_gradient_magnitude: float = 0.14
    livewire_weight_gradient_direction: float = 0.43

    # Expansions between progress / cancellation polls during a search
    livewire_progress_interval: int = 4096

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
