"""Backend configuration."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # API settings
    api_title: str = "GridMix API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"

    # Upstream generation forecast
    carbon_intensity_base_url: str = "https://api.carbonintensity.org.uk"
    upstream_timeout_seconds: float = 5.0

    # Forecast horizons (days)
    mix_horizon_days: int = 3
    charging_horizon_days: int = 2

    # Charging window duration limits (hours)
    min_charging_hours: int = 1
    max_charging_hours: int = 6
    default_charging_hours: int = 3

    class Config:
        env_prefix = "GRIDMIX_"


settings = Settings()
