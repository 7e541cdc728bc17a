"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

import httpx

from gridmix.config import settings
from gridmix.data.generation_client import GenerationClient
from gridmix.services.energy_mix_service import EnergyMixService
from gridmix.services.charging_window_service import ChargingWindowService


@lru_cache()
def get_generation_client() -> GenerationClient:
    """Get cached generation API client sharing one connection pool."""
    return GenerationClient(
        client=httpx.Client(timeout=settings.upstream_timeout_seconds),
    )


def get_energy_mix_service() -> EnergyMixService:
    """Get energy mix service instance."""
    return EnergyMixService(
        generation_client=get_generation_client(),
    )


def get_charging_window_service() -> ChargingWindowService:
    """Get charging window service instance."""
    return ChargingWindowService(
        generation_client=get_generation_client(),
    )
