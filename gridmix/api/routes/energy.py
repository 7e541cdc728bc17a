"""API routes for energy mix and charging window data."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from gridmix.config import settings
from gridmix.schemas.energy import ChargingWindowResponse, DailyMixResponse
from gridmix.services.energy_mix_service import EnergyMixService
from gridmix.services.charging_window_service import ChargingWindowService
from gridmix.api.dependencies import (
    get_charging_window_service,
    get_energy_mix_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["energy"])


@router.get("/energy-mix", response_model=List[DailyMixResponse])
def get_energy_mix(
    energy_mix_service: EnergyMixService = Depends(get_energy_mix_service),
) -> List[DailyMixResponse]:
    """
    Get the average generation mix for today and the next two days.

    Each entry holds the per-fuel average percentage for one UTC day and
    the share of clean generation (biomass, nuclear, hydro, wind, solar).
    """
    logger.info("Fetching energy mix data")
    return [
        DailyMixResponse.model_validate(daily.to_dict())
        for daily in energy_mix_service.get_daily_mix_for_horizon()
    ]


@router.get("/charging-window", response_model=ChargingWindowResponse)
def get_charging_window(
    hours: int = Query(
        settings.default_charging_hours,
        description="Charging duration in hours (1-6)",
    ),
    charging_window_service: ChargingWindowService = Depends(get_charging_window_service),
) -> ChargingWindowResponse:
    """Find the cleanest EV charging window in the next two days."""
    logger.info("Finding optimal charging window for %d hours", hours)
    window = charging_window_service.get_optimal_window(hours)
    logger.info(
        "Found window: %s to %s (%.2f%% clean)",
        window.start, window.end, window.clean_energy_share,
    )
    return ChargingWindowResponse.model_validate(window.to_dict())
