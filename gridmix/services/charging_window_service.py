"""Service for the optimal EV charging window view."""
from datetime import datetime
from typing import Callable

from gridmix.config import settings
from gridmix.data.generation_client import GenerationClient
from gridmix.models.generation import ChargingWindow
from gridmix.services.charging_window_optimizer import (
    ChargingWindowOptimizer,
    validate_hours,
)
from gridmix.services.time_ranges import charging_horizon, utc_now


class ChargingWindowService:
    """Service for charging window operations."""

    def __init__(
        self,
        generation_client: GenerationClient = None,
        optimizer: ChargingWindowOptimizer = None,
        clock: Callable[[], datetime] = utc_now,
        horizon_days: int = settings.charging_horizon_days,
    ):
        self.generation_client = generation_client or GenerationClient()
        self.optimizer = optimizer or ChargingWindowOptimizer()
        self.clock = clock
        self.horizon_days = horizon_days

    def get_optimal_window(self, hours: int) -> ChargingWindow:
        """
        Find the cleanest window of ``hours`` within the forecast horizon.

        The horizon starts at midnight UTC tomorrow. Hours are validated
        before anything is fetched.
        """
        hours = validate_hours(hours)
        start, end = charging_horizon(self.clock(), self.horizon_days)
        samples = self.generation_client.get_generation_interval(start, end)
        return self.optimizer.find_optimal_window(samples, hours)
