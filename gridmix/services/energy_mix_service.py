"""Service for the multi-day energy mix view."""
from datetime import datetime
from typing import Callable, List

from gridmix.config import settings
from gridmix.data.generation_client import GenerationClient
from gridmix.models.generation import DailyMix
from gridmix.services.daily_mix_aggregator import DailyMixAggregator
from gridmix.services.time_ranges import horizon_days, mix_horizon, utc_now


class EnergyMixService:
    """Service for daily average generation mix operations."""

    def __init__(
        self,
        generation_client: GenerationClient = None,
        aggregator: DailyMixAggregator = None,
        clock: Callable[[], datetime] = utc_now,
        horizon_days: int = settings.mix_horizon_days,
    ):
        self.generation_client = generation_client or GenerationClient()
        self.aggregator = aggregator or DailyMixAggregator()
        self.clock = clock
        self.horizon_days = horizon_days

    def get_daily_mix_for_horizon(self) -> List[DailyMix]:
        """
        Get the average generation mix for today and the following days.

        Fetches samples once for [today 00:00 UTC, +horizon) and returns one
        DailyMix per day in ascending date order. Days without samples come
        back with an empty mix and 0.0 clean percentage.
        """
        start, end = mix_horizon(self.clock(), self.horizon_days)
        samples = self.generation_client.get_generation_interval(start, end)
        return self.aggregator.aggregate(samples, horizon_days(start, self.horizon_days))
