"""Service for reducing half-hourly generation samples to daily mixes."""
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Sequence

from gridmix.models.fuel_source import calculate_clean_percentage
from gridmix.models.generation import DailyMix, FuelSample


def utc_date(instant: datetime) -> date:
    """UTC calendar date of an instant; naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        return instant.date()
    return instant.astimezone(timezone.utc).date()


class DailyMixAggregator:
    """Service for computing per-day average generation mixes.

    Samples are bucketed by the UTC date of their start time. Each day's mix
    is the plain arithmetic mean of every fuel across that day's samples
    (all samples are half-hour intervals, so no time weighting is needed),
    and the clean percentage is classified from that averaged mix.
    """

    def group_by_day(
        self, samples: Iterable[FuelSample],
    ) -> Dict[date, List[FuelSample]]:
        """Group samples by the UTC calendar date of their start time."""
        by_day: Dict[date, List[FuelSample]] = defaultdict(list)
        for sample in samples:
            by_day[utc_date(sample.start_time)].append(sample)
        return by_day

    def average_mix(self, samples: Sequence[FuelSample]) -> Dict[str, float]:
        """
        Average each fuel's percentage over a set of samples.

        A fuel missing from some samples still divides by the full sample
        count, matching the upstream convention that absent means zero.
        """
        if not samples:
            return {}

        totals: Dict[str, float] = defaultdict(float)
        for sample in samples:
            for fuel, perc in sample.mix.items():
                totals[fuel] += perc

        count = len(samples)
        return {fuel: total / count for fuel, total in totals.items()}

    def to_daily_mix(self, day: date, samples: Sequence[FuelSample]) -> DailyMix:
        """Reduce one day's samples; an empty day yields an empty mix."""
        if not samples:
            return DailyMix(date=day, mix={}, clean_percentage=0.0)

        mix = self.average_mix(samples)
        return DailyMix(
            date=day,
            mix=mix,
            clean_percentage=calculate_clean_percentage(mix),
        )

    def aggregate(
        self, samples: Iterable[FuelSample], days: Sequence[date],
    ) -> List[DailyMix]:
        """
        Build one DailyMix per target day, in the order the days are given.

        Args:
            samples: Half-hour samples, normally ascending by start time
            days: Target calendar days (UTC)

        Returns:
            List of DailyMix, one per entry in ``days``

        Raises:
            DataInconsistencyError: if a day's averaged clean share exceeds 100
        """
        by_day = self.group_by_day(samples)
        return [self.to_daily_mix(day, by_day.get(day, [])) for day in days]
