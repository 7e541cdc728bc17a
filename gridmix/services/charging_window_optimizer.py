"""Service for finding the cleanest contiguous charging window."""
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from gridmix.config import settings
from gridmix.exceptions import DataInconsistencyError, InvalidArgumentError
from gridmix.models.fuel_source import calculate_clean_percentage
from gridmix.models.generation import ChargingWindow, FuelSample

INTERVALS_PER_HOUR = 2


def validate_hours(
    hours: int,
    min_hours: int = settings.min_charging_hours,
    max_hours: int = settings.max_charging_hours,
) -> int:
    """Reject charging durations outside [min_hours, max_hours]."""
    if isinstance(hours, bool) or not isinstance(hours, (int, np.integer)):
        raise InvalidArgumentError(f"Hours must be a whole number, got {hours!r}")
    if hours < min_hours:
        raise InvalidArgumentError(f"Hours must be at least {min_hours}")
    if hours > max_hours:
        raise InvalidArgumentError(f"Hours must be at most {max_hours}")
    return int(hours)


class ChargingWindowOptimizer:
    """Service for selecting the charging window with the most clean energy.

    Slides a window of ``hours * 2`` consecutive half-hour samples across the
    forecast and keeps the one with the highest summed clean share. On ties
    the earliest window wins.
    """

    def __init__(self, intervals_per_hour: int = INTERVALS_PER_HOUR):
        self.intervals_per_hour = intervals_per_hour

    def clean_shares(self, samples: Sequence[FuelSample]) -> np.ndarray:
        """Clean energy percentage of each sample, in order."""
        return np.array(
            [calculate_clean_percentage(sample.mix) for sample in samples],
            dtype=np.float64,
        )

    def _best_window_start(self, shares: np.ndarray, window_size: int) -> tuple:
        """
        Find the start index of the window with the largest sum.

        Each window is summed independently, so identical windows produce
        identical sums and argmax keeps the first (earliest) of them.

        Returns:
            (start_index, window_sum)
        """
        window_sums = sliding_window_view(shares, window_size).sum(axis=1)
        best = int(np.argmax(window_sums))
        return best, float(window_sums[best])

    def find_optimal_window(
        self, samples: Sequence[FuelSample], hours: int,
    ) -> ChargingWindow:
        """
        Find the window of ``hours`` with the highest average clean share.

        Args:
            samples: Contiguous half-hour samples, ascending by start time
            hours: Charging duration in whole hours

        Returns:
            ChargingWindow bounded by the first and last sample of the winner

        Raises:
            InvalidArgumentError: if hours is outside the allowed range
            DataInconsistencyError: if there are fewer samples than one window
                needs, or a sample's clean share exceeds 100
        """
        hours = validate_hours(hours)
        window_size = hours * self.intervals_per_hour

        if len(samples) < window_size:
            raise DataInconsistencyError(
                f"Need {window_size} samples for a {hours}h window, "
                f"got {len(samples)}",
                value=float(len(samples)),
            )

        shares = self.clean_shares(samples)
        best, best_sum = self._best_window_start(shares, window_size)

        return ChargingWindow(
            start=samples[best].start_time,
            end=samples[best + window_size - 1].end_time,
            clean_energy_share=best_sum / window_size,
        )
