"""Generation mix data structures."""
import math
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from attrs import define, field


def _freeze_mix(mix: Mapping[str, float]) -> Mapping[str, float]:
    return MappingProxyType({str(k): float(v) for k, v in dict(mix).items()})


def parse_instant(value: Any) -> datetime:
    """Parse an upstream ISO-8601 timestamp into an aware UTC datetime."""
    if not isinstance(value, str):
        raise ValueError(f"expected timestamp string, got {value!r}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@define(frozen=True)
class FuelSample:
    """One half-hour interval of the national generation mix."""

    start_time: datetime
    end_time: datetime
    # Fuel name -> percentage of generation, as reported upstream
    mix: Mapping[str, float] = field(converter=_freeze_mix)

    @classmethod
    def from_payload(cls, entry: Any) -> "FuelSample":
        """
        Create a FuelSample from one ``data`` entry of the generation API.

        Duplicate fuel names keep the last value.

        Raises:
            ValueError: if the entry is malformed or a percentage is
                negative or not finite
        """
        if not isinstance(entry, dict):
            raise ValueError(f"expected interval object, got {type(entry).__name__}")

        generation_mix = entry.get("generationmix")
        if not isinstance(generation_mix, list):
            raise ValueError("interval is missing 'generationmix'")

        mix = {}
        for fuel_entry in generation_mix:
            fuel = fuel_entry.get("fuel") if isinstance(fuel_entry, dict) else None
            perc = fuel_entry.get("perc") if isinstance(fuel_entry, dict) else None
            if not isinstance(fuel, str):
                raise ValueError(f"invalid fuel entry {fuel_entry!r}")
            if isinstance(perc, bool) or not isinstance(perc, (int, float)):
                raise ValueError(f"invalid percentage for {fuel!r}: {perc!r}")
            if not math.isfinite(perc) or perc < 0:
                raise ValueError(f"percentage for {fuel!r} out of range: {perc!r}")
            mix[fuel] = float(perc)

        return cls(
            start_time=parse_instant(entry.get("from")),
            end_time=parse_instant(entry.get("to")),
            mix=mix,
        )


@define(frozen=True)
class DailyMix:
    """Average generation mix for one UTC calendar day."""

    date: date
    mix: Mapping[str, float] = field(converter=_freeze_mix)
    clean_percentage: float

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "date": self.date,
            "mix": dict(self.mix),
            "clean_percentage": self.clean_percentage,
        }


@define(frozen=True)
class ChargingWindow:
    """Contiguous period with the highest average clean energy share."""

    start: datetime
    end: datetime
    clean_energy_share: float

    def to_dict(self) -> dict:
        """Convert to serializable dictionary."""
        return {
            "start": self.start,
            "end": self.end,
            "clean_energy_share": self.clean_energy_share,
        }
