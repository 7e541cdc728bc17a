"""Fuel source classification for the GB generation mix."""
from enum import Enum
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from gridmix.exceptions import DataInconsistencyError

FuelMix = Union[Mapping[str, float], Iterable[Tuple[str, float]]]


class FuelSource(Enum):
    """Fuel sources reported by the Carbon Intensity API.

    Each source is either clean (renewables plus nuclear) or non-clean
    (fossil fuels, interconnector imports and unclassified generation).
    """

    BIOMASS = ("biomass", True)
    NUCLEAR = ("nuclear", True)
    HYDRO = ("hydro", True)
    WIND = ("wind", True)
    SOLAR = ("solar", True)

    COAL = ("coal", False)
    GAS = ("gas", False)
    IMPORTS = ("imports", False)
    OTHER = ("other", False)

    def __init__(self, fuel_name: str, is_clean: bool):
        self.fuel_name = fuel_name
        self.is_clean = is_clean

    @classmethod
    def from_fuel_name(cls, fuel_name: Optional[str]) -> Optional["FuelSource"]:
        """
        Look up a fuel source by its API name.

        Matching ignores case and surrounding whitespace. Returns None for
        blank or unrecognised names.
        """
        if not isinstance(fuel_name, str) or not fuel_name.strip():
            return None
        return cls.__members__.get(fuel_name.strip().upper())

    @classmethod
    def clean_sources(cls) -> List["FuelSource"]:
        """All clean fuel sources, in declaration order."""
        return [source for source in cls if source.is_clean]

    @classmethod
    def non_clean_sources(cls) -> List["FuelSource"]:
        """All non-clean fuel sources, in declaration order."""
        return [source for source in cls if not source.is_clean]


def is_clean_fuel(fuel_name: Optional[str]) -> bool:
    """True if the name maps to a clean source; unknown names are not clean."""
    source = FuelSource.from_fuel_name(fuel_name)
    return source is not None and source.is_clean


def calculate_clean_percentage(mix: Optional[FuelMix]) -> float:
    """
    Sum the percentages contributed by clean fuel sources.

    Args:
        mix: Mapping of fuel name to percentage, or a sequence of
            (fuel name, percentage) pairs. Duplicate names in a pair
            sequence collapse to the last value.

    Returns:
        Clean energy percentage (0-100). Empty or missing input gives 0.0.

    Raises:
        DataInconsistencyError: if the clean total exceeds 100.
    """
    if not mix:
        return 0.0

    fuel_map = mix if isinstance(mix, Mapping) else dict(mix)
    clean_percentage = sum(
        (float(perc) for fuel, perc in fuel_map.items() if is_clean_fuel(fuel)),
        0.0,
    )

    if clean_percentage > 100.0:
        raise DataInconsistencyError(
            f"Clean energy percentage {clean_percentage:.2f}% exceeds 100%",
            value=clean_percentage,
        )
    return clean_percentage
