"""Error taxonomy for energy mix queries."""
from typing import Optional


class GridMixError(Exception):
    """Base class for all errors raised by the energy mix services."""


class InvalidArgumentError(GridMixError, ValueError):
    """Caller-supplied value outside its accepted range."""


class FetchError(GridMixError):
    """Upstream generation forecast unavailable, timed out or malformed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DataInconsistencyError(GridMixError):
    """Upstream data violates the structural assumptions of the aggregation."""

    def __init__(self, message: str, value: Optional[float] = None):
        super().__init__(message)
        self.value = value
