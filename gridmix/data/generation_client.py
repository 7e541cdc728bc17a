"""Client for the GB Carbon Intensity generation mix API."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List

import httpx

from gridmix.config import settings
from gridmix.exceptions import FetchError
from gridmix.models.generation import FuelSample

logger = logging.getLogger(__name__)


def format_instant(instant: datetime) -> str:
    """Format an instant the way the generation endpoint expects (minute precision, Z)."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%MZ")


class GenerationClient:
    """HTTP client for half-hourly generation mix forecasts.

    Each call performs exactly one request bounded by ``timeout_s``; failures
    are raised as FetchError and never retried here. When ``client`` is given
    its connection pool is reused across calls until ``close``.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout_s: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url or settings.carbon_intensity_base_url
        self.timeout_s = timeout_s if timeout_s is not None else settings.upstream_timeout_seconds
        self._client = client

    def close(self) -> None:
        """Close the shared HTTP client, if any."""
        if self._client is not None:
            self._client.close()

    def _get(self, path: str) -> Any:
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        headers = {"Accept": "application/json"}
        logger.info("Request: GET %s", url)

        try:
            if self._client is not None:
                response = self._client.get(url, headers=headers, timeout=self.timeout_s)
            else:
                with httpx.Client(timeout=self.timeout_s) as owned_client:
                    response = owned_client.get(url, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("Generation API timed out after %.1fs: %s", self.timeout_s, e)
            raise FetchError(f"Generation API timed out after {self.timeout_s}s") from e
        except httpx.HTTPError as e:
            logger.warning("Generation API request failed: %s", e)
            raise FetchError(f"Failed to fetch generation data: {e}") from e

        if not response.is_success:
            logger.warning("Generation API returned %s", response.status_code)
            raise FetchError(
                f"Generation API error {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(f"Generation API returned invalid JSON: {e}") from e

    def get_generation_interval(
        self, start: datetime, end: datetime,
    ) -> List[FuelSample]:
        """
        Fetch half-hour generation mix samples for [start, end).

        Returns:
            Samples in the order the API returned them (ascending by start)

        Raises:
            FetchError: on transport failure, non-2xx status or malformed payload
        """
        payload = self._get(f"/generation/{format_instant(start)}/{format_instant(end)}")

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise FetchError("Generation API response is missing 'data'")

        try:
            return [FuelSample.from_payload(entry) for entry in data]
        except ValueError as e:
            raise FetchError(f"Malformed generation data: {e}") from e
