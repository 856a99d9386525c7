"""
Nager.Date holiday provider.

Fetches public holidays from a Nager.Date compatible endpoint:
GET {base_url}/{year}/{country_code} -> [{"date": "2025-01-01", "localName": "...", ...}]
"""

import asyncio
from datetime import date
from typing import Any, List, Optional

import requests

from holiday_api.core.exceptions import UpstreamUnavailable
from holiday_api.core.logging_config import get_logger
from holiday_api.models.holiday import Holiday
from holiday_api.services.sources.provider import HolidaySource

logger = get_logger(__name__)


class NagerDateHolidaySource(HolidaySource):
    """
    Holiday source backed by the Nager.Date public holiday API.

    Each call is a single request bounded by `timeout`; there is no retry
    and no caching. The blocking request runs in a worker thread so several
    countries can be fetched concurrently.
    """

    def __init__(self, base_url: str, timeout: float = 10.0):
        if not base_url:
            raise ValueError("Holiday API base URL required. Set HOLIDAYS_API_URL.")
        self.base_url = base_url
        self.timeout = timeout

    def build_url(self, year: int, country_code: str) -> str:
        return f"{self.base_url.rstrip('/')}/{year}/{country_code}"

    async def fetch(self, year: int, country_code: str) -> List[Holiday]:
        return await asyncio.to_thread(self.fetch_sync, year, country_code)

    def fetch_sync(self, year: int, country_code: str) -> List[Holiday]:
        """
        Fetch holidays for a year and country code.

        Args:
            year: Calendar year
            country_code: Country code understood by the provider (e.g. "US")

        Returns:
            Holidays with a valid date; empty for a non-2xx status or an empty body.

        Raises:
            UpstreamUnavailable: Network error, timeout or malformed response.
        """
        url = self.build_url(year, country_code)

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(
                "Error fetching holidays for %s in %s: %s", country_code, year, e,
                exc_info=True,
            )
            raise UpstreamUnavailable(
                "Failed to fetch holidays from external service",
                year=year,
                country_code=country_code,
            ) from e

        if not response.ok or not response.content:
            logger.warning(
                "No holidays found or failed to fetch holidays for %s in %s. Status code: %s",
                country_code, year, response.status_code,
            )
            return []

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Malformed holiday response for %s in %s: %s", country_code, year, e)
            raise UpstreamUnavailable(
                "Malformed response from external service",
                year=year,
                country_code=country_code,
            ) from e

        if data is None:
            return []
        if not isinstance(data, list):
            logger.error(
                "Unexpected holiday payload for %s in %s: %s",
                country_code, year, type(data).__name__,
            )
            raise UpstreamUnavailable(
                "Malformed response from external service",
                year=year,
                country_code=country_code,
            )

        holidays = []
        for entry in data:
            holiday = self._parse_entry(entry)
            if holiday is None:
                logger.debug("Skipping holiday without a valid date: %r", entry)
                continue
            holidays.append(holiday)

        logger.debug(
            "Fetched %d holidays", len(holidays),
            extra={'country_code': country_code, 'year': year},
        )
        return holidays

    def _parse_entry(self, entry: Any) -> Optional[Holiday]:
        if not isinstance(entry, dict):
            return None
        raw_date = entry.get("date")
        if not isinstance(raw_date, str):
            return None
        try:
            holiday_date = date.fromisoformat(raw_date)
        except ValueError:
            return None
        local_name = entry.get("localName") or entry.get("name") or ""
        return Holiday(date=holiday_date, local_name=str(local_name))
