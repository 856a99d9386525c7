"""Test helpers shared across holiday-api tests."""

from datetime import date
from typing import Dict, List, Tuple, Union
from unittest.mock import AsyncMock

from holiday_api.models.holiday import Holiday
from holiday_api.services.sources.provider import HolidaySource

SourceData = Dict[Tuple[int, str], Union[List[Holiday], Exception]]


def make_holiday(iso_date: str, local_name: str = "Holiday") -> Holiday:
    return Holiday(date=date.fromisoformat(iso_date), local_name=local_name)


def make_source(data: SourceData) -> AsyncMock:
    """
    Build a mocked HolidaySource answering from `data`.

    Keys are (year, country_code); a missing key yields no holidays and an
    Exception value is raised from fetch.
    """
    def fetch(year: int, country_code: str) -> List[Holiday]:
        value = data.get((year, country_code), [])
        if isinstance(value, Exception):
            raise value
        return list(value)

    source = AsyncMock(spec=HolidaySource)
    source.fetch = AsyncMock(side_effect=fetch)
    return source
