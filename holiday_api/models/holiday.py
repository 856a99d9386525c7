from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    date: date
    local_name: str


@dataclass(frozen=True)
class CountryHolidayCount:
    country_code: str
    count: int
