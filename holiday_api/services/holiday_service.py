import asyncio
from datetime import date
from typing import Callable, Dict, List

from holiday_api.core.exceptions import AggregationFailed
from holiday_api.core.logging_config import get_logger
from holiday_api.models.holiday import CountryHolidayCount, Holiday
from holiday_api.services.sources.provider import HolidaySource

logger = get_logger(__name__)

RECENT_HOLIDAY_LIMIT = 3

# date.weekday(): Monday == 0 ... Saturday == 5, Sunday == 6
WEEKEND_DAYS = frozenset({5, 6})


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


class HolidayService:
    """Aggregates holidays fetched from a single upstream source."""

    def __init__(self, source: HolidaySource, clock: Callable[[], date] = date.today):
        self._source = source
        self._clock = clock

    async def last_three_holidays(self, country_code: str) -> List[Holiday]:
        """
        Return up to three most recent holidays that are not after today.

        Holidays of the current year come first (newest first). Only when
        fewer than three qualify is the previous year fetched, and its
        holidays are appended after them.
        """
        today = self._clock()
        current_year = today.year

        holidays = self._past_holidays_newest_first(
            await self._source.fetch(current_year, country_code), today
        )

        if len(holidays) < RECENT_HOLIDAY_LIMIT:
            previous_year = self._past_holidays_newest_first(
                await self._source.fetch(current_year - 1, country_code), today
            )
            holidays.extend(previous_year)

        return holidays[:RECENT_HOLIDAY_LIMIT]

    async def non_weekend_holiday_counts(
        self, year: int, country_codes: List[str]
    ) -> List[CountryHolidayCount]:
        """
        Count non-weekend holidays per country and rank them by count.

        Countries are fetched concurrently. Equal counts keep the order of
        `country_codes`. If any fetch fails the whole operation fails.
        """
        tasks = [self.count_non_weekend_holidays(year, code) for code in country_codes]
        try:
            counts = await asyncio.gather(*tasks)
        except Exception as e:
            logger.error(
                "Error fetching public holidays count for year: %s and countries: %s",
                year, country_codes,
                exc_info=True,
            )
            raise AggregationFailed(
                "Failed to fetch public holidays count",
                year=year,
                country_codes=country_codes,
            ) from e

        results = [
            CountryHolidayCount(country_code=code, count=count)
            for code, count in zip(country_codes, counts)
        ]
        results.sort(key=lambda item: item.count, reverse=True)
        return results

    async def common_holidays(
        self, year: int, country_code_1: str, country_code_2: str
    ) -> List[Holiday]:
        """
        Return the holidays both countries share in `year`, oldest first.

        Holidays are matched on date alone; the local name reported is the
        one used by the first country.
        """
        holidays_1, holidays_2 = await asyncio.gather(
            self._source.fetch(year, country_code_1),
            self._source.fetch(year, country_code_2),
        )

        by_date_1 = self._index_by_date(holidays_1)
        by_date_2 = self._index_by_date(holidays_2)

        shared_dates = sorted(by_date_1.keys() & by_date_2.keys())
        return [by_date_1[day] for day in shared_dates]

    async def count_non_weekend_holidays(self, year: int, country_code: str) -> int:
        holidays = await self._source.fetch(year, country_code)
        if not holidays:
            return 0
        return sum(1 for holiday in holidays if not is_weekend(holiday.date))

    @staticmethod
    def _past_holidays_newest_first(holidays: List[Holiday], today: date) -> List[Holiday]:
        past = [holiday for holiday in holidays if holiday.date <= today]
        past.sort(key=lambda holiday: holiday.date, reverse=True)
        return past

    @staticmethod
    def _index_by_date(holidays: List[Holiday]) -> Dict[date, Holiday]:
        index: Dict[date, Holiday] = {}
        for holiday in holidays:
            # First entry for a date wins
            index.setdefault(holiday.date, holiday)
        return index
