from abc import ABC, abstractmethod
from typing import List

from holiday_api.models.holiday import Holiday


class HolidaySource(ABC):
    @abstractmethod
    async def fetch(self, year: int, country_code: str) -> List[Holiday]:
        """Return the public holidays of one country for one year.

        An empty list means the provider knows no holidays for the pair.
        Transport or decoding failures raise UpstreamUnavailable.
        """
