from holiday_api.services.sources.nager_provider import NagerDateHolidaySource
from holiday_api.services.sources.provider import HolidaySource

__all__ = ["HolidaySource", "NagerDateHolidaySource"]
