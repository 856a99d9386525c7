from fastapi import Depends

from holiday_api.core.config import settings
from holiday_api.services.holiday_service import HolidayService
from holiday_api.services.sources.nager_provider import NagerDateHolidaySource
from holiday_api.services.sources.provider import HolidaySource


def get_holiday_source() -> HolidaySource:
    """Dependency providing the configured upstream holiday source."""
    return NagerDateHolidaySource(
        base_url=settings.HOLIDAYS_API_URL,
        timeout=settings.HOLIDAYS_API_TIMEOUT,
    )


def get_holiday_service(
    source: HolidaySource = Depends(get_holiday_source)
) -> HolidayService:
    """
    Dependency providing a per-request HolidayService.

    Tests swap either dependency through `app.dependency_overrides`.
    """
    return HolidayService(source=source)
