from typing import Optional, Sequence


class HolidayServiceError(Exception):
    """Base class for failures raised by the holiday service."""

    error_code = "HOLIDAY_SERVICE_ERROR"


class UpstreamUnavailable(HolidayServiceError):
    """Raised when the upstream holiday provider cannot be reached or decoded."""

    error_code = "UPSTREAM_UNAVAILABLE"

    def __init__(self, message: str, year: Optional[int] = None, country_code: Optional[str] = None):
        super().__init__(message)
        self.year = year
        self.country_code = country_code


class AggregationFailed(HolidayServiceError):
    """Raised when any per-country fetch inside a fan-out operation fails."""

    error_code = "AGGREGATION_FAILED"

    def __init__(self, message: str, year: Optional[int] = None, country_codes: Sequence[str] = ()):
        super().__init__(message)
        self.year = year
        self.country_codes = list(country_codes)
