from datetime import date, datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from holiday_api.models.holiday import CountryHolidayCount, Holiday


class HolidayResponse(BaseModel):
    """Response schema for a single holiday"""
    model_config = ConfigDict(populate_by_name=True)

    date: date
    local_name: str = Field(..., alias="localName", description="Holiday name in the local language")

    @classmethod
    def from_holiday(cls, holiday: Holiday) -> "HolidayResponse":
        return cls(date=holiday.date, local_name=holiday.local_name)


class CountryHolidayCountResponse(BaseModel):
    """Response schema for a country's non-weekend holiday count"""
    model_config = ConfigDict(populate_by_name=True)

    country_code: str = Field(..., alias="countryCode")
    count: int = Field(..., ge=0)

    @classmethod
    def from_count(cls, item: CountryHolidayCount) -> "CountryHolidayCountResponse":
        return cls(country_code=item.country_code, count=item.count)


class ErrorResponse(BaseModel):
    """Standard error response"""
    detail: str
    error_code: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        return value.strftime("%Y-%m-%d %H:%M:%S")


class ValidationErrorResponse(ErrorResponse):
    """Error response listing the offending request fields"""
    validation_errors: Dict[str, str] = Field(default_factory=dict)
