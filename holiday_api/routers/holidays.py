from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import StringConstraints

from holiday_api.core.dependencies import get_holiday_service
from holiday_api.core.logging_config import get_logger
from holiday_api.schemas.holiday import (
    CountryHolidayCountResponse,
    ErrorResponse,
    HolidayResponse,
    ValidationErrorResponse,
)
from holiday_api.services.holiday_service import HolidayService

logger = get_logger(__name__)

COUNTRY_CODE_PATTERN = "^[A-Za-z]{2}$"

CountryCode = Annotated[str, StringConstraints(pattern=COUNTRY_CODE_PATTERN)]

router = APIRouter(
    prefix="/holidays",
    tags=["Holidays"],
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation failed"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
        503: {"model": ErrorResponse, "description": "Holiday provider unavailable"},
    }
)


@router.get(
    "/{country_code}",
    response_model=List[HolidayResponse],
    summary="Get the last three holidays",
    description="Retrieve the three most recent holidays of a country up to today",
    responses={404: {"model": ErrorResponse, "description": "No holidays found"}},
)
async def get_last_three_holidays(
    country_code: str = Path(
        ...,
        pattern=COUNTRY_CODE_PATTERN,
        description="ISO 3166-1 alpha-2 country code",
    ),
    service: HolidayService = Depends(get_holiday_service),
):
    """
    Get the last three holidays for a country.

    Looks back into the previous year when the current year has fewer than
    three holidays so far.

    **Raises:**
        HTTPException 404: No holidays found
    """
    country_code = country_code.upper()
    logger.info("Fetching last 3 holidays for country: %s", country_code)

    holidays = await service.last_three_holidays(country_code)
    if not holidays:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No holidays found for country '{country_code}'",
        )
    return [HolidayResponse.from_holiday(holiday) for holiday in holidays]


@router.get(
    "/{year}/public-holidays",
    response_model=List[CountryHolidayCountResponse],
    summary="Count non-weekend public holidays",
    description="Count the public holidays not falling on a weekend for several countries, highest count first",
)
async def get_public_holidays_count(
    year: int = Path(..., ge=1, le=9999, description="Calendar year"),
    country_codes: List[CountryCode] = Query(
        ...,
        alias="countryCodes",
        description="Country codes to compare (repeat the parameter)",
    ),
    service: HolidayService = Depends(get_holiday_service),
):
    country_codes = [code.upper() for code in country_codes]
    logger.info("Fetching public holidays count for year: %s and countries: %s", year, country_codes)

    counts = await service.non_weekend_holiday_counts(year, country_codes)
    return [CountryHolidayCountResponse.from_count(item) for item in counts]


@router.get(
    "/{year}/common-holidays",
    response_model=List[HolidayResponse],
    summary="Get common holidays of two countries",
    description="Retrieve the holiday dates shared by two countries in a year",
    responses={404: {"model": ErrorResponse, "description": "No common holidays found"}},
)
async def get_common_holidays(
    year: int = Path(..., ge=1, le=9999, description="Calendar year"),
    country_code_1: str = Query(..., alias="countryCode1", pattern=COUNTRY_CODE_PATTERN),
    country_code_2: str = Query(..., alias="countryCode2", pattern=COUNTRY_CODE_PATTERN),
    service: HolidayService = Depends(get_holiday_service),
):
    country_code_1 = country_code_1.upper()
    country_code_2 = country_code_2.upper()
    logger.info(
        "Fetching common holidays for year: %s, between countries: %s and %s",
        year, country_code_1, country_code_2,
    )

    holidays = await service.common_holidays(year, country_code_1, country_code_2)
    if not holidays:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No common holidays found for '{country_code_1}' and '{country_code_2}' in {year}",
        )
    return [HolidayResponse.from_holiday(holiday) for holiday in holidays]
