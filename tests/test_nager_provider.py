"""
Tests for the Nager.Date holiday source.

Tests cover:
- Decoding holidays and dropping entries without a valid date
- Empty results for non-2xx statuses and empty bodies
- UpstreamUnavailable for transport failures and malformed payloads
"""

from datetime import date

import pytest
import requests
import responses

from holiday_api.core.exceptions import UpstreamUnavailable
from holiday_api.models.holiday import Holiday
from holiday_api.services.sources.nager_provider import NagerDateHolidaySource

BASE_URL = "https://holidays.test/api/v3/PublicHolidays/"
US_2025_URL = "https://holidays.test/api/v3/PublicHolidays/2025/US"


@pytest.fixture
def source():
    return NagerDateHolidaySource(base_url=BASE_URL, timeout=5)


@pytest.fixture
def us_holidays_response():
    """Sample upstream payload (trimmed Nager.Date shape)."""
    return [
        {
            "date": "2025-01-01",
            "localName": "New Year's Day",
            "name": "New Year's Day",
            "countryCode": "US",
            "global": True,
            "types": ["Public"],
        },
        {
            "date": "2025-12-25",
            "localName": "Christmas Day",
            "name": "Christmas Day",
            "countryCode": "US",
            "global": True,
            "types": ["Public"],
        },
    ]


class TestBuildUrl:

    def test_joins_base_year_and_country(self, source):
        assert source.build_url(2025, "US") == US_2025_URL

    def test_base_without_trailing_slash(self):
        src = NagerDateHolidaySource(base_url="https://holidays.test/api/v3/PublicHolidays")
        assert src.build_url(2024, "IN") == "https://holidays.test/api/v3/PublicHolidays/2024/IN"

    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            NagerDateHolidaySource(base_url="")


class TestFetchSuccess:

    @responses.activate
    def test_decodes_holidays(self, source, us_holidays_response):
        responses.add(responses.GET, US_2025_URL, json=us_holidays_response, status=200)

        result = source.fetch_sync(2025, "US")

        assert result == [
            Holiday(date=date(2025, 1, 1), local_name="New Year's Day"),
            Holiday(date=date(2025, 12, 25), local_name="Christmas Day"),
        ]
        assert len(responses.calls) == 1

    @responses.activate
    def test_drops_entries_without_valid_date(self, source):
        responses.add(
            responses.GET,
            US_2025_URL,
            json=[
                {"date": "2025-01-01", "localName": "New Year's Day"},
                {"date": None, "localName": "Missing"},
                {"localName": "Absent"},
                {"date": "2025-13-45", "localName": "Garbage"},
                "not-an-object",
                {"date": "2025-12-25", "localName": "Christmas Day"},
            ],
            status=200,
        )

        result = source.fetch_sync(2025, "US")

        assert [h.local_name for h in result] == ["New Year's Day", "Christmas Day"]

    @responses.activate
    def test_local_name_falls_back_to_name(self, source):
        responses.add(
            responses.GET,
            US_2025_URL,
            json=[{"date": "2025-07-04", "name": "Independence Day"}],
            status=200,
        )

        result = source.fetch_sync(2025, "US")

        assert result[0].local_name == "Independence Day"

    @pytest.mark.asyncio
    @responses.activate
    async def test_async_fetch_runs_request(self, source, us_holidays_response):
        responses.add(responses.GET, US_2025_URL, json=us_holidays_response, status=200)

        result = await source.fetch(2025, "US")

        assert [h.date for h in result] == [date(2025, 1, 1), date(2025, 12, 25)]


class TestFetchEmpty:

    @responses.activate
    def test_non_2xx_returns_empty(self, source):
        responses.add(responses.GET, US_2025_URL, status=404)

        assert source.fetch_sync(2025, "US") == []

    @responses.activate
    def test_server_error_returns_empty(self, source):
        responses.add(responses.GET, US_2025_URL, status=500)

        assert source.fetch_sync(2025, "US") == []

    @responses.activate
    def test_no_content_returns_empty(self, source):
        responses.add(responses.GET, US_2025_URL, status=204)

        assert source.fetch_sync(2025, "US") == []

    @responses.activate
    def test_empty_body_with_ok_status_returns_empty(self, source):
        responses.add(responses.GET, US_2025_URL, body="", status=200)

        assert source.fetch_sync(2025, "US") == []

    @responses.activate
    def test_null_body_returns_empty(self, source):
        responses.add(
            responses.GET, US_2025_URL, body="null", status=200,
            content_type="application/json",
        )

        assert source.fetch_sync(2025, "US") == []


class TestFetchFailure:

    @responses.activate
    def test_connection_error_raises(self, source):
        error = requests.exceptions.ConnectionError("connection refused")
        responses.add(responses.GET, US_2025_URL, body=error)

        with pytest.raises(UpstreamUnavailable) as exc_info:
            source.fetch_sync(2025, "US")

        assert exc_info.value.__cause__ is error
        assert exc_info.value.country_code == "US"
        assert exc_info.value.year == 2025

    @responses.activate
    def test_timeout_raises(self, source):
        responses.add(responses.GET, US_2025_URL, body=requests.exceptions.ReadTimeout("timed out"))

        with pytest.raises(UpstreamUnavailable):
            source.fetch_sync(2025, "US")

    @responses.activate
    def test_invalid_json_raises(self, source):
        responses.add(
            responses.GET, US_2025_URL, body="<html>oops</html>", status=200,
            content_type="text/html",
        )

        with pytest.raises(UpstreamUnavailable) as exc_info:
            source.fetch_sync(2025, "US")

        assert isinstance(exc_info.value.__cause__, ValueError)

    @responses.activate
    def test_non_list_payload_raises(self, source):
        responses.add(responses.GET, US_2025_URL, json={"error": "unexpected"}, status=200)

        with pytest.raises(UpstreamUnavailable):
            source.fetch_sync(2025, "US")

    @pytest.mark.asyncio
    @responses.activate
    async def test_async_fetch_propagates_failure(self, source):
        responses.add(responses.GET, US_2025_URL, body=requests.exceptions.ConnectionError("down"))

        with pytest.raises(UpstreamUnavailable):
            await source.fetch(2025, "US")
