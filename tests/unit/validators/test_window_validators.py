"""Unit tests for call window and date range guards."""

import datetime as dt

import pytest

from kipraxis.errors import InvalidDateRange, InvalidTimeValue
from kipraxis.validators.window_validators import (
    WindowRejection,
    is_valid_call_window,
    validate_date_range,
)

NOW = dt.datetime(2025, 8, 15, 12, 0)


class TestIsValidCallWindow:
    """Test call-back window checks."""

    @pytest.mark.parametrize(
        "from_, to", [("08:00", "18:00"), ("09:00", "17:00"), ("12:00", "12:30")]
    )
    def test_valid_windows(self, from_, to):
        result = is_valid_call_window(from_, to)

        assert result.valid
        assert result.reason is None
        assert result.message is None
        assert bool(result) is True

    def test_starts_too_early(self):
        result = is_valid_call_window("07:00", "17:00")

        assert not result
        assert result.reason is WindowRejection.OUTSIDE_ALLOWED_HOURS
        assert result.message == "Anrufzeiten müssen zwischen 08:00 und 18:00 Uhr liegen"

    def test_ends_too_late(self):
        result = is_valid_call_window("09:00", "18:30")

        assert result.reason is WindowRejection.OUTSIDE_ALLOWED_HOURS

    def test_one_minute_before_opening(self):
        assert is_valid_call_window("07:59", "09:00").reason is (
            WindowRejection.OUTSIDE_ALLOWED_HOURS
        )

    def test_start_after_end(self):
        result = is_valid_call_window("17:00", "09:00")

        assert result.reason is WindowRejection.START_NOT_BEFORE_END
        assert result.message == "Startzeit muss vor der Endzeit liegen"

    def test_empty_window(self):
        assert is_valid_call_window("10:00", "10:00").reason is (
            WindowRejection.START_NOT_BEFORE_END
        )

    def test_custom_allowed_hours(self):
        assert is_valid_call_window("07:00", "12:00", earliest="07:00", latest="13:00")
        assert "07:00" in is_valid_call_window("06:00", "12:00", earliest="07:00").message

    def test_malformed_time_raises(self):
        with pytest.raises(InvalidTimeValue):
            is_valid_call_window("9 Uhr", "17:00")


class TestValidateDateRange:
    """Test reporting date range checks."""

    def test_valid_range(self):
        assert validate_date_range("2025-07-01", "2025-07-31", now=NOW).valid

    def test_start_after_end(self):
        result = validate_date_range("2025-07-31", "2025-07-01", now=NOW)

        assert result.reason is WindowRejection.START_NOT_BEFORE_END
        assert result.message == "Startdatum muss vor Enddatum liegen"

    def test_equal_start_and_end(self):
        result = validate_date_range("2025-07-01", "2025-07-01", now=NOW)

        assert result.reason is WindowRejection.START_NOT_BEFORE_END

    def test_exactly_one_year_allowed(self):
        assert validate_date_range("2024-08-01", "2025-08-01", now=NOW).valid

    def test_longer_than_one_year(self):
        result = validate_date_range("2024-07-31", "2025-08-01", now=NOW)

        assert result.reason is WindowRejection.RANGE_TOO_LONG
        assert result.message == "Zeitraum darf nicht länger als 1 Jahr sein"

    def test_partial_day_over_limit_counts(self):
        result = validate_date_range(
            "2024-08-01T00:00:00", "2025-08-01T06:00:00", now=NOW
        )

        assert result.reason is WindowRejection.RANGE_TOO_LONG

    def test_end_in_future(self):
        result = validate_date_range("2025-08-01", "2025-08-20", now=NOW)

        assert result.reason is WindowRejection.END_IN_FUTURE
        assert result.message == "Enddatum darf nicht in der Zukunft liegen"

    def test_order_checked_before_length(self):
        result = validate_date_range("2030-01-01", "2020-01-01", now=NOW)

        assert result.reason is WindowRejection.START_NOT_BEFORE_END

    def test_custom_max_days(self):
        result = validate_date_range("2025-07-01", "2025-07-31", now=NOW, max_days=7)

        assert result.reason is WindowRejection.RANGE_TOO_LONG

    def test_defaults_now_to_current_time(self):
        later = dt.date.today() + dt.timedelta(days=3)

        result = validate_date_range(dt.date.today() - dt.timedelta(days=3), later)

        assert result.reason is WindowRejection.END_IN_FUTURE

    def test_unparseable_date_raises(self):
        with pytest.raises(InvalidDateRange):
            validate_date_range("01.07.2025", "2025-07-31", now=NOW)


class TestDateRangeTimezone:
    """Offsets and the reference clock are compared in practice time."""

    def test_utc_end_converted_before_future_check(self):
        # 10:30Z is 12:30 in Berlin, after a 12:00 local reference
        result = validate_date_range(
            "2025-08-01", "2025-08-15T10:30:00Z", now="2025-08-15T12:00:00"
        )

        assert result.reason is WindowRejection.END_IN_FUTURE

    def test_aware_reference_converted(self):
        # now 11:00Z is 13:00 in Berlin, after the 12:30 local end
        result = validate_date_range(
            "2025-08-01", "2025-08-15T10:30:00Z", now="2025-08-15T11:00:00+00:00"
        )

        assert result.valid

    def test_explicit_utc_zone(self):
        result = validate_date_range(
            "2025-08-01", "2025-08-15T10:30:00Z", now="2025-08-15T12:00:00", timezone="UTC"
        )

        assert result.valid
