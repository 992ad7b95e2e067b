"""
Tests for GS1 date normalization and expiry classification.
"""

from datetime import date, datetime, timedelta

import pytest
from gs1_scanner import ExpiryStatus, classify_expiry, normalize_gs1_date
from gs1_scanner.validators import coerce_today, days_in_month, days_until, is_leap_year


class TestNormalizeDate:
    """Tests for normalize_gs1_date()."""

    def test_valid_date(self):
        """Test a regular YYMMDD date."""
        result = normalize_gs1_date("250630")
        assert result.iso_date == "2025-06-30"
        assert result.display_date == "30/06/2025"
        assert result.date == date(2025, 6, 30)
        assert not result.day_unspecified

    def test_year_is_always_2000_based(self):
        """Test no century pivot is applied."""
        assert normalize_gs1_date("990101").iso_date == "2099-01-01"
        assert normalize_gs1_date("000101").iso_date == "2000-01-01"

    @pytest.mark.parametrize("value,expected", [
        ("250200", "2025-02-28"),
        ("240200", "2024-02-29"),
        ("241200", "2024-12-31"),
        ("250400", "2025-04-30"),
    ])
    def test_day_zero_is_end_of_month(self, value, expected):
        """Test DD=00 resolves to the last day of the month."""
        result = normalize_gs1_date(value)
        assert result.iso_date == expected
        assert result.day_unspecified

    @pytest.mark.parametrize("value", [
        "250231",   # Feb 31
        "250229",   # Feb 29 in a common year
        "250431",   # Apr 31
        "251301",   # month 13
        "250001",   # month 0
        "250132",   # day 32
        "251300",   # month 13 with day 00
    ])
    def test_invalid_calendar_dates(self, value):
        """Test values that are not calendar dates."""
        assert normalize_gs1_date(value) is None

    @pytest.mark.parametrize("value", [
        "", "2506", "2506300", "25063a", None, 250630,
        "25²630",   # superscript two
        "٢٥٠٦٣٠",   # Arabic-Indic digits
    ])
    def test_malformed_values(self, value):
        """Test values that are not 6 digits."""
        assert normalize_gs1_date(value) is None

    def test_leap_day(self):
        """Test Feb 29 in a leap year."""
        assert normalize_gs1_date("240229").iso_date == "2024-02-29"


class TestCalendar:
    """Tests for the month length table."""

    @pytest.mark.parametrize("year,expected", [(2000, True), (1900, False), (2024, True), (2025, False), (2100, False)])
    def test_leap_years(self, year, expected):
        assert is_leap_year(year) is expected

    def test_days_in_month(self):
        assert days_in_month(2025, 1) == 31
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 11) == 30

    def test_invalid_month_raises(self):
        with pytest.raises(ValueError):
            days_in_month(2025, 13)


class TestClassifyExpiry:
    """Tests for classify_expiry()."""

    TODAY = date(2025, 6, 1)

    @pytest.mark.parametrize("iso,expected", [
        ("", ExpiryStatus.MISSING),
        (None, ExpiryStatus.MISSING),
        ("2025-05-31", ExpiryStatus.EXPIRED),
        ("2025-06-01", ExpiryStatus.SOON),
        ("2025-07-01", ExpiryStatus.SOON),
        ("2025-07-02", ExpiryStatus.OK),
        ("2024-01-01", ExpiryStatus.EXPIRED),
    ])
    def test_buckets(self, iso, expected):
        """Test boundaries: <0 expired, 0..30 soon, >30 ok."""
        assert classify_expiry(iso, self.TODAY) == expected

    def test_datetime_today_uses_midnight(self):
        """Test time of day does not change the day difference."""
        afternoon = datetime(2025, 6, 1, 15, 30)
        assert classify_expiry("2025-06-01", afternoon) == ExpiryStatus.SOON
        assert days_until("2025-06-02", afternoon) == 1

    def test_string_today(self):
        """Test ISO string reference day."""
        assert classify_expiry("2025-06-10", "2025-06-01") == ExpiryStatus.SOON
        assert coerce_today("2025-06-01") == date(2025, 6, 1)

    def test_custom_threshold(self):
        """Test configurable soon window."""
        assert classify_expiry("2025-06-10", self.TODAY, soon_threshold_days=7) == ExpiryStatus.OK
        assert classify_expiry("2025-06-08", self.TODAY, soon_threshold_days=7) == ExpiryStatus.SOON

    def test_default_today(self):
        """Test classification against the current date."""
        far = (date.today() + timedelta(days=400)).isoformat()
        assert classify_expiry(far) == ExpiryStatus.OK

    def test_monotonic_in_days_remaining(self):
        """Status only moves expired -> soon -> ok as the gap grows."""
        order = [ExpiryStatus.EXPIRED, ExpiryStatus.SOON, ExpiryStatus.OK]
        ranks = [
            order.index(classify_expiry((self.TODAY + timedelta(days=offset)).isoformat(), self.TODAY))
            for offset in range(-60, 120)
        ]
        assert ranks == sorted(ranks)
        assert set(ranks) == {0, 1, 2}

    def test_unsupported_today_type(self):
        with pytest.raises(TypeError):
            coerce_today(20250601)
