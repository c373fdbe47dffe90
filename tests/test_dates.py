"""
Unit tests for date normalization and day counting
"""
from datetime import date, datetime

import pytest

from complaint_register.exceptions import InvalidDateRangeError
from complaint_register.services.dates import (
    days_between,
    normalize_date,
    parse_date,
    to_input_date,
)


class TestNormalizeDate:
    """Test conversion of date inputs into DD-MM-YYYY"""

    @pytest.mark.parametrize("value", ["05-01-2024", "2024-01-05", "5-1-2024"])
    def test_day_month_year_and_iso(self, value):
        """Day-month-year and ISO text describe the same date"""
        assert normalize_date(value) == "05-01-2024"

    def test_month_day_year_fallback(self):
        """Month-day-year is used when day-month-year is not a valid date"""
        assert normalize_date("01-13-2024") == "13-01-2024"

    def test_day_month_year_wins_when_ambiguous(self):
        """The first format in priority order decides ambiguous input"""
        assert normalize_date("03-04-2024") == "03-04-2024"

    def test_surrounding_whitespace(self):
        """Whitespace around the text is ignored"""
        assert normalize_date("  2024-12-31 ") == "31-12-2024"

    @pytest.mark.parametrize("value", [None, "", "   ", "not a date", "31-02-2024", "2024/01/05", "32-13-2024", True])
    def test_unparseable_returns_none(self, value):
        """Empty or nonsense input yields no date instead of raising"""
        assert normalize_date(value) is None

    def test_spreadsheet_serial(self):
        """Serials count days from the spreadsheet epoch"""
        assert normalize_date(45292) == "01-01-2024"
        assert normalize_date(45296) == "05-01-2024"

    def test_spreadsheet_serial_truncates_time(self):
        """Fractional serials are truncated to whole days"""
        assert normalize_date(45296.99) == "05-01-2024"

    def test_spreadsheet_serial_after_phantom_leap_day(self):
        """Serial 61 is 1 March 1900 once the phantom leap day is absorbed"""
        assert normalize_date(61) == "01-03-1900"

    def test_out_of_range_serial(self):
        """Serials beyond the calendar do not crash"""
        assert normalize_date(10 ** 12) is None
        assert normalize_date(float("nan")) is None

    def test_date_objects(self):
        """Date cells read from a workbook are formatted directly"""
        assert normalize_date(datetime(2024, 1, 5, 14, 30)) == "05-01-2024"
        assert normalize_date(date(2024, 1, 5)) == "05-01-2024"


class TestParseAndInputDate:
    """Test date parsing helpers"""

    def test_parse_date(self):
        """Canonical text parses back to a date"""
        assert parse_date("10-01-2024") == date(2024, 1, 10)

    def test_to_input_date(self):
        """Stored dates are reformatted for HTML date inputs"""
        assert to_input_date("10-01-2024") == "2024-01-10"
        assert to_input_date(None) is None
        assert to_input_date("") is None


class TestDaysBetween:
    """Test elapsed-day calculation"""

    def test_difference(self):
        """Whole days between complain and solve date"""
        assert days_between("05-01-2024", "10-01-2024") == 5

    def test_mixed_representations(self):
        """Both sides may use any accepted representation"""
        assert days_between("2024-01-05", 45301) == 5

    def test_missing_end(self):
        """No solve date means no day count"""
        assert days_between("05-01-2024", None) is None
        assert days_between("05-01-2024", "") is None

    def test_missing_start(self):
        """No complain date means no day count"""
        assert days_between(None, "10-01-2024") is None

    def test_inverted_range_allowed(self):
        """The default policy passes negative counts through"""
        assert days_between("10-01-2024", "05-01-2024") == -5

    def test_inverted_range_clamped(self):
        """The clamp policy turns negative counts into zero"""
        assert days_between("10-01-2024", "05-01-2024", policy="clamp") == 0

    def test_inverted_range_rejected(self):
        """The reject policy raises"""
        with pytest.raises(InvalidDateRangeError) as exc_info:
            days_between("10-01-2024", "05-01-2024", policy="reject", field="solveDate")

        assert exc_info.value.field == "solveDate"
        assert exc_info.value.days == -5

    def test_unknown_policy(self):
        """Unknown policies are a programming error"""
        with pytest.raises(ValueError):
            days_between("05-01-2024", "10-01-2024", policy="ignore")
