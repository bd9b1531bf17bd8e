"""Tests for strict ordered date normalization."""

from __future__ import annotations

import pytest

from grants_ingest.core.exceptions import DateFormatError, ParseError
from grants_ingest.normalize.dates import normalize_date_string


class TestRecognizedFormats:
    def test_iso_input_is_unchanged(self):
        assert normalize_date_string("2024-01-15") == "2024-01-15"

    def test_mmddyyyy_input_is_reformatted(self):
        assert normalize_date_string("01152024") == "2024-01-15"

    @pytest.mark.parametrize("value", ["2024-01-15", "01152024", "12312099"])
    def test_normalizing_twice_is_stable(self, value):
        once = normalize_date_string(value)
        assert normalize_date_string(once) == once

    def test_optional_formats_can_be_enabled(self):
        assert normalize_date_string("03/04/2024", ["MM/DD/YYYY"]) == "2024-03-04"
        assert normalize_date_string("20240304", ["YYYYMMDD"]) == "2024-03-04"

    def test_first_matching_format_wins(self):
        # "10122024" reads as Oct 12 under MMDDYYYY; YYYYMMDD rejects it (month 20).
        assert normalize_date_string("10122024", ["YYYYMMDD", "MMDDYYYY"]) == "2024-10-12"
        assert normalize_date_string("20240102", ["YYYYMMDD", "MMDDYYYY"]) == "2024-01-02"


class TestStrictMatching:
    @pytest.mark.parametrize("value", [
        "2024-1-5",          # unpadded
        "2024-01-15T00:00",  # trailing time
        " 2024-01-15",       # leading space
        "1152024",           # seven digits
        "2024/01/15",
    ])
    def test_partial_or_lenient_shapes_rejected(self, value):
        with pytest.raises(DateFormatError):
            normalize_date_string(value)

    @pytest.mark.parametrize("value", ["2024-02-30", "13012024", "2023-02-29"])
    def test_impossible_calendar_dates_rejected(self, value):
        with pytest.raises(DateFormatError):
            normalize_date_string(value)

    def test_leap_day_accepted(self):
        assert normalize_date_string("02292024") == "2024-02-29"


class TestFailures:
    def test_error_names_value_and_formats(self):
        with pytest.raises(DateFormatError) as exc_info:
            normalize_date_string("not-a-date")
        err = exc_info.value
        assert err.value == "not-a-date"
        assert err.formats == ["YYYY-MM-DD", "MMDDYYYY"]
        assert "not-a-date" in str(err)
        assert "YYYY-MM-DD, MMDDYYYY" in str(err)

    def test_date_format_error_is_a_parse_error(self):
        with pytest.raises(ParseError):
            normalize_date_string("nope")

    @pytest.mark.parametrize("value", [None, 20240115, ""])
    def test_non_string_or_empty_rejected(self, value):
        with pytest.raises(DateFormatError):
            normalize_date_string(value)

    def test_unknown_format_name_raises_value_error(self):
        with pytest.raises(ValueError):
            normalize_date_string("2024-01-15", ["DD-MM-YYYY"])
