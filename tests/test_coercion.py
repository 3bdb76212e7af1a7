"""Tests for value coercers."""

import logging
import sys

import pytest

from ngpull.coercion import (
    LegacyDate,
    coerce_count,
    coerce_duration,
    coerce_legacy_date,
    coerce_score,
    coerce_timestamp,
)

# Interpreters before 3.11 convert digit strings of any length
requires_int_digit_limit = pytest.mark.skipif(
    not hasattr(sys, "set_int_max_str_digits"), reason="no int string conversion limit"
)


class TestCoerceCount:
    """Tests for coerce_count."""

    def test_strips_thousands_separators(self):
        """Test that commas are removed before parsing."""
        assert coerce_count("12,345") == 12345

    def test_strips_trailing_unit_word(self):
        """Test that a trailing word such as 'Views' is ignored."""
        assert coerce_count("1,234 Views") == 1234

    def test_plain_number(self):
        """Test a bare integer."""
        assert coerce_count(" 87 ") == 87

    def test_zero_is_not_unparsable(self):
        """Test that zero is returned as 0, not None."""
        assert coerce_count("0") == 0

    @pytest.mark.parametrize("text", ["", "n/a", "-5", "1.5", "Views", ","])
    def test_rejects_malformed(self, text):
        """Test that malformed counts give None."""
        assert coerce_count(text) is None

    def test_none_input(self):
        """Test that None passes through."""
        assert coerce_count(None) is None

    def test_logs_warning_on_failure(self, caplog):
        """Test that unparsable input is reported at WARNING."""
        with caplog.at_level(logging.WARNING, logger="ngpull.coercion"):
            coerce_count("lots")
        assert "Unparsable count" in caplog.text

    @requires_int_digit_limit
    def test_overlong_digit_run(self):
        """Test that a count too long to convert gives None."""
        assert coerce_count("9" * 5000) is None


class TestCoerceDuration:
    """Tests for coerce_duration."""

    @pytest.mark.parametrize(
        "text,expected",
        [("0:00", 0), ("2:30", 150), ("10:59", 659), ("125:05", 7505)],
    )
    def test_minutes_seconds(self, text, expected):
        """Test M:SS strings."""
        assert coerce_duration(text) == expected

    @pytest.mark.parametrize("text", ["2:60", "1:75", "0:99"])
    def test_rejects_seconds_out_of_range(self, text):
        """Test that seconds of 60 or more are rejected."""
        assert coerce_duration(text) is None

    def test_all_valid_seconds(self):
        """Test every valid seconds value for a fixed minute count."""
        for seconds in range(60):
            assert coerce_duration(f"3:{seconds:02d}") == 3 * 60 + seconds

    def test_free_form_minutes_and_seconds(self):
        """Test '<N> min <N> sec' text."""
        assert coerce_duration("2 min 30 sec") == 150

    def test_free_form_minutes_only(self):
        """Test text with only a minutes token."""
        assert coerce_duration("4 min") == 240

    def test_free_form_seconds_only(self):
        """Test text with only a seconds token."""
        assert coerce_duration("45 sec") == 45

    def test_compact_units(self):
        """Test compact '2m30s' text."""
        assert coerce_duration("2m30s") == 150

    def test_long_unit_names(self):
        """Test spelled-out unit names."""
        assert coerce_duration("3 minutes 5 seconds") == 185

    @pytest.mark.parametrize("text", ["", "soon", "3.2 MB"])
    def test_rejects_unrecognised(self, text):
        """Test that text matching neither pattern gives None."""
        assert coerce_duration(text) is None

    @requires_int_digit_limit
    @pytest.mark.parametrize("text", ["9" * 5000 + ":00", "9" * 5000 + " min"])
    def test_overlong_digit_run(self, text):
        """Test that durations too long to convert give None."""
        assert coerce_duration(text) is None


class TestCoerceScore:
    """Tests for coerce_score."""

    def test_takes_numerator(self):
        """Test that only the part before the slash is used."""
        assert coerce_score("4.5 / 5.0") == 4.5

    def test_compact_fraction(self):
        """Test a fraction without spaces."""
        assert coerce_score("3.82/5") == 3.82

    def test_plain_float(self):
        """Test a bare number."""
        assert coerce_score("4") == 4.0

    @pytest.mark.parametrize("text", ["", "N/A", "nan", "inf", "-1", "four"])
    def test_rejects_malformed(self, text):
        """Test that non-numeric or negative scores give None."""
        assert coerce_score(text) is None

    def test_rejects_overflowing_number(self):
        """Test that a digit run too large for a float gives None, not inf."""
        assert coerce_score("1" * 400) is None

    def test_overflowing_numerator(self):
        """Test an overflowing numerator in a fraction."""
        assert coerce_score("9" * 400 + "/5") is None


class TestCoerceLegacyDate:
    """Tests for coerce_legacy_date."""

    def test_parses_components(self):
        """Test a normal MM/DD/YY date."""
        assert coerce_legacy_date("11/21/22") == LegacyDate(day=21, month=11, year=2022)

    def test_century_split_upper_bound(self):
        """Test that 69 maps to 2069."""
        assert coerce_legacy_date("12/31/69").year == 2069

    def test_century_split_lower_bound(self):
        """Test that 70 maps to 1970."""
        assert coerce_legacy_date("01/01/70").year == 1970

    def test_every_two_digit_year(self):
        """Test the split across the whole two-digit range."""
        for short_year in range(100):
            result = coerce_legacy_date(f"06/15/{short_year:02d}")
            expected = 2000 + short_year if short_year <= 69 else 1900 + short_year
            assert result.year == expected

    def test_rejects_february_30(self):
        """Test that a date that would roll over is rejected."""
        assert coerce_legacy_date("02/30/23") is None

    def test_rejects_day_31_in_30_day_month(self):
        """Test April 31st."""
        assert coerce_legacy_date("04/31/23") is None

    def test_accepts_leap_day(self):
        """Test February 29th in a leap year."""
        assert coerce_legacy_date("02/29/24") == LegacyDate(day=29, month=2, year=2024)

    def test_rejects_four_digit_year(self):
        """Test that a full year is not accepted as YY."""
        assert coerce_legacy_date("11/21/2022") is None

    @pytest.mark.parametrize(
        "text",
        ["", "11/21", "aa/bb/cc", "13/01/22", "00/10/22", "01/01/\u00b23", "\u0661/01/22", "001/01/22"],
    )
    def test_rejects_malformed(self, text):
        """Test malformed and out-of-range inputs."""
        assert coerce_legacy_date(text) is None

    def test_custom_component_order(self):
        """Test a DD/MM/YY format."""
        assert coerce_legacy_date("21/11/22", fmt="DD/MM/YY") == LegacyDate(day=21, month=11, year=2022)

    def test_invalid_format_raises(self):
        """Test that an unsupported format string is a programming error."""
        with pytest.raises(ValueError):
            coerce_legacy_date("11/21/22", fmt="YYYY-MM-DD")


class TestCoerceTimestamp:
    """Tests for coerce_timestamp."""

    def test_joins_tokens_and_converts_to_utc(self):
        """Test date and time tokens with a US zone abbreviation."""
        assert coerce_timestamp(["Jun 5, 2023", "12:34 PM EDT"]) == "2023-06-05T16:34:00.000Z"

    def test_single_string(self):
        """Test a single date string."""
        assert coerce_timestamp("Jul 1, 2023") == "2023-07-01T00:00:00.000Z"

    def test_legacy_date_token(self):
        """Test a leading MM/DD/YY token."""
        assert coerce_timestamp(["11/21/22", "3:00 PM"]) == "2022-11-21T15:00:00.000Z"

    def test_legacy_date_uses_century_split(self):
        """Test that a legacy year of 85 resolves to 1985."""
        assert coerce_timestamp("03/04/85").startswith("1985-03-04")

    def test_invalid_legacy_date(self):
        """Test that an impossible legacy date is unparsable."""
        assert coerce_timestamp("02/30/23") is None

    @pytest.mark.parametrize("tokens", ["", [], "not a date", None])
    def test_unparsable(self, tokens):
        """Test that garbage yields None rather than raising."""
        assert coerce_timestamp(tokens) is None

    def test_utc_conversion_overflow(self):
        """Test that a time that overflows when moved to UTC gives None."""
        assert coerce_timestamp("Dec 31, 9999 11:00 PM EST") is None

    def test_out_of_range_offset(self):
        """Test that an offset of a day or more gives None."""
        assert coerce_timestamp("2023-06-05 12:00 +99:00") is None
