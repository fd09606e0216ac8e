"""Tests for number formatting helpers."""

import pytest

from life_weeks.utils.formatting import format_fixed, format_millions, format_number


class TestFormatNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [(0, "0"), (999, "999"), (1234567, "1,234,567"), (24.0, "24"), (1234.5, "1,234.5")],
    )
    def test_thousands_separators(self, value, expected):
        assert format_number(value) == expected


class TestFormatMillions:
    def test_rounds_to_whole_millions(self):
        assert format_millions(883_612_800) == "884M"

    def test_half_rounds_up(self):
        assert format_millions(2_500_000) == "3M"

    def test_large_values_keep_separators(self):
        assert format_millions(2_530_000_000) == "2,530M"

    def test_zero(self):
        assert format_millions(0) == "0M"


class TestFormatFixed:
    def test_pads_decimals(self):
        assert format_fixed(24.0, 2) == "24.00"

    def test_half_rounds_up(self):
        assert format_fixed(24.05, 1) == "24.1"

    def test_one_decimal(self):
        assert format_fixed(33.97, 1) == "34.0"
