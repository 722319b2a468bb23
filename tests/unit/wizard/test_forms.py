"""Tests for reading and normalizing modal values."""

import pytest

from crp_bot.wizard.forms import (
    parse_leading_int,
    parse_variation_count,
    parse_variation_index,
    read_value,
)


class TestReadValue:
    """Tests for read_value()."""

    def test_reads_plain_text_input(self) -> None:
        values = {"testname_block": {"test_name": {"type": "plain_text_input", "value": "hero"}}}

        assert read_value(values, "testname_block", "test_name") == "hero"

    def test_reads_static_select(self) -> None:
        values = {
            "client_block": {
                "client_select": {"type": "static_select", "selected_option": {"value": "acme"}}
            }
        }

        assert read_value(values, "client_block", "client_select") == "acme"

    def test_unselected_select_is_none(self) -> None:
        values = {"client_block": {"client_select": {"selected_option": None}}}

        assert read_value(values, "client_block", "client_select") is None

    def test_blank_and_missing_inputs_are_none(self) -> None:
        values = {"js_1": {"val": {"value": None}}, "css_1": {"val": {"value": ""}}}

        assert read_value(values, "js_1", "val") is None
        assert read_value(values, "css_1", "val") is None
        assert read_value(values, "js_2", "val") is None
        assert read_value(values, "js_1", "other") is None


class TestParseLeadingInt:
    """Tests for parse_leading_int()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("3", 3), (" 4 ", 4), ("2 variations", 2), ("-1", -1), ("+5", 5)],
    )
    def test_parses_integer_prefix(self, raw: str, expected: int) -> None:
        assert parse_leading_int(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "abc", "x3"])
    def test_returns_none_without_integer_prefix(self, raw: str | None) -> None:
        assert parse_leading_int(raw) is None


class TestParseVariationCount:
    """Variation counts are clamped to [1, 5], never rejected."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("1", 1),
            ("3", 3),
            ("5", 5),
            ("9", 5),
            ("0", 1),
            ("-2", 1),
            ("many", 1),
            (None, 1),
        ],
    )
    def test_clamps(self, raw: str | None, expected: int) -> None:
        assert parse_variation_count(raw) == expected


class TestParseVariationIndex:
    """Tests for parse_variation_index()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("2", 2), ("7", 7), ("abc", 1), (None, 1)],
    )
    def test_defaults_to_first_variation(self, raw: str | None, expected: int) -> None:
        assert parse_variation_index(raw) == expected

    @pytest.mark.parametrize(("raw", "expected"), [("0", 0), ("-3", -3)])
    def test_keeps_non_positive_numbers(self, raw: str, expected: int) -> None:
        assert parse_variation_index(raw) == expected
