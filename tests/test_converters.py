"""Tests for the text converters."""

import pytest

from nationscript.core.converters import (
    convert_boolean,
    convert_choice,
    convert_list,
    convert_null_if_zero,
    convert_number,
    identity,
)


class TestConvertNumber:

    @pytest.mark.parametrize(
        "text, expected",
        [("12", 12), ("-3", -3), ("+4", 4), ("12.50", 12.5), ("1.2e+06", 1200000.0), (" 7 ", 7)],
    )
    def test_numeric_text(self, text, expected):
        result = convert_number(text)
        assert result == expected
        assert type(result) is type(expected)

    def test_blank_is_none(self):
        assert convert_number("") is None
        assert convert_number("  ") is None
        assert convert_number(None) is None

    def test_numbers_pass_through(self):
        assert convert_number(5) == 5
        assert convert_number(2.5) == 2.5

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            convert_number("twelve")


class TestConvertBoolean:

    def test_api_flags(self):
        assert convert_boolean("1") is True
        assert convert_boolean("0") is False
        assert convert_boolean("") is False

    def test_words(self):
        assert convert_boolean("true") is True
        assert convert_boolean("Yes") is True
        assert convert_boolean("no") is False


class TestConvertList:

    def test_split_on_delimiter(self):
        assert convert_list(":")("a:b:c") == ["a", "b", "c"]

    def test_item_converter_applied(self):
        assert convert_list(",", convert_number)("1,2,30") == [1, 2, 30]

    def test_blank_is_empty_list(self):
        assert convert_list(",")("") == []

    def test_empty_parts_skipped(self):
        assert convert_list(",")("a,,b,") == ["a", "b"]

    def test_empty_delimiter_splits_characters(self):
        assert convert_list("")("XWCE") == ["X", "W", "C", "E"]

    def test_non_string_delimiter_rejected(self):
        with pytest.raises(TypeError):
            convert_list(None)


class TestOtherConverters:

    def test_choice_lookup_with_default(self):
        convert = convert_choice({"ask": True, "bid": False}, default=None)
        assert convert("ask") is True
        assert convert(" bid ") is False
        assert convert("other") is None

    def test_null_if_zero(self):
        assert convert_null_if_zero("0") is None
        assert convert_null_if_zero("") is None
        assert convert_null_if_zero("testlandia") == "testlandia"

    def test_identity(self):
        marker = object()
        assert identity(marker) is marker
