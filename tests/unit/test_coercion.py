"""Unit tests for the string conversion rules."""

import math

import pytest

from tinyenv.coercion import (
    convert_element,
    convert_elements,
    parse_boolean,
    parse_number,
    split_array,
    to_text,
)
from tinyenv.exceptions import ArrayElementParseError


class TestParseNumber:
    """Numeric-string parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", 42),
            ("-7", -7),
            ("+3", 3),
            (" 8080 ", 8080),
            ("3.14", 3.14),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e3", 1000.0),
            ("2.5E-1", 0.25),
            ("0x1F", 31),
            ("0o17", 15),
            ("0b101", 5),
            ("", 0),
            ("   ", 0),
        ],
    )
    def test_accepts_numeric_strings(self, text, expected):
        """Integral, decimal, exponent and prefixed forms all parse."""
        assert parse_number(text) == expected

    @pytest.mark.unit
    def test_integral_literals_stay_int(self):
        """Integral literals produce ints; decimals produce floats."""
        assert isinstance(parse_number("8080"), int)
        assert isinstance(parse_number("8080.0"), float)

    @pytest.mark.unit
    def test_infinity(self):
        """Infinity spellings map to float infinities."""
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    @pytest.mark.unit
    def test_integer_past_digit_limit_is_infinite(self):
        """Integers too long to convert overflow to infinity."""
        assert parse_number("9" * 5000) == math.inf

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        ["not-a-number", "nan", "inf", "1_000", "12abc", "0x", "0xZZ", "0x-1", "1.2.3", "e5"],
    )
    def test_rejects_non_numbers(self, text):
        """Anything outside the numeric grammar raises ValueError."""
        with pytest.raises(ValueError):
            parse_number(text)


class TestParseBoolean:
    """Boolean parsing."""

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["true", "1", "yes", "TRUE", "Yes"])
    def test_truthy(self, text):
        assert parse_boolean(text) is True

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["false", "0", "no", "FALSE", "No"])
    def test_falsy(self, text):
        assert parse_boolean(text) is False

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["invalid", "on", "off", "y", " true"])
    def test_rejects_other_spellings(self, text):
        with pytest.raises(ValueError):
            parse_boolean(text)


class TestArrays:
    """Splitting and element conversion."""

    @pytest.mark.unit
    def test_split_trims_and_drops_empty(self):
        assert split_array("a, b ,c", ",") == ["a", "b", "c"]
        assert split_array(" a ,, ,b,", ",") == ["a", "b"]
        assert split_array("", ",") == []

    @pytest.mark.unit
    def test_split_custom_delimiter(self):
        assert split_array("a;b;c", ";") == ["a", "b", "c"]
        assert split_array("a,b", ";") == ["a,b"]

    @pytest.mark.unit
    def test_convert_elements_by_type(self):
        assert convert_elements(["1", "2"], "number", "NUMS") == [1, 2]
        assert convert_elements(["yes", "0"], "boolean", "FLAGS") == [True, False]
        assert convert_elements(["x"], "string", "LIST") == ["x"]
        assert convert_elements(["x"], None, "LIST") == ["x"]

    @pytest.mark.unit
    def test_element_failure_names_the_element(self):
        with pytest.raises(ArrayElementParseError) as exc_info:
            convert_elements(["1", "not-a-number", "3"], "number", "NUMS")

        assert str(exc_info.value) == (
            "Failed to parse NUMS array element as number: not-a-number"
        )
        assert exc_info.value.value == "not-a-number"

    @pytest.mark.unit
    def test_boolean_element_failure(self):
        with pytest.raises(ArrayElementParseError, match="FLAGS array element as boolean: maybe"):
            convert_element("maybe", "boolean", "FLAGS")


class TestToText:
    @pytest.mark.unit
    def test_booleans_use_lowercase_words(self):
        assert to_text(True) == "true"
        assert to_text(False) == "false"

    @pytest.mark.unit
    def test_other_values_use_str(self):
        assert to_text(5) == "5"
        assert to_text("x") == "x"
