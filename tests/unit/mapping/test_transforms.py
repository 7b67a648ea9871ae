import base64
import string
from collections.abc import Callable

import pytest

from docgen.mapping import create_transform_registry, java_string_hash
from docgen.mapping._transforms import (
    CalculateAgeTransform,
    CalculateDaysBetweenTransform,
    CapitalizeTransform,
    EncryptSSNTransform,
    FormatCurrencyTransform,
    FormatDateTransform,
    FormatPhoneUSTransform,
    GenerateRandomTransform,
    HashTransform,
    RemoveSpacesTransform,
    TruncateTransform,
)


class TestFormatPhoneUS:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("5551234567", "(555) 123-4567"),
            ("555.123.4567", "(555) 123-4567"),
            ("(555) 123 4567", "(555) 123-4567"),
            ("12345", "12345"),
            ("", ""),
        ],
    )
    def test_format(self, value: str, expected: str) -> None:
        assert FormatPhoneUSTransform()(value) == expected


class TestCalculateAge:
    def test_birthday_not_yet_reached(self, freeze_time: Callable[..., object]) -> None:
        _ = freeze_time(2026, 1, 3)

        assert CalculateAgeTransform()("1990-05-15") == "35"

    def test_birthday_today(self, freeze_time: Callable[..., object]) -> None:
        _ = freeze_time(2026, 5, 15)

        assert CalculateAgeTransform()("1990-05-15") == "36"

    @pytest.mark.parametrize("value", ["", "not-a-date", "1990-13-01"])
    def test_bad_input_is_zero(self, value: str) -> None:
        assert CalculateAgeTransform()(value) == "0"


class TestFormatCurrency:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1234.5", "$1,234.50"),
            ("1234567", "$1,234,567.00"),
            ("2.675", "$2.68"),
            ("0.005", "$0.01"),
            ("", "$0.00"),
            ("abc", "abc"),
        ],
    )
    def test_format(self, value: str, expected: str) -> None:
        assert FormatCurrencyTransform()(value) == expected


class TestEncryptSSN:
    def test_is_reversible_base64(self) -> None:
        encoded = EncryptSSNTransform()("123-45-6789")

        assert encoded != "123-45-6789"
        assert base64.b64decode(encoded).decode("utf-8") == "123-45-6789"

    def test_empty(self) -> None:
        assert EncryptSSNTransform()("") == ""


class TestGenerateRandom:
    def test_default_length(self) -> None:
        value = GenerateRandomTransform()()

        assert len(value) == 6
        assert set(value) <= set(string.ascii_uppercase + string.digits)

    def test_explicit_length(self) -> None:
        assert len(GenerateRandomTransform()("12")) == 12

    def test_unparseable_length_uses_default(self) -> None:
        assert len(GenerateRandomTransform()("many")) == 6


class TestFormatDate:
    def test_default_pattern(self) -> None:
        assert FormatDateTransform()("1990-05-15") == "05/15/1990"

    def test_explicit_pattern(self) -> None:
        assert FormatDateTransform()("1990-05-15", "MMMM d, yyyy") == "May 15, 1990"

    def test_unparseable_date_returned_as_is(self) -> None:
        assert FormatDateTransform()("someday", "yyyy") == "someday"

    def test_unsupported_pattern_returns_input(self) -> None:
        assert FormatDateTransform()("1990-05-15", "HH:mm") == "1990-05-15"

    def test_empty(self) -> None:
        assert FormatDateTransform()("") == ""


class TestCalculateDaysBetween:
    def test_leap_year(self) -> None:
        assert CalculateDaysBetweenTransform()("2024-01-01", "2024-03-01") == "60"

    def test_order_does_not_matter(self) -> None:
        assert CalculateDaysBetweenTransform()("2024-03-01", "2024-01-01") == "60"

    def test_bad_input_is_zero(self) -> None:
        assert CalculateDaysBetweenTransform()("2024-01-01", "") == "0"


class TestTextTransforms:
    def test_remove_spaces(self) -> None:
        assert RemoveSpacesTransform()(" a b\tc\n") == "abc"

    def test_capitalize(self) -> None:
        assert CapitalizeTransform()("hELLO   wORLD") == "Hello World"

    def test_capitalize_empty(self) -> None:
        assert CapitalizeTransform()("") == ""

    def test_truncate(self) -> None:
        assert TruncateTransform()("abcdef", "3") == "abc..."

    def test_truncate_short_value_unchanged(self) -> None:
        assert TruncateTransform()("abc", "3") == "abc"

    def test_truncate_default_length(self) -> None:
        value = "x" * 60

        assert TruncateTransform()(value) == "x" * 50 + "..."

    def test_truncate_negative_length_raises(self) -> None:
        with pytest.raises(ValueError, match="must not be negative"):
            _ = TruncateTransform()("abc", "-1")


class TestHash:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("", 0), ("a", 97), ("Aa", 2112), ("BB", 2112), ("hello", 99162322)],
    )
    def test_java_string_hash(self, value: str, expected: int) -> None:
        assert java_string_hash(value) == expected

    def test_overflow_wraps_to_signed(self) -> None:
        hashed = java_string_hash("polygenelubricants")

        assert hashed == -(1 << 31)

    def test_transform_is_absolute(self) -> None:
        value = "this string hashes negative"
        hashed = java_string_hash(value)

        assert HashTransform()(value) == str(abs(hashed))

    def test_minimum_value_stays_negative(self) -> None:
        assert HashTransform()("polygenelubricants") == str(-(1 << 31))


class TestTransformRegistry:
    def test_builtins_registered(self) -> None:
        registry = create_transform_registry()

        for name in (
            "identity",
            "passthrough",
            "formatPhoneUS",
            "calculateAge",
            "formatCurrency",
            "encryptSSN",
            "generateRandom",
            "formatDate",
            "calculateDays",
            "calculateDaysBetween",
            "removeSpaces",
            "capitalize",
            "truncate",
            "hash",
        ):
            assert name in registry

    def test_lookup_is_case_insensitive(self) -> None:
        registry = create_transform_registry()

        assert registry.get("FORMATPHONEUS") is registry.get("formatphoneus")

    def test_unknown_is_none(self) -> None:
        assert create_transform_registry().get("nope") is None

    def test_extra_transforms_replace_builtins(self) -> None:
        def shout(value: str = "", *_: str) -> str:
            return value.upper()

        registry = create_transform_registry({"capitalize": shout, "shout": shout})

        assert registry.get("capitalize") is shout
        assert "shout" in registry

    def test_all_transforms_is_a_copy(self) -> None:
        registry = create_transform_registry()
        transforms = registry.all_transforms()
        transforms.clear()

        assert "hash" in registry
