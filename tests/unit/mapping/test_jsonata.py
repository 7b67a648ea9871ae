from datetime import date
from unittest.mock import MagicMock

import pytest

from docgen.mapping import JsonataMappingStrategy
from docgen.mapping._jsonata import to_text

DATA = {
    "first": "Ada",
    "last": "Lovelace",
    "age": 36,
    "items": [{"sku": "A1", "price": 5}, {"sku": "B2", "price": 7.5}],
}


class TestToText:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("x", "x"),
            (True, "true"),
            (3, "3"),
            (3.0, "3"),
            (2.5, "2.5"),
            ({"a": 1}, '{"a":1}'),
            ([1, 2], "[1,2]"),
        ],
    )
    def test_rendering(self, value: object, expected: str) -> None:
        assert to_text(value) == expected


class TestJsonataMappingStrategy:
    @pytest.fixture
    def strategy(self, mock_logger: MagicMock) -> JsonataMappingStrategy:
        return JsonataMappingStrategy(mock_logger)

    def test_concatenation(self, strategy: JsonataMappingStrategy) -> None:
        result = strategy.map_fields(DATA, {"full": "first & ' ' & last"})

        assert result == {"full": "Ada Lovelace"}

    def test_aggregate(self, strategy: JsonataMappingStrategy) -> None:
        result = strategy.map_fields(DATA, {"total": "$sum(items.price)"})

        assert result == {"total": "12.5"}

    def test_count(self, strategy: JsonataMappingStrategy) -> None:
        assert strategy.map_fields(DATA, {"n": "$count(items)"}) == {"n": "2"}

    def test_conditional(self, strategy: JsonataMappingStrategy) -> None:
        result = strategy.map_fields(
            DATA, {"band": "age >= 18 ? 'adult' : 'minor'"}
        )

        assert result == {"band": "adult"}

    def test_undefined_result_is_empty(self, strategy: JsonataMappingStrategy) -> None:
        assert strategy.map_fields(DATA, {"x": "missing.field"}) == {"x": ""}

    def test_blank_expression_is_empty(self, strategy: JsonataMappingStrategy) -> None:
        assert strategy.map_fields(DATA, {"x": "   "}) == {"x": ""}

    def test_dates_are_plain_strings(self, strategy: JsonataMappingStrategy) -> None:
        result = strategy.map_fields({"d": date(2024, 3, 5)}, {"d": "d"})

        assert result == {"d": "2024-03-05"}

    def test_invalid_expression_maps_to_empty(
        self, strategy: JsonataMappingStrategy, mock_logger: MagicMock
    ) -> None:
        result = strategy.map_fields(DATA, {"bad": "first &"})

        assert result == {"bad": ""}
        mock_logger.warning.assert_called_once()

    def test_other_fields_survive_a_failure(
        self, strategy: JsonataMappingStrategy
    ) -> None:
        result = strategy.map_fields(DATA, {"bad": "(((", "good": "first"})

        assert result == {"bad": "", "good": "Ada"}
