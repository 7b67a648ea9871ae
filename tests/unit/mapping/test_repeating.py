from unittest.mock import MagicMock

import pytest

from docgen.mapping import (
    DirectMappingStrategy,
    JsonPathMappingStrategy,
    build_field_name,
    expand_repeating_group,
)
from docgen.templates import (
    IndexPosition,
    MappingGroup,
    MappingType,
    RepeatingGroupSpec,
)

DATA = {
    "children": [
        {"firstName": "Ann", "age": 4},
        {"firstName": "Ben", "age": 7},
        {"firstName": "Cat", "age": 9},
    ],
    "household": {"size": 5},
}


def _group(base_path: str | None = "$.children", **spec: object) -> MappingGroup:
    return MappingGroup.model_validate(
        {
            "basePath": base_path,
            "repeatingGroup": {"fields": {"FirstName": "firstName"}, **spec},
        }
    )


class TestBuildFieldName:
    @pytest.mark.parametrize(
        ("spec", "expected"),
        [
            (RepeatingGroupSpec(prefix="child"), "child2FirstName"),
            (
                RepeatingGroupSpec(prefix="child", index_separator="_"),
                "child2_FirstName",
            ),
            (
                RepeatingGroupSpec(
                    prefix="child",
                    index_separator=".",
                    index_position=IndexPosition.AFTER_FIELD,
                ),
                "childFirstName.2",
            ),
            (
                RepeatingGroupSpec(
                    suffix="_c", index_position=IndexPosition.AFTER_FIELD
                ),
                "FirstName2_c",
            ),
            (RepeatingGroupSpec(), "2FirstName"),
        ],
    )
    def test_names(self, spec: RepeatingGroupSpec, expected: str) -> None:
        assert build_field_name(spec, 2, "FirstName") == expected


class TestExpandRepeatingGroup:
    @pytest.fixture
    def strategy(self, mock_logger: MagicMock) -> JsonPathMappingStrategy:
        return JsonPathMappingStrategy(mock_logger)

    def test_after_field_with_separator(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        group = _group(prefix="child", indexSeparator=".", indexPosition="AFTER_FIELD")

        result = expand_repeating_group(strategy, DATA, group, mock_logger)

        assert result == {
            "childFirstName.1": "Ann",
            "childFirstName.2": "Ben",
            "childFirstName.3": "Cat",
        }

    def test_max_items_caps_expansion(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        group = _group(
            prefix="child",
            indexSeparator=".",
            indexPosition="AFTER_FIELD",
            maxItems=2,
        )

        result = expand_repeating_group(strategy, DATA, group, mock_logger)

        assert list(result) == ["childFirstName.1", "childFirstName.2"]

    def test_start_index(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        group = _group(prefix="c", startIndex=0)

        result = expand_repeating_group(strategy, DATA, group, mock_logger)

        assert list(result) == ["c0FirstName", "c1FirstName", "c2FirstName"]

    def test_several_fields_per_item(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        group = MappingGroup.model_validate(
            {
                "basePath": "children[0:2]",
                "repeatingGroup": {
                    "prefix": "kid_",
                    "indexSeparator": "_",
                    "fields": {"name": "firstName", "age": "age"},
                },
            }
        )

        result = expand_repeating_group(strategy, DATA, group, mock_logger)

        assert result == {
            "kid_1_name": "Ann",
            "kid_1_age": "4",
            "kid_2_name": "Ben",
            "kid_2_age": "7",
        }

    def test_empty_list_produces_nothing(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        result = expand_repeating_group(
            strategy, {"children": []}, _group(prefix="c"), mock_logger
        )

        assert result == {}
        mock_logger.warning.assert_not_called()

    def test_missing_base_path_warns(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        result = expand_repeating_group(
            strategy, DATA, _group(base_path=None, prefix="c"), mock_logger
        )

        assert result == {}
        assert mock_logger.warning.call_args.args == (
            "Repeating group requires a basePath",
        )

    def test_non_list_result_warns(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        result = expand_repeating_group(
            strategy, DATA, _group(base_path="$.household", prefix="c"), mock_logger
        )

        assert result == {}
        assert mock_logger.warning.call_args.kwargs["result_type"] == "dict"

    def test_failing_base_path_warns(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        result = expand_repeating_group(
            strategy, DATA, _group(base_path="$.children[?(", prefix="c"), mock_logger
        )

        assert result == {}
        mock_logger.warning.assert_called_once()

    def test_direct_strategy(self, mock_logger: MagicMock) -> None:
        group = MappingGroup.model_validate(
            {
                "mappingType": "DIRECT",
                "basePath": "children",
                "repeatingGroup": {"prefix": "n", "fields": {"": "firstName"}},
            }
        )

        result = expand_repeating_group(
            DirectMappingStrategy(mock_logger), DATA, group, mock_logger
        )

        assert group.mapping_type is MappingType.DIRECT
        assert result == {"n1": "Ann", "n2": "Ben", "n3": "Cat"}

    def test_no_spec_is_empty(
        self, strategy: JsonPathMappingStrategy, mock_logger: MagicMock
    ) -> None:
        group = MappingGroup(base_path="$.children", fields={"a": "b"})

        assert expand_repeating_group(strategy, DATA, group, mock_logger) == {}
