from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from docgen.composition import (
    OVERFLOW_INDICATOR_TEXT,
    OverflowPaginator,
    OverflowResult,
    page_sizes,
)
from docgen.mapping import create_strategy_registry
from docgen.templates import MappingType, OverflowSpec

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def _spec(**overrides: object) -> OverflowSpec:
    config: dict[str, object] = {
        "arrayPath": "$.items",
        "maxItemsInMain": 3,
        "itemsPerOverflowPage": 2,
        "addendumTemplatePath": "forms/addendum.pdf",
    }
    config.update(overrides)
    return OverflowSpec.model_validate(config)


def _data(count: int) -> dict[str, object]:
    return {"client": "ACME", "items": [{"n": i} for i in range(count)]}


class TestPageSizes:
    @pytest.mark.parametrize(
        ("total", "max_in_main", "per_page", "expected"),
        [
            (8, 3, 2, [2, 2, 1]),
            (7, 3, 2, [2, 2]),
            (3, 3, 2, []),
            (2, 3, 2, []),
            (0, 0, 5, []),
            (5, 0, 5, [5]),
            (10, 4, 0, [6]),
            (10, 4, -1, [6]),
            (4, -2, 3, [3, 1]),
        ],
    )
    def test_sizes(
        self, total: int, max_in_main: int, per_page: int, expected: list[int]
    ) -> None:
        assert page_sizes(total, max_in_main, per_page) == expected


class TestOverflowPaginator:
    @pytest.fixture
    def paginator(self, mock_logger: MagicMock) -> OverflowPaginator:
        return OverflowPaginator(create_strategy_registry(mock_logger), mock_logger)

    def test_eight_items_make_three_pages(self, paginator: OverflowPaginator) -> None:
        pages = paginator.paginate("schedule", _spec(), _data(8))

        assert [page.section_id for page in pages] == [
            "schedule_addendum_1",
            "schedule_addendum_2",
            "schedule_addendum_3",
        ]
        assert [len(page.items) for page in pages] == [2, 2, 1]
        assert {page.total_pages for page in pages} == {3}
        assert [item["n"] for item in pages[0].items] == [3, 4]
        assert [item["n"] for item in pages[2].items] == [7]

    def test_page_data_carries_request_and_addendum_keys(
        self, paginator: OverflowPaginator
    ) -> None:
        data = _data(5)

        pages = paginator.paginate("schedule", _spec(), data)

        assert pages[0].data == {
            "client": "ACME",
            "items": data["items"],
            "overflowItems": [{"n": 3}, {"n": 4}],
            "isAddendum": True,
            "addendumPageNumber": 1,
            "totalAddendumPages": 1,
        }
        assert pages[0].template_path == "forms/addendum.pdf"
        assert "overflowItems" not in data

    def test_exactly_max_items_has_no_overflow(
        self, paginator: OverflowPaginator
    ) -> None:
        assert paginator.paginate("s", _spec(), _data(3)) == []
        assert paginator.has_overflow(_spec(), _data(3)) is False
        assert paginator.has_overflow(_spec(), _data(4)) is True

    def test_unbounded_page_size(self, paginator: OverflowPaginator) -> None:
        pages = paginator.paginate("s", _spec(itemsPerOverflowPage=0), _data(9))

        assert len(pages) == 1
        assert len(pages[0].items) == 6

    def test_negative_max_in_main_is_clamped(self, paginator: OverflowPaginator) -> None:
        pages = paginator.paginate("s", _spec(maxItemsInMain=-4), _data(3))

        assert [len(page.items) for page in pages] == [2, 1]
        assert pages[0].items[0] == {"n": 0}

    def test_missing_template_path_warns(
        self, paginator: OverflowPaginator, mock_logger: MagicMock
    ) -> None:
        pages = paginator.paginate("s", _spec(addendumTemplatePath=None), _data(8))

        assert pages == []
        mock_logger.warning.assert_called_once()

    def test_non_list_collection_is_ignored(self, paginator: OverflowPaginator) -> None:
        data = {"items": {"n": 1}}

        assert paginator.collect(_spec(), data) is None
        assert paginator.paginate("s", _spec(), data) == []

    def test_failing_array_path_warns(
        self, paginator: OverflowPaginator, mock_logger: MagicMock
    ) -> None:
        assert paginator.collect(_spec(arrayPath="$.items[?("), _data(8)) is None
        assert mock_logger.warning.call_args.args == (
            "Failed to evaluate overflow array path",
        )

    def test_jsonata_array_path(self, paginator: OverflowPaginator) -> None:
        spec = _spec(arrayPath="items[n > 1]", mappingType="JSONATA", maxItemsInMain=1)

        pages = paginator.paginate("s", spec, _data(5))

        assert [item["n"] for page in pages for item in page.items] == [3, 4]

    def test_non_mapping_data_gets_only_addendum_keys(
        self, paginator: OverflowPaginator
    ) -> None:
        spec = _spec(arrayPath="$", maxItemsInMain=1)

        pages = paginator.paginate("s", spec, ["a", "b"])

        assert pages[0].data == {
            "overflowItems": ["b"],
            "isAddendum": True,
            "addendumPageNumber": 1,
            "totalAddendumPages": 1,
        }

    def test_process_collects_addenda_and_indicators(
        self, paginator: OverflowPaginator
    ) -> None:
        specs = (
            _spec(overflowIndicatorField="itemsNotice"),
            _spec(arrayPath="$.other", overflowIndicatorField="otherNotice"),
            _spec(),
        )

        result = paginator.process("s", specs, _data(8))

        assert result.indicator_fields == {
            "itemsNotice": OVERFLOW_INDICATOR_TEXT,
            "otherNotice": "",
        }
        assert [page.section_id for page in result.addenda] == [
            "s_addendum_1",
            "s_addendum_2",
            "s_addendum_3",
            "s_addendum_1",
            "s_addendum_2",
            "s_addendum_3",
        ]

    def test_process_evaluates_each_array_path_once(
        self, mock_logger: MagicMock, mocker: "MockerFixture"
    ) -> None:
        registry = create_strategy_registry(mock_logger)
        evaluate = mocker.spy(registry.get(MappingType.JSONPATH), "evaluate")
        paginator = OverflowPaginator(registry, mock_logger)

        result = paginator.process(
            "s", (_spec(overflowIndicatorField="itemsNotice"),), _data(8)
        )

        assert len(result.addenda) == 3
        assert result.indicator_fields == {"itemsNotice": OVERFLOW_INDICATOR_TEXT}
        assert evaluate.call_count == 1

    def test_process_without_configs_is_empty(
        self, paginator: OverflowPaginator
    ) -> None:
        assert paginator.process("s", (), _data(8)) == OverflowResult()

    def test_payload_to_dict(self, paginator: OverflowPaginator) -> None:
        page = paginator.paginate("s", _spec(), _data(4))[0]

        assert page.to_dict() == {
            "sectionId": "s_addendum_1",
            "templatePath": "forms/addendum.pdf",
            "pageNumber": 1,
            "totalPages": 1,
            "data": page.data,
        }
