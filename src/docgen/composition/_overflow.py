"""Overflow pagination: split an oversized collection into addendum pages."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from docgen.mapping import create_strategy_registry
from docgen.utils import get_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from docgen.mapping import StrategyRegistry
    from docgen.templates import OverflowSpec

OVERFLOW_ITEMS_KEY = "overflowItems"
IS_ADDENDUM_KEY = "isAddendum"
PAGE_NUMBER_KEY = "addendumPageNumber"
TOTAL_PAGES_KEY = "totalAddendumPages"

OVERFLOW_INDICATOR_TEXT = "See Addendum"


@dataclass(frozen=True, slots=True)
class AddendumPayload:
    """One addendum page: the template to render and the data to render it with.

    Attributes:
        section_id: ``<sectionId>_addendum_<pageNumber>``.
        template_path: The overflow spec's addendum template.
        page_number: 1-based page number.
        total_pages: Number of pages produced by the same overflow spec.
        items: The collection slice on this page.
        data: Shallow copy of the request data plus the addendum keys.
    """

    section_id: str
    template_path: str
    page_number: int
    total_pages: int
    items: tuple[Any, ...]
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Render as a camelCase dictionary."""
        return {
            "sectionId": self.section_id,
            "templatePath": self.template_path,
            "pageNumber": self.page_number,
            "totalPages": self.total_pages,
            "data": self.data,
        }


@dataclass(frozen=True, slots=True)
class OverflowResult:
    """Addenda and indicator values for one section's overflow configs."""

    addenda: tuple[AddendumPayload, ...] = ()
    indicator_fields: dict[str, str] = field(default_factory=dict)


def page_sizes(total: int, max_in_main: int, per_page: int) -> list[int]:
    """Item counts of each addendum page.

    Example:
        >>> page_sizes(8, 3, 2)
        [2, 2, 1]
    """
    overflow = total - max(max_in_main, 0)
    if overflow <= 0:
        return []
    size = per_page if per_page > 0 else overflow
    pages = math.ceil(overflow / size)
    return [min(size, overflow - i * size) for i in range(pages)]


class OverflowPaginator:
    """Detects overflow and builds addendum payloads."""

    def __init__(
        self,
        strategies: "StrategyRegistry | None" = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else get_logger("overflow")
        )
        self._strategies: "StrategyRegistry" = (
            strategies if strategies is not None else create_strategy_registry(self._logger)
        )

    def collect(self, spec: "OverflowSpec", data: object) -> list[Any] | None:
        """Evaluate the spec's array path; None when it is missing or not a list."""
        if not spec.array_path:
            return None
        try:
            value = self._strategies.get(spec.mapping_type).evaluate(data, spec.array_path)
        except Exception as e:  # noqa: BLE001
            self._logger.warning(
                "Failed to evaluate overflow array path",
                array_path=spec.array_path,
                error=str(e),
            )
            return None
        if not isinstance(value, list):
            return None
        return value

    @staticmethod
    def _overflows(spec: "OverflowSpec", items: list[Any] | None) -> bool:
        return items is not None and len(items) > max(spec.max_items_in_main, 0)

    def has_overflow(self, spec: "OverflowSpec", data: object) -> bool:
        """Whether the collection is longer than ``maxItemsInMain``."""
        return self._overflows(spec, self.collect(spec, data))

    def paginate(
        self,
        section_id: str,
        spec: "OverflowSpec",
        data: object,
    ) -> list[AddendumPayload]:
        """Split the overflowing part of a collection into addendum pages.

        Args:
            section_id: Id of the section the overflow belongs to.
            spec: Overflow configuration.
            data: Request data.

        Returns:
            One payload per page, empty when nothing overflows.
        """
        return self._paginate_items(section_id, spec, data, self.collect(spec, data))

    def _paginate_items(
        self,
        section_id: str,
        spec: "OverflowSpec",
        data: object,
        items: list[Any] | None,
    ) -> list[AddendumPayload]:
        if not spec.array_path or not spec.addendum_template_path:
            self._logger.warning(
                "Overflow config needs arrayPath and addendumTemplatePath",
                section_id=section_id,
            )
            return []

        if items is None:
            return []

        max_in_main = max(spec.max_items_in_main, 0)
        sizes = page_sizes(len(items), max_in_main, spec.items_per_overflow_page)
        if not sizes:
            return []

        self._logger.info(
            "Collection overflows main section",
            section_id=section_id,
            array_path=spec.array_path,
            items=len(items),
            max_items_in_main=max_in_main,
            pages=len(sizes),
        )

        base: dict[str, Any] = dict(data) if isinstance(data, Mapping) else {}
        payloads: list[AddendumPayload] = []
        start = max_in_main
        for page_number, size in enumerate(sizes, start=1):
            chunk = items[start : start + size]
            start += size
            page_data = {
                **base,
                OVERFLOW_ITEMS_KEY: chunk,
                IS_ADDENDUM_KEY: True,
                PAGE_NUMBER_KEY: page_number,
                TOTAL_PAGES_KEY: len(sizes),
            }
            payloads.append(
                AddendumPayload(
                    section_id=f"{section_id}_addendum_{page_number}",
                    template_path=spec.addendum_template_path,
                    page_number=page_number,
                    total_pages=len(sizes),
                    items=tuple(chunk),
                    data=page_data,
                )
            )
        return payloads

    def process(
        self,
        section_id: str,
        specs: "tuple[OverflowSpec, ...]",
        data: object,
    ) -> OverflowResult:
        """Paginate every overflow config of a section.

        Each ``arrayPath`` is evaluated once and feeds both the addenda and
        the ``overflowIndicatorField`` value, which reads ``See Addendum``
        when its collection overflows and is empty otherwise.

        Args:
            section_id: Id of the section the configs belong to.
            specs: The section's overflow configs, in order.
            data: Request data.

        Returns:
            Addenda from every config plus the indicator field values.
        """
        addenda: list[AddendumPayload] = []
        indicators: dict[str, str] = {}
        for spec in specs:
            items = self.collect(spec, data)
            addenda.extend(self._paginate_items(section_id, spec, data, items))
            if spec.overflow_indicator_field:
                indicators[spec.overflow_indicator_field] = (
                    OVERFLOW_INDICATOR_TEXT if self._overflows(spec, items) else ""
                )
        return OverflowResult(addenda=tuple(addenda), indicator_fields=indicators)
