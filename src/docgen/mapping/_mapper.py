"""Section field mapping across mapping groups."""

from typing import TYPE_CHECKING

from docgen.mapping._registry import create_strategy_registry
from docgen.mapping._repeating import expand_repeating_group
from docgen.utils import get_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from docgen.mapping._registry import StrategyRegistry
    from docgen.templates import MappingGroup, SectionSpec


class SectionMapper:
    """Produces the flat field map for a section.

    Sections with mapping groups are mapped group by group in declaration
    order; a later group's value for a field replaces an earlier one.
    Sections without groups map ``fieldMappings`` with the section's own
    mapping type.
    """

    def __init__(
        self,
        strategies: "StrategyRegistry | None" = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Initialize the mapper.

        Args:
            strategies: Strategy registry. Defaults to the built-ins.
            logger: Logger for mapping warnings.
        """
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else get_logger("mapping")
        )
        self._strategies: "StrategyRegistry" = (
            strategies if strategies is not None else create_strategy_registry(self._logger)
        )

    @property
    def strategies(self) -> "StrategyRegistry":
        """The strategy registry used for dispatch."""
        return self._strategies

    def map_group(self, group: "MappingGroup", data: object) -> dict[str, str]:
        """Map one group: repeating, base-path narrowed, or flat."""
        strategy = self._strategies.get(group.mapping_type)
        if group.repeating_group is not None:
            return expand_repeating_group(strategy, data, group, self._logger)
        if group.base_path:
            return strategy.map_with_base_path(data, group.base_path, group.fields)
        return strategy.map_fields(data, group.fields)

    def map_section(self, section: "SectionSpec", data: object) -> dict[str, str]:
        """Map every field of a section against request data.

        Args:
            section: Section to map.
            data: Request data.

        Returns:
            Field name to string value.
        """
        if section.has_mapping_groups:
            result: dict[str, str] = {}
            for group in section.field_mapping_groups:
                result.update(self.map_group(group, data))
            return result

        strategy = self._strategies.get(section.mapping_type)
        return strategy.map_fields(data, section.field_mappings)
