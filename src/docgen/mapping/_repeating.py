"""Repeating-group expansion: one rule set, N indexed field names."""

from typing import TYPE_CHECKING

from docgen.mapping._values import is_sequence
from docgen.templates import IndexPosition

if TYPE_CHECKING:
    from collections.abc import Sequence

    from structlog.typing import FilteringBoundLogger

    from docgen.mapping._strategy import MappingStrategy
    from docgen.templates import MappingGroup, RepeatingGroupSpec


def build_field_name(spec: "RepeatingGroupSpec", display_index: int, name: str) -> str:
    """Build the indexed field name for one item.

    Missing prefix, suffix or separator contribute nothing.

    Example:
        >>> spec = RepeatingGroupSpec(prefix="child", index_separator=".",
        ...                           index_position=IndexPosition.AFTER_FIELD)
        >>> build_field_name(spec, 2, "FirstName")
        'childFirstName.2'
    """
    prefix = spec.prefix or ""
    suffix = spec.suffix or ""
    separator = spec.index_separator or ""
    if spec.index_position is IndexPosition.AFTER_FIELD:
        return f"{prefix}{name}{separator}{display_index}{suffix}"
    return f"{prefix}{display_index}{separator}{name}{suffix}"


def expand_repeating_group(
    strategy: "MappingStrategy",
    data: object,
    group: "MappingGroup",
    logger: "FilteringBoundLogger",
) -> dict[str, str]:
    """Map a repeating group against every item of its base path.

    The base path is evaluated once and must produce a list. Each item up
    to ``maxItems`` is mapped with the group's strategy; the item's display
    index is ``startIndex + position``.

    Args:
        strategy: Strategy for the group's mapping type.
        data: Request data.
        group: Mapping group with ``basePath`` and ``repeatingGroup`` set.
        logger: Logger for configuration warnings.

    Returns:
        Indexed field name to value. Empty when the group is misconfigured
        or the base path does not produce a list.
    """
    spec = group.repeating_group
    if spec is None:
        return {}
    if not group.base_path:
        logger.warning(
            "Repeating group requires a basePath",
            prefix=spec.prefix,
            fields=list(spec.fields),
        )
        return {}

    try:
        items = strategy.evaluate(data, group.base_path)
    except Exception as e:  # noqa: BLE001
        logger.warning(
            "Failed to evaluate repeating group basePath",
            base_path=group.base_path,
            error=str(e),
        )
        return {}

    if not is_sequence(items):
        logger.warning(
            "Repeating group basePath did not produce a list",
            base_path=group.base_path,
            result_type=type(items).__name__,
        )
        return {}

    sequence: "Sequence[object]" = items  # pyright: ignore[reportAssignmentType]
    count = len(sequence)
    if spec.max_items is not None:
        count = max(0, min(count, spec.max_items))

    result: dict[str, str] = {}
    for position, item in enumerate(sequence[:count]):
        display_index = spec.start_index + position
        values = strategy.map_fields(item, spec.fields)
        for name, value in values.items():
            result[build_field_name(spec, display_index, name)] = value
    return result
