"""Render/skip decisions for conditional sections."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

from docgen.mapping import create_strategy_registry, is_sequence, stringify
from docgen.utils import get_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from docgen.mapping import StrategyRegistry
    from docgen.templates import MappingType, SectionSpec


def is_truthy(value: object) -> bool:
    """Interpret a condition result.

    Booleans are used as-is. None is false. A collection is true when it has
    elements, whatever they hold. Anything else is true unless its text is
    empty or ``false`` in any case.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, Mapping) or is_sequence(value):
        return len(value) > 0  # pyright: ignore[reportArgumentType]
    text = stringify(value)
    return text != "" and text.lower() != "false"


class ConditionEvaluator:
    """Decides whether a section renders for the request data.

    The condition is evaluated with the strategy named by the section's
    ``mappingType``. A failing condition skips the section; it is never an
    error.
    """

    def __init__(
        self,
        strategies: "StrategyRegistry | None" = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else get_logger("conditions")
        )
        self._strategies: "StrategyRegistry" = (
            strategies if strategies is not None else create_strategy_registry(self._logger)
        )

    def evaluate(
        self,
        condition: str | None,
        data: object,
        mapping_type: "MappingType",
    ) -> bool:
        """Evaluate one condition expression.

        Args:
            condition: Expression, or None/blank for "always render".
            data: Request data.
            mapping_type: Strategy used to evaluate the expression.

        Returns:
            Whether the guarded section should render.
        """
        if condition is None or not condition.strip():
            return True
        try:
            result = self._strategies.get(mapping_type).evaluate(data, condition)
        except Exception as e:  # noqa: BLE001
            self._logger.warning(
                "Condition evaluation failed, skipping section",
                condition=condition,
                mapping_type=str(mapping_type),
                error=str(e),
            )
            return False
        return is_truthy(result)

    def should_render(self, section: "SectionSpec", data: object) -> bool:
        """Whether a section's condition allows it to render."""
        render = self.evaluate(section.condition, data, section.mapping_type)
        if not render:
            self._logger.debug(
                "Skipping section",
                section_id=section.section_id,
                condition=section.condition,
            )
        return render
