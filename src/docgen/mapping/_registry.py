"""Strategy dispatch by MappingType."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from docgen.mapping._custom import CustomMappingStrategy
from docgen.mapping._direct import DirectMappingStrategy
from docgen.mapping._jsonata import JsonataMappingStrategy
from docgen.mapping._jsonpath import JsonPathMappingStrategy
from docgen.mapping._transforms import create_transform_registry
from docgen.templates import MappingType

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from structlog.typing import FilteringBoundLogger

    from docgen.mapping._strategy import MappingStrategy


@dataclass(frozen=True, slots=True)
class StrategyRegistry:
    """Closed registry holding exactly one strategy per MappingType."""

    _strategies: "dict[MappingType, MappingStrategy]" = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = set(MappingType) - set(self._strategies)
        if missing:
            names = ", ".join(sorted(str(m) for m in missing))
            msg = f"Strategy registry is missing mapping types: {names}"
            raise ValueError(msg)
        for mapping_type, strategy in self._strategies.items():
            if not strategy.supports(mapping_type):
                msg = f"{type(strategy).__name__} does not support {mapping_type}"
                raise ValueError(msg)

    def get(self, mapping_type: MappingType) -> "MappingStrategy":
        """Get the strategy for a mapping type.

        Args:
            mapping_type: The mapping type to dispatch on.

        Returns:
            The registered strategy.
        """
        return self._strategies[mapping_type]

    def all_strategies(self) -> "dict[MappingType, MappingStrategy]":
        """Get all registered strategies.

        Returns:
            A copy of the strategy dictionary.
        """
        return dict(self._strategies)


def create_strategy_registry(
    logger: "FilteringBoundLogger | None" = None,
    *,
    transforms: "Mapping[str, Callable[..., str]] | None" = None,
) -> StrategyRegistry:
    """Create a registry with the four built-in strategies.

    Args:
        logger: Logger shared by every strategy.
        transforms: Extra CUSTOM transforms registered by name.

    Returns:
        A StrategyRegistry covering every MappingType.
    """
    direct = DirectMappingStrategy(logger)
    jsonpath = JsonPathMappingStrategy(logger)
    jsonata = JsonataMappingStrategy(logger)
    custom = CustomMappingStrategy(
        logger,
        transforms=create_transform_registry(transforms),
        direct=direct,
        jsonpath=jsonpath,
        jsonata=jsonata,
    )
    return StrategyRegistry(
        _strategies={
            MappingType.DIRECT: direct,
            MappingType.JSONPATH: jsonpath,
            MappingType.JSONATA: jsonata,
            MappingType.CUSTOM: custom,
        }
    )
