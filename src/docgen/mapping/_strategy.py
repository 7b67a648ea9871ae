"""Base class for field-mapping strategies.

A strategy knows how to evaluate one kind of expression against request
data. Subclasses implement ``evaluate`` (raw value, may raise); the base
class turns that into the total field-mapping contract: every requested
field gets a string and a failing expression becomes ``""`` plus a warning.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from docgen.mapping._values import is_sequence, stringify
from docgen.utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger

    from docgen.templates import MappingType


class MappingStrategy(ABC):
    """Evaluates expressions of one mapping type against nested data.

    Attributes:
        mapping_type: The MappingType this strategy handles.
    """

    mapping_type: "ClassVar[MappingType]"

    def __init__(self, logger: "FilteringBoundLogger | None" = None) -> None:
        """Initialize the strategy.

        Args:
            logger: Logger for mapping warnings. Defaults to the shared logger.
        """
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else get_logger("mapping")
        )

    @property
    def logger(self) -> "FilteringBoundLogger":
        """Logger used for mapping diagnostics."""
        return self._logger

    def supports(self, mapping_type: "MappingType") -> bool:
        """Whether this strategy handles the given mapping type."""
        return mapping_type == self.mapping_type

    @abstractmethod
    def evaluate(self, data: object, expression: str) -> object:
        """Evaluate an expression and return the raw result.

        Args:
            data: Context to evaluate against (mapping, list or scalar).
            expression: Expression in this strategy's language.

        Returns:
            The raw value, or None when the expression matches nothing.

        Raises:
            Exception: Any evaluation error. Callers decide how to degrade.
        """

    def format_value(self, value: object) -> str:
        """Convert a raw evaluation result to field text."""
        return stringify(value)

    def extract(self, data: object, expression: str) -> str:
        """Evaluate an expression and stringify the result.

        Raises:
            Exception: Any evaluation error.
        """
        return self.format_value(self.evaluate(data, expression))

    def map_fields(
        self,
        data: object,
        fields: "Mapping[str, str]",
    ) -> dict[str, str]:
        """Map every field expression against data.

        Never raises: a field whose expression fails maps to ``""``.

        Args:
            data: Context to evaluate against.
            fields: Field name to expression.

        Returns:
            Field name to string value, in the order of ``fields``.
        """
        result: dict[str, str] = {}
        for field_name, expression in fields.items():
            try:
                result[field_name] = self.extract(data, expression)
            except Exception as e:  # noqa: BLE001
                self._logger.warning(
                    "Failed to map field",
                    strategy=str(self.mapping_type),
                    field=field_name,
                    expression=expression,
                    error=str(e),
                )
                result[field_name] = ""
        return result

    def resolve_context(self, data: object, base_path: str) -> object:
        """Evaluate a base path once and narrow it into a mapping context.

        Empty results become None. A one-element list is unwrapped to its
        element; longer lists are kept so fields can index into them.

        Args:
            data: Request data.
            base_path: Expression selecting the context.

        Returns:
            The narrowed context, or None when nothing matched.

        Raises:
            Exception: Any evaluation error.
        """
        context = self.evaluate(data, base_path)
        if is_sequence(context):
            if len(context) == 0:  # pyright: ignore[reportArgumentType]
                return None
            if len(context) == 1:  # pyright: ignore[reportArgumentType]
                return context[0]  # pyright: ignore[reportIndexIssue]
        return context

    def map_with_base_path(
        self,
        data: object,
        base_path: str,
        fields: "Mapping[str, str]",
    ) -> dict[str, str]:
        """Map fields relative to a base path evaluated exactly once.

        Never raises: when the base path fails or matches nothing every
        field maps to ``""``.

        Args:
            data: Request data.
            base_path: Expression selecting the shared context.
            fields: Field name to expression relative to that context.

        Returns:
            Field name to string value.
        """
        try:
            context = self.resolve_context(data, base_path)
        except Exception as e:  # noqa: BLE001
            self._logger.warning(
                "Failed to evaluate base path",
                strategy=str(self.mapping_type),
                base_path=base_path,
                error=str(e),
            )
            context = None

        if context is None:
            self._logger.warning(
                "Base path matched nothing, all fields will be empty",
                strategy=str(self.mapping_type),
                base_path=base_path,
            )
            return dict.fromkeys(fields, "")

        return self.map_fields(context, fields)
