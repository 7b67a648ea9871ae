"""Named view-model builders for markup sections."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from docgen.utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from structlog.typing import FilteringBoundLogger


@dataclass(slots=True)
class ViewModelRegistry:
    """Registry of view-model builders keyed by ``viewModelType``.

    A builder takes the raw request data and returns whatever the rendering
    layer expects for the section.

    Example:
        >>> registry = ViewModelRegistry()
        >>> registry.register("Invoice", lambda data: {"total": data["amount"]})
        >>> registry.build("Invoice", {"amount": 5})
        {'total': 5}
    """

    _builders: "dict[str, Callable[[object], object]]" = field(default_factory=dict)
    logger: "FilteringBoundLogger" = field(default_factory=lambda: get_logger("view_models"))

    def register(self, name: str, builder: "Callable[[object], object]") -> None:
        """Register or replace the builder for a view-model name."""
        self._builders[name] = builder

    def get(self, name: str) -> "Callable[[object], object] | None":
        """Get a builder by name, or None if not registered."""
        return self._builders.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._builders

    def names(self) -> list[str]:
        """Registered view-model names, sorted."""
        return sorted(self._builders)

    def build(self, name: str | None, data: object) -> object:
        """Build the payload for a section.

        Args:
            name: The section's ``viewModelType``; None or blank means raw data.
            data: Raw request data.

        Returns:
            The built view model, or ``data`` unchanged when no builder
            applies.
        """
        if not name:
            return data
        builder = self._builders.get(name)
        if builder is None:
            self.logger.warning("No view model builder registered, using raw data", name=name)
            return data
        self.logger.debug("Building view model", name=name)
        return builder(data)


def create_view_model_registry(
    builders: "Mapping[str, Callable[[object], object]] | None" = None,
    logger: "FilteringBoundLogger | None" = None,
) -> ViewModelRegistry:
    """Create a registry holding the given builders."""
    registry = (
        ViewModelRegistry(logger=logger) if logger is not None else ViewModelRegistry()
    )
    for name, builder in (builders or {}).items():
        registry.register(name, builder)
    return registry
