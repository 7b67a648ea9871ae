"""DIRECT strategy: dot-delimited navigation."""

from collections.abc import Mapping
from typing import ClassVar

from docgen.mapping._strategy import MappingStrategy
from docgen.mapping._values import is_sequence
from docgen.templates import MappingType


def get_nested_value(data: object, path: str) -> object:
    """Walk a dotted path through mappings and sequences.

    A purely numeric segment indexes a sequence. Anything that cannot be
    navigated yields None.

    Example:
        >>> get_nested_value({"items": [{"sku": "A1"}]}, "items.0.sku")
        'A1'
    """
    current = data
    for part in path.strip().split("."):
        if current is None:
            return None
        if isinstance(current, Mapping):
            current = current.get(part)  # pyright: ignore[reportUnknownMemberType]
        elif is_sequence(current) and part.isascii() and part.isdigit():
            index = int(part)
            current = current[index] if index < len(current) else None  # pyright: ignore[reportArgumentType,reportIndexIssue]
        else:
            return None
    return current


class DirectMappingStrategy(MappingStrategy):
    """Maps fields with plain dotted paths such as ``address.street``."""

    mapping_type: ClassVar[MappingType] = MappingType.DIRECT

    def evaluate(self, data: object, expression: str) -> object:
        """Return the value at the dotted path, or None."""
        return get_nested_value(data, expression)
