"""JSONATA strategy built on jsonata-python."""

from decimal import Decimal
from typing import ClassVar

import jsonata

from docgen.mapping._strategy import MappingStrategy
from docgen.mapping._values import format_number
from docgen.templates import MappingType
from docgen.utils import dumps_json, to_plain_json


def to_text(value: object) -> str:
    """Render a JSONata result as field text.

    Scalars print as their JSON text without quotes, containers as compact
    JSON, and an undefined result as ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)
    return dumps_json(value)


class JsonataMappingStrategy(MappingStrategy):
    """Maps fields with JSONata expressions.

    Supports everything the JSONata language does, including concatenation
    (``first & ' ' & last``), aggregates (``$sum(items.price)``) and
    conditionals (``age >= 18 ? 'adult' : 'minor'``). The data is converted
    to a plain JSON tree before evaluation so dates and other Python objects
    appear as strings.
    """

    mapping_type: ClassVar[MappingType] = MappingType.JSONATA

    def evaluate(self, data: object, expression: str) -> object:
        """Evaluate a JSONata expression and return its raw result."""
        if not expression or not expression.strip():
            return None
        compiled = jsonata.Jsonata(expression.strip())
        return compiled.evaluate(to_plain_json(data))

    def format_value(self, value: object) -> str:
        """Render a result as field text."""
        return to_text(value)
