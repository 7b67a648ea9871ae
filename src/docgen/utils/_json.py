# pyright: reportExplicitAny=false, reportAny=false
"""JSON helpers built on orjson."""

from typing import Any

import orjson

_BASE_OPTIONS = orjson.OPT_NON_STR_KEYS


def _default(value: Any) -> Any:
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    return str(value)


def dumps_json(value: Any, *, indent: bool = False) -> str:
    """Serialize a value to a JSON string.

    Dates and datetimes become ISO-8601 strings; anything orjson does not
    know natively falls back to ``str()``.

    Args:
        value: Value to serialize.
        indent: Whether to pretty-print with two-space indentation.

    Returns:
        JSON text.
    """
    options = _BASE_OPTIONS | (orjson.OPT_INDENT_2 if indent else 0)
    return orjson.dumps(value, default=_default, option=options).decode("utf-8")


def to_plain_json(value: Any) -> Any:
    """Convert arbitrary nested data to a plain JSON tree.

    The result contains only dicts, lists, strings, numbers, booleans and
    None, which is what expression engines that walk the tree expect.
    """
    return orjson.loads(orjson.dumps(value, default=_default, option=_BASE_OPTIONS))
