"""JSONPATH strategy built on jsonpath-ng.

Expressions may omit the ``$`` root and may use the simplified filter
``[field='value']``, which is rewritten to ``[?(@.field=='value')]`` before
compilation. Definite paths (no filter, wildcard, slice, union or deep
scan) return a single value; indefinite paths return a list of matches.
"""

import re
from functools import lru_cache
from typing import TYPE_CHECKING, ClassVar

from jsonpath_ng.ext import parse

from docgen.mapping._strategy import MappingStrategy
from docgen.mapping._values import stringify
from docgen.templates import MappingType

if TYPE_CHECKING:
    from jsonpath_ng import JSONPath

# [type='PRIMARY'] or [type="PRIMARY"]
_SIMPLE_FILTER = re.compile(r"""\[([a-zA-Z_][a-zA-Z0-9_]*)=(['"])([^'"]+)\2\]""")

# Deep scan, filter, wildcard, or a bracket holding a slice or union
_INDEFINITE = re.compile(r"\.\.|\[\s*\?|\*|\[[^\]]*[:,][^\]]*\]")

_EQUALITY_OPERATOR = " == "
_QUOTES = "'\""
_OPENERS = {"(": ")", "[": "]", "{": "}"}


def normalize_path(expression: str) -> str:
    """Rewrite an expression into canonical JSONPath.

    Example:
        >>> normalize_path("applicants[type='PRIMARY'].name")
        "$.applicants[?(@.type=='PRIMARY')].name"
    """
    expression = expression.strip()
    if expression == "$" or expression.startswith(("$.", "$[")):
        normalized = expression
    elif expression.startswith("["):
        normalized = f"${expression}"
    else:
        normalized = f"$.{expression}"
    return _SIMPLE_FILTER.sub(r"[?(@.\1=='\3')]", normalized)


def is_definite(path: str) -> bool:
    """Whether a normalized path can match at most one node."""
    return _INDEFINITE.search(path) is None


@lru_cache(maxsize=1024)
def compile_path(path: str) -> "JSONPath":
    """Compile a normalized path, memoized across calls."""
    return parse(path)


def split_comparison(expression: str) -> tuple[str, str] | None:
    """Split ``left == right`` on an operator outside brackets and quotes.

    Filters such as ``[?(@.type == 'PRIMARY')]`` keep their own operator.

    Example:
        >>> split_comparison("$.applicants[?(@.type == 'A')].id == '7'")
        ("$.applicants[?(@.type == 'A')].id", "'7'")
        >>> split_comparison("$.applicants[?(@.type == 'A')].id") is None
        True
    """
    positions: list[int] = []
    quote: str | None = None
    closers: list[str] = []
    for index, ch in enumerate(expression):
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            closers.append(_OPENERS[ch])
        elif closers and ch == closers[-1]:
            _ = closers.pop()
        elif not closers and expression.startswith(_EQUALITY_OPERATOR, index):
            positions.append(index)

    if len(positions) != 1:
        return None
    left = expression[: positions[0]]
    right = expression[positions[0] + len(_EQUALITY_OPERATOR) :]
    return left.strip(), right.strip()


def _strip_quotes(literal: str) -> str:
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "'\"":  # noqa: PLR2004
        return literal[1:-1]
    return literal


class JsonPathMappingStrategy(MappingStrategy):
    """Maps fields with JSONPath expressions such as ``$.items[*].sku``."""

    mapping_type: ClassVar[MappingType] = MappingType.JSONPATH

    def query(self, data: object, expression: str) -> object:
        """Run a JSONPath query without the equality shorthand.

        Returns:
            The single value for a definite path (None when absent), or the
            list of matched values for an indefinite path.
        """
        path = normalize_path(expression)
        matches = compile_path(path).find(data)
        if is_definite(path):
            return matches[0].value if matches else None
        return [match.value for match in matches]

    def evaluate(self, data: object, expression: str) -> object:
        """Evaluate a JSONPath query or a ``left == right`` comparison.

        The comparison form stringifies the left-hand query result and
        compares it to the right-hand literal with surrounding quotes removed.
        """
        if not expression:
            return None
        comparison = split_comparison(expression)
        if comparison is not None:
            left, right = comparison
            actual = self.query(data, left)
            return actual is not None and stringify(actual) == _strip_quotes(right)
        return self.query(data, expression)
