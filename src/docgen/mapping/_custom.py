"""CUSTOM strategy: named transforms over extracted values.

Grammar::

    expression := reference | prefix ":" path | transform ":" arguments
    arguments  := argument ("," argument)*
    argument   := 'literal' | "literal" | digits | date-pattern | reference
    reference  := [prefix ":"] path
    prefix     := "direct" | "jsonpath" | "jsonata"

A reference without a prefix uses JSONPATH when it contains ``[`` and
DIRECT otherwise. Arguments are split on commas outside quotes, brackets and
parentheses, so ``formatDate:dob,'MMMM d, yyyy'`` and
``identity:jsonata:$join(tags, ', ')`` both work.
"""

import re
from typing import TYPE_CHECKING, ClassVar

from docgen.mapping._direct import DirectMappingStrategy
from docgen.mapping._jsonata import JsonataMappingStrategy
from docgen.mapping._jsonpath import JsonPathMappingStrategy
from docgen.mapping._strategy import MappingStrategy
from docgen.mapping._transforms import create_transform_registry
from docgen.mapping._values import dates_to_iso
from docgen.templates import MappingType

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from docgen.mapping._transforms import TransformRegistry

_PREFIXES: dict[str, MappingType] = {
    "direct:": MappingType.DIRECT,
    "jsonpath:": MappingType.JSONPATH,
    "jsonata:": MappingType.JSONATA,
}

_QUOTES = "'\""
_OPENERS = {"(": ")", "[": "]", "{": "}"}

# Letters DateTimeFormatter assigns meaning to
_PATTERN_LETTERS = frozenset("GuyDMLdQqYwWEecFaBhKkHmsSAnNVvzOXxZp")
_PATTERN_PUNCTUATION = frozenset(" ,:/-'")
_REPEATED_LETTER = re.compile(r"([A-Za-z])\1")


def split_arguments(text: str) -> list[str]:
    """Split an argument list on top-level commas.

    Commas inside quotes, brackets, braces or parentheses do not split.

    Example:
        >>> split_arguments("items[?(@.a in ['x','y'])].b, 'a, b', 3")
        ["items[?(@.a in ['x','y'])].b", "'a, b'", '3']
    """
    if not text.strip():
        return []

    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    closers: list[str] = []

    for ch in text:
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            closers.append(_OPENERS[ch])
        elif closers and ch == closers[-1]:
            closers.pop()
        elif ch == "," and not closers:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    parts.append("".join(current).strip())
    return parts


def _split_prefix(reference: str) -> tuple[MappingType | None, str]:
    for prefix, mapping_type in _PREFIXES.items():
        if reference.startswith(prefix):
            return mapping_type, reference[len(prefix) :]
    return None, reference


def _is_date_pattern(token: str) -> bool:
    if "/" in token or "-" in token:
        return True
    letters_ok = all(
        ch in _PATTERN_LETTERS or ch in _PATTERN_PUNCTUATION for ch in token
    )
    return letters_ok and _REPEATED_LETTER.search(token) is not None


def is_literal(argument: str) -> bool:
    """Whether an argument is a literal rather than a field reference.

    Literals are quoted text, bare integers, and date patterns: tokens with
    no ``.``, ``[`` or strategy prefix that contain ``/`` or ``-``, or that
    consist only of pattern letters and punctuation with a repeated letter
    (``yyyy``, ``MMMM d``).
    """
    if not argument:
        return True
    if argument[0] in _QUOTES:
        return True
    if argument.isascii() and argument.isdigit():
        return True
    prefix, _ = _split_prefix(argument)
    if prefix is not None or "." in argument or "[" in argument:
        return False
    return _is_date_pattern(argument)


def unquote(argument: str) -> str:
    """Strip one leading and one trailing quote character, if present."""
    if argument[:1] in _QUOTES:
        argument = argument[1:]
    if argument[-1:] in _QUOTES:
        argument = argument[:-1]
    return argument


class CustomMappingStrategy(MappingStrategy):
    """Applies named transforms such as ``formatPhoneUS:contact.phone``.

    Field extraction is delegated to the DIRECT, JSONPATH and JSONATA
    strategies; path evaluation (conditions, base paths, overflow arrays)
    uses JSONPATH.
    """

    mapping_type: ClassVar[MappingType] = MappingType.CUSTOM

    def __init__(
        self,
        logger: "FilteringBoundLogger | None" = None,
        *,
        transforms: "TransformRegistry | None" = None,
        direct: DirectMappingStrategy | None = None,
        jsonpath: JsonPathMappingStrategy | None = None,
        jsonata: JsonataMappingStrategy | None = None,
    ) -> None:
        """Initialize with the delegate strategies and transform registry.

        Args:
            logger: Logger for mapping warnings.
            transforms: Available transforms. Defaults to the built-ins.
            direct: DIRECT delegate.
            jsonpath: JSONPATH delegate.
            jsonata: JSONATA delegate.
        """
        super().__init__(logger)
        self._transforms: "TransformRegistry" = (
            transforms if transforms is not None else create_transform_registry()
        )
        self._delegates: dict[MappingType, MappingStrategy] = {
            MappingType.DIRECT: direct or DirectMappingStrategy(self.logger),
            MappingType.JSONPATH: jsonpath or JsonPathMappingStrategy(self.logger),
            MappingType.JSONATA: jsonata or JsonataMappingStrategy(self.logger),
        }

    @property
    def transforms(self) -> "TransformRegistry":
        """The transform registry, open for registering more transforms."""
        return self._transforms

    def evaluate(self, data: object, expression: str) -> object:
        """Evaluate a path with JSONPATH semantics."""
        return self._delegates[MappingType.JSONPATH].evaluate(data, expression)

    def _delegate_for(self, reference: str) -> tuple[MappingStrategy, str]:
        mapping_type, expression = _split_prefix(reference)
        if mapping_type is None:
            mapping_type = MappingType.JSONPATH if "[" in reference else MappingType.DIRECT
        return self._delegates[mapping_type], expression

    def _extract_reference(self, data: object, reference: str) -> str:
        delegate, expression = self._delegate_for(reference)
        return delegate.map_fields(data, {"value": expression})["value"]

    def resolve_argument(self, data: object, argument: str) -> str:
        """Resolve one argument to text: a literal or an extracted value.

        Extracted dates are passed as ISO ``YYYY-MM-DD`` text, the form the
        date transforms parse. A failing reference resolves to ``""``.
        """
        argument = argument.strip()
        if is_literal(argument):
            return unquote(argument)

        delegate, expression = self._delegate_for(argument)
        try:
            value = delegate.evaluate(data, expression)
        except Exception as e:  # noqa: BLE001
            self.logger.warning(
                "Failed to resolve transform argument",
                argument=argument,
                error=str(e),
            )
            return ""
        return delegate.format_value(dates_to_iso(value))

    def extract(self, data: object, expression: str) -> str:
        """Apply a transform expression and return the field text.

        Raises:
            ValueError: If the expression names an unregistered transform.
        """
        expression = expression.strip()
        if ":" not in expression:
            return self._extract_reference(data, expression)

        prefix, _ = _split_prefix(expression)
        if prefix is not None:
            return self._extract_reference(data, expression)

        name, _, arguments = expression.partition(":")
        transform = self._transforms.get(name)
        if transform is None:
            msg = f"Unknown custom transformation: {name.strip()}"
            raise ValueError(msg)

        resolved = [self.resolve_argument(data, arg) for arg in split_arguments(arguments)]
        return transform(*resolved)
