"""Built-in transforms for the CUSTOM mapping strategy.

Each transform is a frozen dataclass with a ``__call__`` taking string
arguments and returning the field text. Arguments arrive already resolved
(literals unquoted, field references extracted), so a transform never sees
request data directly. Missing trailing arguments fall back to defaults and
surplus arguments are ignored.

Expression usage: ``formatCurrency:order.total``
"""

import base64
import random
import re
import string
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING

import pendulum

from docgen.mapping._values import DEFAULT_DATE_PATTERN, format_java_date, parse_iso_date

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

_NON_DIGITS = re.compile(r"[^0-9]")
_WHITESPACE = re.compile(r"\s+")
_RANDOM_ALPHABET = string.ascii_uppercase + string.digits
_US_PHONE_DIGITS = 10


def _to_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class IdentityTransform:
    """Return the value unchanged.

    Expression usage: ``identity:jsonata:first & ' ' & last``
    """

    def __call__(self, value: str = "", *_: str) -> str:
        return value


@dataclass(frozen=True, slots=True)
class FormatPhoneUSTransform:
    """Format ten digits as ``(XXX) XXX-XXXX``.

    Values that do not contain exactly ten digits are returned as-is.
    """

    def __call__(self, phone: str = "", *_: str) -> str:
        if not phone:
            return ""
        digits = _NON_DIGITS.sub("", phone)
        if len(digits) != _US_PHONE_DIGITS:
            return phone
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


@dataclass(frozen=True, slots=True)
class CalculateAgeTransform:
    """Whole years between an ISO date of birth and today (UTC).

    Returns ``"0"`` for an empty or unparseable date.
    """

    def __call__(self, dob: str = "", *_: str) -> str:
        if not dob:
            return "0"
        try:
            birth = parse_iso_date(dob)
        except ValueError:
            return "0"
        today = pendulum.now("UTC").date()
        years = today.year - birth.year
        if (today.month, today.day) < (birth.month, birth.day):
            years -= 1
        return str(years)


@dataclass(frozen=True, slots=True)
class FormatCurrencyTransform:
    """Format a number as US dollars with grouping: ``$1,234.56``.

    Empty input is ``$0.00``; unparseable input is returned as-is. Halves
    round up.
    """

    def __call__(self, amount: str = "", *_: str) -> str:
        if not amount:
            return "$0.00"
        try:
            value = Decimal(repr(float(amount))).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )
        except (ValueError, InvalidOperation):
            return amount
        return f"${value:,.2f}"


@dataclass(frozen=True, slots=True)
class EncryptSSNTransform:
    """Obfuscate a value with reversible base64.

    This is an encoding, not encryption. Do not rely on it for secrecy.
    """

    def __call__(self, ssn: str = "", *_: str) -> str:
        if not ssn:
            return ""
        return base64.b64encode(ssn.encode("utf-8")).decode("ascii")


@dataclass(frozen=True, slots=True)
class GenerateRandomTransform:
    """Random uppercase alphanumeric string, six characters by default."""

    default_length: int = 6

    def __call__(self, length: str = "", *_: str) -> str:
        size = _to_int(length, self.default_length) if length else self.default_length
        return "".join(random.choices(_RANDOM_ALPHABET, k=max(size, 0)))  # noqa: S311


@dataclass(frozen=True, slots=True)
class FormatDateTransform:
    """Reformat an ISO date with a ``MM/dd/yyyy``-style pattern.

    Empty input is ``""``; an unparseable date or pattern returns the input.

    Expression usage: ``formatDate:dob,'MMMM d, yyyy'``
    """

    def __call__(self, value: str = "", pattern: str = "", *_: str) -> str:
        if not value:
            return ""
        try:
            return format_java_date(parse_iso_date(value), pattern or DEFAULT_DATE_PATTERN)
        except ValueError:
            return value


@dataclass(frozen=True, slots=True)
class CalculateDaysBetweenTransform:
    """Absolute number of days between two ISO dates; ``"0"`` on bad input."""

    def __call__(self, first: str = "", second: str = "", *_: str) -> str:
        try:
            delta = parse_iso_date(second) - parse_iso_date(first)
        except ValueError:
            return "0"
        return str(abs(delta.days))


@dataclass(frozen=True, slots=True)
class RemoveSpacesTransform:
    """Remove every whitespace character."""

    def __call__(self, value: str = "", *_: str) -> str:
        return _WHITESPACE.sub("", value)


@dataclass(frozen=True, slots=True)
class CapitalizeTransform:
    """Lowercase, then uppercase the first letter of each word.

    Runs of whitespace collapse to single spaces.
    """

    def __call__(self, value: str = "", *_: str) -> str:
        words = (word for word in _WHITESPACE.split(value.lower()) if word)
        return " ".join(word[0].upper() + word[1:] for word in words)


@dataclass(frozen=True, slots=True)
class TruncateTransform:
    """Cut a value to a maximum length (50 by default) and append ``...``."""

    default_length: int = 50

    def __call__(self, value: str = "", max_length: str = "", *_: str) -> str:
        limit = _to_int(max_length, self.default_length) if max_length else self.default_length
        if len(value) <= limit:
            return value
        if limit < 0:
            msg = f"Truncate length must not be negative: {limit}"
            raise ValueError(msg)
        return value[:limit] + "..."


def java_string_hash(value: str) -> int:
    """Compute Java's ``String.hashCode()`` over UTF-16 code units."""
    result = 0
    encoded = value.encode("utf-16-be")
    for i in range(0, len(encoded), 2):
        unit = (encoded[i] << 8) | encoded[i + 1]
        result = (31 * result + unit) & 0xFFFFFFFF
    return result - (1 << 32) if result & 0x80000000 else result


@dataclass(frozen=True, slots=True)
class HashTransform:
    """Absolute Java-compatible string hash.

    Like ``Math.abs`` on a 32-bit int, the minimum value stays negative.
    """

    def __call__(self, value: str = "", *_: str) -> str:
        hashed = java_string_hash(value)
        if hashed != -(1 << 31):
            hashed = abs(hashed)
        return str(hashed)


# =============================================================================
# Registry
# =============================================================================


@dataclass(slots=True)
class TransformRegistry:
    """Registry of CUSTOM transforms, looked up case-insensitively."""

    _transforms: "dict[str, Callable[..., str]]" = field(default_factory=dict)

    def get(self, name: str) -> "Callable[..., str] | None":
        """Get a transform by name (any case).

        Args:
            name: Transform name such as ``formatPhoneUS``.

        Returns:
            The transform callable, or None if not registered.
        """
        return self._transforms.get(name.strip().lower())

    def register(self, name: str, transform: "Callable[..., str]") -> None:
        """Register or replace a transform.

        Args:
            name: Transform name; stored lowercase.
            transform: Callable taking string arguments and returning a string.
        """
        self._transforms[name.strip().lower()] = transform

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._transforms

    def all_transforms(self) -> "dict[str, Callable[..., str]]":
        """Get all registered transforms.

        Returns:
            A copy of the transform dictionary keyed by lowercase name.
        """
        return dict(self._transforms)


def create_transform_registry(
    extra: "Mapping[str, Callable[..., str]] | None" = None,
) -> TransformRegistry:
    """Create a registry with every built-in transform.

    Args:
        extra: Additional transforms; these replace built-ins of the same name.

    Returns:
        A populated TransformRegistry.
    """
    identity = IdentityTransform()
    days_between = CalculateDaysBetweenTransform()
    registry = TransformRegistry(
        _transforms={
            "identity": identity,
            "passthrough": identity,
            "formatphoneus": FormatPhoneUSTransform(),
            "calculateage": CalculateAgeTransform(),
            "formatcurrency": FormatCurrencyTransform(),
            "encryptssn": EncryptSSNTransform(),
            "generaterandom": GenerateRandomTransform(),
            "formatdate": FormatDateTransform(),
            "calculatedays": days_between,
            "calculatedaysbetween": days_between,
            "removespaces": RemoveSpacesTransform(),
            "capitalize": CapitalizeTransform(),
            "truncate": TruncateTransform(),
            "hash": HashTransform(),
        }
    )
    for name, transform in (extra or {}).items():
        registry.register(name, transform)
    return registry
