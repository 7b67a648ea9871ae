"""Value stringification and date formatting shared by the strategies.

Every strategy ends in a string destined for a form field, so conversion
rules live in one place: None is empty, booleans are lowercase, dates use
``MM/dd/yyyy``, sequences are comma-joined and mappings become JSON.
"""

from collections.abc import Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal

from docgen.utils import dumps_json

DEFAULT_DATE_PATTERN = "MM/dd/yyyy"
LIST_SEPARATOR = ", "

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Letters a date-only pattern may contain
DATE_PATTERN_LETTERS = frozenset("yuYMLdDE")


def is_sequence(value: object) -> bool:
    """Whether value is a list-like collection (not a string or bytes)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def format_number(value: float | Decimal) -> str:
    """Format a number the way a JSON tree prints it.

    Integral floats lose their ``.0`` so ``3.0`` prints as ``3``.
    """
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def stringify(value: object) -> str:
    """Convert an extracted value to the string written into a field.

    Args:
        value: Any value pulled out of request data.

    Returns:
        The field text. None becomes ``""``.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, date):
        # datetime is a date subclass; the time part is dropped
        return format_java_date(value, DEFAULT_DATE_PATTERN)
    if isinstance(value, Mapping):
        return dumps_json(value)
    if is_sequence(value):
        return LIST_SEPARATOR.join(stringify(item) for item in value)  # pyright: ignore[reportUnknownVariableType,reportAttributeAccessIssue]
    return str(value)


def _format_field(value: date, letter: str, width: int) -> str:  # noqa: PLR0911
    if letter in "yu":
        if width == 2:
            return f"{value.year % 100:02d}"
        return str(value.year).zfill(width)
    if letter == "Y":
        iso_year = value.isocalendar().year
        if width == 2:
            return f"{iso_year % 100:02d}"
        return str(iso_year).zfill(width)
    if letter in "ML":
        if width <= 2:
            return str(value.month).zfill(width)
        name = _MONTH_NAMES[value.month - 1]
        if width == 3:
            return name[:3]
        return name if width == 4 else name[0]
    if letter == "d":
        if width > 2:
            msg = f"Too many pattern letters: {letter * width}"
            raise ValueError(msg)
        return str(value.day).zfill(width)
    if letter == "D":
        return str(value.timetuple().tm_yday).zfill(width)
    if letter == "E":
        name = _DAY_NAMES[value.weekday()]
        if width <= 3:
            return name[:3]
        return name if width == 4 else name[0]
    msg = f"Unsupported date pattern letter: {letter}"
    raise ValueError(msg)


def format_java_date(value: date, pattern: str) -> str:
    """Format a date with a ``DateTimeFormatter``-style pattern.

    Supports year (``y``, ``u``, ``Y``), month (``M``, ``L``), day of month
    (``d``), day of year (``D``) and day of week (``E``). Text in single
    quotes is literal and ``''`` is a literal quote. Other ASCII letters are
    rejected because they describe time fields a date does not have.

    Args:
        value: Date to format.
        pattern: Pattern such as ``MM/dd/yyyy`` or ``EEEE, MMMM d``.

    Returns:
        The formatted date.

    Raises:
        ValueError: If the pattern uses an unsupported letter or has an
            unterminated quote.

    Example:
        >>> format_java_date(date(2024, 3, 5), "MMM d, yyyy")
        'Mar 5, 2024'
    """
    if isinstance(value, datetime):
        value = value.date()

    out: list[str] = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "'":
            end = pattern.find("'", i + 1)
            if end == -1:
                msg = f"Unterminated quote in date pattern: {pattern}"
                raise ValueError(msg)
            out.append("'" if end == i + 1 else pattern[i + 1 : end])
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            j = i
            while j < len(pattern) and pattern[j] == ch:
                j += 1
            out.append(_format_field(value, ch, j - i))
            i = j
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def parse_iso_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date.

    Raises:
        ValueError: If the text is not a valid ISO calendar date.
    """
    return date.fromisoformat(value.strip())


def dates_to_iso(value: object) -> object:
    """Replace dates, alone or inside a sequence, with ISO ``YYYY-MM-DD`` text.

    Other values are returned unchanged.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_sequence(value):
        return [dates_to_iso(item) for item in value]  # pyright: ignore[reportUnknownVariableType,reportAttributeAccessIssue]
    return value
