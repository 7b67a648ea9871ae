"""``${dotted.path}`` placeholder substitution.

Placeholders appear in template ids (``invoice-${region}``), base and
fragment references, and a handful of string fields. Unlike mapping
expressions they never degrade: a placeholder without a value is a fatal
UNRESOLVED_PLACEHOLDER error because it means the wrong document would be
produced.
"""

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING

from docgen.exceptions import UnresolvedPlaceholderError

if TYPE_CHECKING:
    from docgen.templates._models import HeaderFooterConfig, ResolvedTemplate

# Pattern for ${anything-but-a-closing-brace}
_PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")

_MISSING = object()


def _lookup(variables: Mapping[str, object], path: str) -> object:
    current: object = variables
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return _MISSING
        current = current[part]  # pyright: ignore[reportUnknownVariableType]
    return current


def _format(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def has_placeholders(text: str | None) -> bool:
    """Check whether text contains at least one ``${...}`` placeholder."""
    return bool(text) and _PLACEHOLDER_PATTERN.search(text) is not None  # pyright: ignore[reportArgumentType]


def resolve_placeholders(
    text: str,
    variables: Mapping[str, object] | None,
    *,
    template_id: str | None = None,
) -> str:
    """Replace every ``${dotted.path}`` in text with its value.

    The dotted path walks nested mappings in ``variables``.

    Args:
        text: Text containing placeholders.
        variables: Values available for substitution.
        template_id: Template being resolved, for error context.

    Returns:
        The text with all placeholders replaced.

    Raises:
        UnresolvedPlaceholderError: If a path is missing or its value is None.
    """
    if "${" not in text:
        return text

    values: Mapping[str, object] = variables or {}

    def replacer(match: re.Match[str]) -> str:
        path = match.group(1).strip()
        value = _lookup(values, path)
        if value is _MISSING or value is None:
            msg = f"Placeholder '${{{path}}}' in '{text}' has no value"
            raise UnresolvedPlaceholderError(
                msg, placeholder=path, template_id=template_id
            )
        return _format(value)

    return _PLACEHOLDER_PATTERN.sub(replacer, text)


def _resolve_optional(
    text: str | None,
    variables: Mapping[str, object],
    template_id: str,
) -> str | None:
    if text is None:
        return None
    return resolve_placeholders(text, variables, template_id=template_id)


def _interpolate_header_footer(
    config: "HeaderFooterConfig",
    variables: Mapping[str, object],
    template_id: str,
) -> "HeaderFooterConfig":
    headers = tuple(
        header.model_copy(
            update={"content": _resolve_optional(header.content, variables, template_id)}
        )
        for header in config.headers
    )
    footers = tuple(
        footer.model_copy(
            update={"content": _resolve_optional(footer.content, variables, template_id)}
        )
        for footer in config.footers
    )
    return config.model_copy(update={"headers": headers, "footers": footers})


def interpolate_template_fields(
    resolved: "ResolvedTemplate",
    variables: Mapping[str, object] | None,
) -> "ResolvedTemplate":
    """Resolve placeholders inside a resolved template's string fields.

    Covers each section's ``templatePath`` and ``condition`` and the
    ``content`` of every header and footer. The cached template is never
    modified; a new instance is returned.

    Args:
        resolved: Template to interpolate.
        variables: Values available for substitution.

    Returns:
        A new ResolvedTemplate, or ``resolved`` itself when nothing changes.

    Raises:
        UnresolvedPlaceholderError: If any placeholder has no value.
    """
    values: Mapping[str, object] = variables or {}
    template_id = resolved.template_id

    sections = tuple(
        section.model_copy(
            update={
                "template_path": _resolve_optional(
                    section.template_path, values, template_id
                ),
                "condition": _resolve_optional(section.condition, values, template_id),
            }
        )
        if has_placeholders(section.template_path) or has_placeholders(section.condition)
        else section
        for section in resolved.sections
    )

    header_footer = resolved.header_footer_config
    if header_footer is not None:
        header_footer = _interpolate_header_footer(header_footer, values, template_id)

    if sections == resolved.sections and header_footer == resolved.header_footer_config:
        return resolved
    return resolved.model_copy(
        update={"sections": sections, "header_footer_config": header_footer}
    )
