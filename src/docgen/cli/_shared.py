# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Output formatters (JSON, YAML)
- Parsing of ``--var`` assignments and data files
"""

from enum import IntEnum, StrEnum
from typing import TYPE_CHECKING, Any, Never

import orjson
import yaml

from docgen.config import parse_env_value, set_nested_key
from docgen.exceptions import TemplateError, TemplateNotFoundError
from docgen.utils import dumps_json, to_plain_json

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rich.console import Console

__all__ = [
    "ExitCode",
    "OutputFormat",
    "exit_code_for",
    "exit_with_error",
    "format_json",
    "format_output",
    "format_yaml",
    "get_error_console",
    "load_data_file",
    "parse_variables",
]


class ExitCode(IntEnum):
    """Standard exit codes for docgen CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    JSON = "json"
    YAML = "yaml"


def format_json(data: object, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Value to format.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    return dumps_json(data, indent=indent)


def format_yaml(data: object) -> str:
    """Format data as YAML.

    Args:
        data: Value to format; converted to plain JSON types first.

    Returns:
        YAML-formatted string representation.
    """
    return yaml.safe_dump(
        to_plain_json(data), default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def format_output(data: object, output_format: OutputFormat) -> str:
    match output_format:
        case OutputFormat.YAML:
            return format_yaml(data)
        case _:
            return format_json(data)


def get_error_console() -> "Console":
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}", markup=True, highlight=False)
    raise SystemExit(code)


def exit_code_for(error: TemplateError) -> ExitCode:
    """Map a template error to its exit code."""
    if isinstance(error, TemplateNotFoundError):
        return ExitCode.NOT_FOUND
    return ExitCode.VALIDATION_ERROR


def parse_variables(assignments: "Iterable[str] | None") -> dict[str, Any]:
    """Parse ``key=value`` assignments into a nested variables mapping.

    Dotted keys create nested mappings and values get the same type
    inference as environment variables.

    Example:
        >>> parse_variables(["tenant.id=acme", "year=2026"])
        {'tenant': {'id': 'acme'}, 'year': 2026}

    Raises:
        ValueError: If an assignment has no ``=`` or an empty key.
    """
    variables: dict[str, Any] = {}
    for assignment in assignments or ():
        key, sep, value = assignment.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"Invalid variable '{assignment}', expected key=value"
            raise ValueError(msg)
        set_nested_key(variables, key, parse_env_value(value))
    return variables


def load_data_file(path: "Path") -> Any:
    """Read request data from a JSON or YAML file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content cannot be parsed.
    """
    content = path.read_bytes()
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise ValueError(msg) from e
    try:
        return orjson.loads(content)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise ValueError(msg) from e
