"""Command-line interface for docgen."""

from ._app import create_app, main
from ._context import CLIContext
from ._shared import ExitCode, OutputFormat, parse_variables

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "create_app",
    "main",
    "parse_variables",
]
