# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: TC003, A002  # Path needed at runtime for cyclopts parameter parsing
"""Template commands: resolve and compose."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from docgen.composition import DocumentComposer
from docgen.exceptions import TemplateError
from docgen.templates import TemplateResolver, create_resolver

from ._context import CLIContext
from ._shared import (
    ExitCode,
    OutputFormat,
    exit_code_for,
    exit_with_error,
    format_output,
    load_data_file,
    parse_variables,
)

if TYPE_CHECKING:
    from cyclopts import App

VarsOption = Annotated[
    list[str] | None,
    Parameter(
        name=["--var", "-v"],
        help="Placeholder value as key=value (dotted keys nest); repeatable",
        negative=(),
    ),
]

FormatOption = Annotated[
    OutputFormat,
    Parameter(name=["--format", "-f"], help="Output format (json, yaml)"),
]


def _build_resolver() -> TemplateResolver:
    ctx = CLIContext.get_current()
    return create_resolver(ctx.config, logger=ctx.logger)


def _variables_or_exit(assignments: list[str] | None) -> dict[str, object]:
    try:
        return parse_variables(assignments)
    except ValueError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)


def resolve(
    template_id: str,
    /,
    *,
    var: VarsOption = None,
    format: FormatOption = OutputFormat.JSON,
) -> None:
    """Resolve a template and print the merged result

    Applies base template inheritance, section exclusions and overrides,
    and included fragments, then prints the resolved template.

    Args:
        template_id: Template id; may contain ${path} placeholders.
        var: Placeholder values as key=value.
        format: Output format (json, yaml).
    """
    variables = _variables_or_exit(var)
    resolver = _build_resolver()

    try:
        resolved = resolver.resolve(template_id, variables)
    except TemplateError as e:
        exit_with_error(str(e), exit_code_for(e))

    print(format_output(resolved.to_wire(), format).rstrip())
    raise SystemExit(ExitCode.SUCCESS)


def compose(
    template_id: str,
    /,
    *,
    data: Annotated[
        Path,
        Parameter(name=["--data", "-d"], help="JSON or YAML file with request data"),
    ],
    var: VarsOption = None,
    format: FormatOption = OutputFormat.JSON,
) -> None:
    """Compose a document plan from a template and request data

    Evaluates section conditions, maps every field, and computes overflow
    addendum pages. Nothing is rendered.

    Args:
        template_id: Template id; may contain ${path} placeholders.
        data: Path to the request data file.
        var: Placeholder values as key=value.
        format: Output format (json, yaml).
    """
    variables = _variables_or_exit(var)

    try:
        request_data = load_data_file(data)
    except OSError as e:
        exit_with_error(f"Failed to read data file: {e}", ExitCode.IO_ERROR)
    except ValueError as e:
        exit_with_error(str(e), ExitCode.LOAD_ERROR)

    composer = DocumentComposer(_build_resolver(), logger=CLIContext.get_current().logger)

    try:
        plan = composer.compose(template_id, request_data, variables or None)
    except TemplateError as e:
        exit_with_error(str(e), exit_code_for(e))

    print(format_output(plan.to_dict(), format).rstrip())
    raise SystemExit(ExitCode.SUCCESS)


def register_commands(app: "App") -> None:
    app.command(resolve)
    app.command(compose)
