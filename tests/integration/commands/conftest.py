from collections.abc import Callable, Generator
from io import StringIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from docgen.cli import CLIContext, create_app
from docgen.config import Config


@pytest.fixture
def console() -> Console:
    """Console writing to a buffer instead of the terminal."""
    return Console(file=StringIO(), force_terminal=False, width=120)


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Search root with an empty ``templates`` directory."""
    (tmp_path / "templates").mkdir()
    return tmp_path


@pytest.fixture(autouse=True)
def setup_cli_context(template_root: Path) -> Generator[None]:
    """Point the CLI context at the test template root."""
    config = Config.from_dict({"templates": {"search_paths": [str(template_root)]}})
    CLIContext.set_current(CLIContext(config=config, logger=MagicMock()))
    yield
    CLIContext.reset()


@pytest.fixture
def docgen_cli(console: Console) -> Callable[..., None]:
    """Create CLI app for testing.

    Returns a callable that runs the CLI and suppresses SystemExit.
    Use docgen_cli_with_exit_code when you need to check the exit code.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> None:
        try:
            app(args)
        except SystemExit:
            pass

    return _run


@pytest.fixture
def docgen_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code."""
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
