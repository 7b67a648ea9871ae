"""Shared utilities for docgen."""

from docgen.utils._json import dumps_json, to_plain_json
from docgen.utils._logging import (
    LogFormatType,
    create_logger,
    get_logger,
    set_default_logger,
)

__all__ = [
    "LogFormatType",
    "create_logger",
    "dumps_json",
    "get_logger",
    "set_default_logger",
    "to_plain_json",
]
