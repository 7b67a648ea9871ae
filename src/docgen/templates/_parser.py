"""Template file parsing."""

from pathlib import PurePosixPath
from typing import Any

import orjson
import yaml
from pydantic import ValidationError

from docgen.exceptions import InvalidTemplateError, UnsupportedFormatError
from docgen.templates._models import TemplateDefinition

YAML_EXTENSIONS = frozenset({".yaml", ".yml"})
JSON_EXTENSIONS = frozenset({".json"})


def _decode(content: bytes, path: str) -> Any:  # pyright: ignore[reportExplicitAny]
    suffix = PurePosixPath(path).suffix.lower()
    if suffix in YAML_EXTENSIONS:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            msg = f"Invalid YAML in {path}: {e}"
            raise InvalidTemplateError(msg, path=path) from e
    if suffix in JSON_EXTENSIONS:
        try:
            return orjson.loads(content)
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in {path}: {e}"
            raise InvalidTemplateError(msg, path=path) from e
    msg = f"Unsupported template format: {path}"
    raise UnsupportedFormatError(msg)


def parse_template(content: bytes, path: str) -> TemplateDefinition:
    """Parse template bytes into a TemplateDefinition.

    The format is chosen by the file extension: ``.yaml``/``.yml`` for YAML
    and ``.json`` for JSON.

    Args:
        content: Raw template bytes.
        path: Source path the bytes were read from.

    Returns:
        The parsed definition.

    Raises:
        UnsupportedFormatError: If the extension is not recognized.
        InvalidTemplateError: If the bytes cannot be decoded or do not match
            the template schema.
    """
    data = _decode(content, path)
    if not isinstance(data, dict):
        msg = f"Template {path} must contain a mapping at the top level"
        raise InvalidTemplateError(msg, path=path)

    try:
        return TemplateDefinition.model_validate(data)
    except ValidationError as e:
        msg = f"Template {path} failed validation: {e.error_count()} error(s)\n{e}"
        raise InvalidTemplateError(msg, path=path) from e
