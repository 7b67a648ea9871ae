# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

Every section is a frozen Pydantic model that ignores unknown keys, so a
configuration file written for a newer release still loads.
"""

import os
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from docgen.config._defaults import DEFAULT_CONFIG
from docgen.config._loader import deep_merge, parse_env_vars, read_toml_file
from docgen.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from typing import Self


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class TemplatesConfig(BaseModel):
    """Template lookup configuration.

    Attributes:
        search_paths: Filesystem roots searched for template files, in order.
        prefix: Directory tried in front of a bare template id.
        extensions: File extensions tried after the bare id, in order.
        package: Importable package holding bundled templates (empty disables).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    search_paths: tuple[Path, ...] = Field(
        default=(Path(),), description="Filesystem roots searched in order"
    )
    prefix: str = Field(default="templates", description="Template directory prefix")
    extensions: tuple[str, ...] = Field(
        default=(".yaml", ".yml", ".json"),
        description="Extensions tried after the bare id",
    )
    package: str = Field(default="", description="Package holding bundled templates")

    @field_validator("search_paths", mode="before")
    @classmethod
    def _split_search_paths(cls, value: Any) -> Any:
        # DOCGEN_TEMPLATES__SEARCH_PATHS may be an os.pathsep-separated string
        if isinstance(value, str):
            return [part for part in value.split(os.pathsep) if part]
        return value


class CacheConfig(BaseModel):
    """Cache configuration.

    Attributes:
        enabled: Whether resolved templates and raw bytes are cached.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    enabled: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of rotated log files to keep.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""
    max_bytes: int = Field(default=10_485_760, ge=0)
    backup_count: int = Field(default=5, ge=0)


def _first_error_key(error: ValidationError) -> tuple[str, Any, str]:
    details = error.errors()[0]
    key = ".".join(str(part) for part in details["loc"])
    return key, details.get("input"), details["msg"]


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods to create instances rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    templates: TemplatesConfig = TemplatesConfig()
    cache: CacheConfig = CacheConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Self":
        """Create configuration from a dictionary merged over the defaults.

        Args:
            data: Dictionary of configuration values.

        Returns:
            Configuration object.

        Raises:
            ConfigValidationError: If a value has the wrong type.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            key, value, message = _first_error_key(e)
            msg = f"Invalid configuration value for {key}: {message}"
            raise ConfigValidationError(
                msg, key=key, value=value, expected=message
            ) from e

    @classmethod
    def from_file(cls, path: Path) -> "Self":
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration object from the file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        return cls.from_dict(read_toml_file(path))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
    ) -> "Self":
        """Load merged configuration (defaults -> file -> environment).

        Args:
            config_path: Optional TOML file. Missing files are skipped.
            include_env: Include ``DOCGEN_*`` environment variables.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If the config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        merged: dict[str, Any] = {}
        if config_path is not None and config_path.is_file():
            merged = deep_merge(merged, read_toml_file(config_path))
        if include_env:
            merged = deep_merge(merged, parse_env_vars())
        return cls.from_dict(merged)
