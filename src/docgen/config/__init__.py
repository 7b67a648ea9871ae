"""Configuration loading for docgen.

Configuration is merged from three sources, lowest precedence first: the
built-in defaults, an optional TOML file, and ``DOCGEN_*`` environment
variables (double underscore separates nested keys).
"""

from docgen.config._defaults import DEFAULT_CONFIG
from docgen.config._load import safe_load_config
from docgen.config._loader import (
    copy_value,
    deep_merge,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from docgen.config._models import (
    CacheConfig,
    Config,
    LogFormat,
    LoggingConfig,
    LogLevel,
    TemplatesConfig,
)

__all__ = [
    "DEFAULT_CONFIG",
    "CacheConfig",
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "TemplatesConfig",
    "copy_value",
    "deep_merge",
    "parse_env_value",
    "parse_env_vars",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
]
