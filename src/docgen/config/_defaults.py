"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is a plain dict so it can be fed straight into
deep_merge. The merge functions create copies, so the original is never
mutated.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "templates": {
        "search_paths": ["."],
        "prefix": "templates",
        "extensions": [".yaml", ".yml", ".json"],
        "package": "",
    },
    "cache": {
        "enabled": True,
    },
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
        "max_bytes": 10_485_760,
        "backup_count": 5,
    },
}
