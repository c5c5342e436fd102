# src/hdoc/config/__init__.py

"""Configuration handling for hdoc.

This module provides config file discovery, parsing, validation, and
resolution into a ResolvedConfig.
"""

from .config_loader import (
    CONFIG_FILENAME,
    ConfigParseError,
    find_config,
    load_and_parse_config,
    load_config,
)
from .config_resolve import (
    RESOLUTION_STEPS,
    IncludeProber,
    resolve_fields,
)
from .config_types import (
    DebugSection,
    IgnoreSection,
    IncludesSection,
    PagesSection,
    PathsSection,
    ProjectSection,
    ResolvedConfig,
    RootConfig,
)
from .config_validate import schema_from_typeddict, validate_config


__all__ = [  # noqa: RUF022
    # config_loader
    "CONFIG_FILENAME",
    "ConfigParseError",
    "find_config",
    "load_and_parse_config",
    "load_config",
    # config_resolve
    "RESOLUTION_STEPS",
    "IncludeProber",
    "resolve_fields",
    # config_types
    "DebugSection",
    "IgnoreSection",
    "IncludesSection",
    "PagesSection",
    "PathsSection",
    "ProjectSection",
    "ResolvedConfig",
    "RootConfig",
    # config_validate
    "schema_from_typeddict",
    "validate_config",
]
