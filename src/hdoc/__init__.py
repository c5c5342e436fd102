# src/hdoc/__init__.py

"""hdoc — configuration and environment resolution.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use by the indexer and renderer.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                           → CLI entrypoint
    - resolve_config()                 → argv + .hdoc.toml + compiler → ResolvedConfig
    - discover_system_include_paths()  → ask `c++` for its header search list
    - get_metadata()                   → Retrieve version info
"""

from .cli import main, parse_arguments, resolve_config
from .config import (
    CONFIG_FILENAME,
    ConfigParseError,
    ResolvedConfig,
    RootConfig,
    find_config,
    load_and_parse_config,
    load_config,
    resolve_fields,
    validate_config,
)
from .constants import BINARY_MODE, BinaryMode
from .logs import HdocLogger, get_logger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .system_includes import (
    discover_system_include_paths,
    find_compiler,
    parse_include_search_list,
)


__all__ = [  # noqa: RUF022
    # cli
    "main",
    "parse_arguments",
    "resolve_config",
    # config
    "CONFIG_FILENAME",
    "ConfigParseError",
    "find_config",
    "load_and_parse_config",
    "load_config",
    "ResolvedConfig",
    "resolve_fields",
    "RootConfig",
    "validate_config",
    # constants
    "BINARY_MODE",
    "BinaryMode",
    # logs
    "get_logger",
    "HdocLogger",
    # meta
    "get_metadata",
    "Metadata",
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    # system_includes
    "discover_system_include_paths",
    "find_compiler",
    "parse_include_search_list",
]
