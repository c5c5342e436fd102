# src/hdoc/constants.py
"""Central constants used across the project."""

from enum import Enum


class BinaryMode(Enum):
    """Build-time flavour of the tool.

    CLIENT binaries upload documentation instead of writing it locally,
    FULL binaries need an output directory.
    """

    CLIENT = "client"
    FULL = "full"


# --- build flavour ---
BINARY_MODE: BinaryMode = BinaryMode.FULL

# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "warning"
DEFAULT_VERBOSE_LOG_LEVEL: str = "info"

# --- config file ---
CONFIG_SUFFIX: str = ".toml"

# --- config defaults ---
DEFAULT_NUM_THREADS: int = 0  # 0 = use every available core
DEFAULT_USE_SYSTEM_INCLUDES: bool = True
DEFAULT_IGNORE_PRIVATE_MEMBERS: bool = False
DEFAULT_IGNORE_PLAIN_COMMENTS: bool = False
DEFAULT_LIMIT_NUM_INDEXED_FILES: int = 0  # 0 = unlimited

# --- system include probing ---
DEFAULT_COMPILER: str = "c++"
DEFAULT_PROBE_TIMEOUT: float = 10.0  # seconds
PROBE_TEMPFILE_PREFIX: str = "hdoc-system-includes-compiler-output"
SEARCH_LIST_START_MARKERS: tuple[str, str] = ("#include", "search starts here:")
SEARCH_LIST_END_MARKER: str = "End of search list."

# --- resolution output ---
TIMESTAMP_FORMAT: str = "%Y-%m-%dT%H:%M:%S UTC"
