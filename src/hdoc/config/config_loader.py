# src/hdoc/config/config_loader.py


from pathlib import Path
from typing import Any

from hdoc.constants import CONFIG_SUFFIX
from hdoc.logs import HdocLogger, get_logger
from hdoc.meta import PROGRAM_CONFIG
from hdoc.utils import load_toml, toml_error_position

from .config_types import RootConfig


CONFIG_FILENAME = f".{PROGRAM_CONFIG}{CONFIG_SUFFIX}"


class ConfigParseError(ValueError):
    """Syntax error in the config file, with its source position when known."""

    def __init__(
        self,
        description: str,
        path: Path,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.description = description
        self.path = path
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.description} ({self.path})"
        return f"{self.description} ({self.path}:{self.line}:{self.column})"


def find_config(cwd: Path, *, logger: HdocLogger | None = None) -> Path | None:
    """Locate the configuration file in `cwd`.

    Only the working directory is searched; parents are not.
    Returns None (after logging an error) when it is missing or not a file.
    """
    logger = logger or get_logger()

    config = cwd / CONFIG_FILENAME
    logger.trace(f"[find_config] Checking {config}")
    if not config.is_file():
        logger.error("Current directory doesn't contain an %s file.", CONFIG_FILENAME)
        return None
    return config


def load_config(config_path: Path) -> RootConfig:
    """Parse the configuration file into a plain document.

    Raises:
        ConfigParseError: malformed TOML
        OSError: the file could not be read
    """
    try:
        raw: dict[str, Any] = load_toml(config_path)
    except ValueError as e:
        description, line, column = toml_error_position(e)
        raise ConfigParseError(description, config_path, line, column) from e

    # Shape is not checked here: resolution type-checks each field it reads.
    return raw  # type: ignore[return-value]


def load_and_parse_config(
    cwd: Path,
    *,
    logger: HdocLogger | None = None,
) -> tuple[Path, RootConfig] | None:
    """Find and parse the config in `cwd`.

    Returns (config_path, document), or None if resolution should abort.
    Errors are logged here.
    """
    logger = logger or get_logger()

    config_path = find_config(cwd, logger=logger)
    if config_path is None:
        return None

    try:
        doc = load_config(config_path)
    except ConfigParseError as e:
        logger.error("Error in configuration file: %s", e)
        return None
    except OSError as e:
        logger.error("Unable to read configuration file %s: %s", config_path, e)
        return None

    logger.trace(f"[load_and_parse_config] Loaded {len(doc)} top-level key(s)")
    return config_path, doc
