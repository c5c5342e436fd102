# src/hdoc/cli.py

import argparse
import platform
import sys
from difflib import get_close_matches
from importlib import resources
from pathlib import Path

from apathetic_logging import safeLog

from .config import (
    IncludeProber,
    ResolvedConfig,
    load_and_parse_config,
    resolve_fields,
    validate_config,
)
from .constants import (
    BINARY_MODE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_VERBOSE_LOG_LEVEL,
    BinaryMode,
)
from .logs import HdocLogger, get_logger
from .meta import PROGRAM_DISPLAY, PROGRAM_PACKAGE, PROGRAM_SCRIPT, get_metadata


OSS_ATTRIBUTION_RESOURCE = "resources/oss.md"


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class ArgumentParseError(Exception):
    """Bad command line; raised instead of exiting so resolution can abort."""


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["--verbose", "--oss", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # Argparse message for bad flags is typically
        # "unrecognized arguments: --verbos ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        full = message
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        raise ArgumentParseError(full)


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    # no prefix matching: "--o" must not run --oss
    parser = HintingArgumentParser(prog=PROGRAM_SCRIPT, allow_abbrev=False)
    parser.add_argument(
        "--verbose",
        action="store_const",
        const=DEFAULT_VERBOSE_LOG_LEVEL,
        dest="log_level",
        help="Whether to use verbose output",
    )
    parser.add_argument(
        "--oss",
        action="store_true",
        help="Show open source notices",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_metadata().version}",
    )
    return parser


def load_attribution() -> str:
    """Third-party notices shipped inside the package."""
    return (
        resources.files(PROGRAM_PACKAGE)
        .joinpath(OSS_ATTRIBUTION_RESOURCE)
        .read_text(encoding="utf-8")
    )


def _initialize_logger(
    logger: HdocLogger, args: argparse.Namespace | None = None
) -> None:
    """Set the log level from --verbose, then env, then the default."""
    log_level = logger.determineLogLevel(args=args)
    try:
        logger.setLevel(log_level)
    except ValueError:
        logger.setLevel(DEFAULT_LOG_LEVEL)
        logger.warning(
            "Unknown log level %r, using %s instead.", log_level, DEFAULT_LOG_LEVEL
        )
    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)


def parse_arguments(
    argv: list[str] | None,
    *,
    logger: HdocLogger | None = None,
) -> argparse.Namespace | None:
    """Parse the command line and set the log level from it.

    Returns None (after logging the error) on a bad command line.
    `--oss` and `--version` exit the process with status 0.
    """
    logger = logger or get_logger()
    _initialize_logger(logger)

    parser = _setup_parser()
    try:
        args = parser.parse_args(argv)
    except ArgumentParseError as e:
        logger.error("Error found while parsing command line arguments: %s", e)
        return None

    # --- Open source attribution ---
    if args.oss:
        logger.setLevel(DEFAULT_VERBOSE_LOG_LEVEL)
        logger.info("Displaying OSS attribution.\n%s", load_attribution())
        sys.exit(0)

    _initialize_logger(logger, args)
    logger.debug(
        "Runtime: Python %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
    )
    return args


# --------------------------------------------------------------------------- #
# Resolution pipeline
# --------------------------------------------------------------------------- #


def resolve_config(
    argv: list[str] | None = None,
    *,
    cwd: Path | None = None,
    binary_mode: BinaryMode = BINARY_MODE,
    logger: HdocLogger | None = None,
    include_prober: IncludeProber | None = None,
) -> ResolvedConfig:
    """Resolve the configuration from the command line, .hdoc.toml and the
    host compiler.

    Never raises for user errors: check `valid` on the result. Every reason
    for an invalid result has already been logged.
    """
    logger = logger or get_logger()
    tool_version = get_metadata().version
    root_dir = (cwd or Path.cwd()).resolve()

    if parse_arguments(argv, logger=logger) is None:
        return ResolvedConfig.invalid(tool_version, root_dir, binary_mode)

    loaded = load_and_parse_config(root_dir, logger=logger)
    if loaded is None:
        return ResolvedConfig.invalid(tool_version, root_dir, binary_mode)
    config_path, doc = loaded
    logger.debug("Using config: %s", config_path)

    validate_config(doc, logger=logger)

    return resolve_fields(
        doc,
        root_dir=root_dir,
        binary_mode=binary_mode,
        tool_version=tool_version,
        logger=logger,
        include_prober=include_prober,
    )


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = get_logger()

    try:
        cfg = resolve_config(argv, logger=logger)
    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            logger.criticalIfNotDebug("Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    if not cfg.valid:
        return 1

    logger.info("%s configuration resolved.", PROGRAM_DISPLAY)
    return 0
