# src/hdoc/config/config_resolve.py
"""Turn a parsed .hdoc.toml document into a ResolvedConfig.

Resolution is a fixed sequence of steps. Each step reads its fields from the
document, logs what is wrong, and returns False to abort. Later steps rely on
earlier ones having succeeded, so the order below is part of the contract.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import partial
from pathlib import Path
from typing import Any

from hdoc.constants import (
    DEFAULT_IGNORE_PLAIN_COMMENTS,
    DEFAULT_IGNORE_PRIVATE_MEMBERS,
    DEFAULT_LIMIT_NUM_INDEXED_FILES,
    DEFAULT_NUM_THREADS,
    DEFAULT_USE_SYSTEM_INCLUDES,
    TIMESTAMP_FORMAT,
    BinaryMode,
)
from hdoc.logs import HdocLogger, get_logger
from hdoc.system_includes import discover_system_include_paths

from .config_loader import CONFIG_FILENAME
from .config_types import ResolvedConfig, RootConfig


# Returns the discovered paths, or None after logging why it failed.
IncludeProber = Callable[[], list[str] | None]

_MISSING = object()


@dataclass
class _Resolution:
    """State shared by the resolution steps."""

    doc: RootConfig
    root_dir: Path
    binary_mode: BinaryMode
    logger: HdocLogger
    include_prober: IncludeProber
    fields: dict[str, Any] = field(default_factory=dict)

    def lookup(self, section: str, key: str) -> Any:
        """Value at [section].key, or _MISSING. Non-table sections count as absent."""
        table = self.doc.get(section)
        if not isinstance(table, dict):
            return _MISSING
        return table.get(key, _MISSING)

    def lookup_str(self, section: str, key: str) -> str:
        """String value at [section].key; anything else reads as ""."""
        value = self.lookup(section, key)
        return value if isinstance(value, str) else ""

    def rooted(self, raw: str) -> Path:
        # Absolute paths survive the join unchanged.
        return self.root_dir / raw


def _is_regular_file(path: Path) -> bool:
    # is_file() still raises for some errors, e.g. ENAMETOOLONG
    try:
        return path.is_file()
    except OSError:
        return False


def _is_int(value: Any) -> bool:
    # TOML booleans load as bool, which is an int subclass.
    return isinstance(value, int) and not isinstance(value, bool)


def _collect_strings(res: _Resolution, section: str, key: str, what: str) -> list[str]:
    """Non-empty strings from a list field, warning about every other entry."""
    raw = res.lookup(section, key)
    if not isinstance(raw, list):
        return []

    values: list[str] = []
    for entry in raw:
        if not isinstance(entry, str) or not entry:
            res.logger.warning(
                "%s from %s was malformed, ignoring it: %r", what, CONFIG_FILENAME, entry
            )
            continue
        values.append(entry)
    return values


# --------------------------------------------------------------------------- #
# resolution steps
# --------------------------------------------------------------------------- #


def _resolve_compile_commands(res: _Resolution) -> bool:
    raw = res.lookup_str("paths", "compile_commands")
    if not raw or not _is_regular_file(res.rooted(raw)):
        res.logger.error("'%s' is not a valid file.", raw)
        return False
    res.fields["compile_commands_path"] = res.rooted(raw)
    return True


def _resolve_output_dir(res: _Resolution) -> bool:
    raw = res.lookup("paths", "output_dir")
    present = isinstance(raw, str)

    if present and res.binary_mode is BinaryMode.CLIENT:
        res.logger.warning(
            "'output_dir' specified in %s but you are running a client version of "
            "hdoc. Your documentation will be uploaded instead of being saved locally.",
            CONFIG_FILENAME,
        )
    elif not present and res.binary_mode is BinaryMode.FULL:
        res.logger.error(
            "No 'output_dir' specified in %s. "
            "It is required so that documentation can be saved locally.",
            CONFIG_FILENAME,
        )
        return False

    res.fields["output_dir"] = res.rooted(raw) if present else None
    return True


def _resolve_project(res: _Resolution) -> bool:
    name = res.lookup_str("project", "name")
    git_repo_url = res.lookup_str("project", "git_repo_url")

    if not name:
        res.logger.error(
            "Project name in %s is empty, not a string, or invalid.", CONFIG_FILENAME
        )
        return False
    if git_repo_url and not git_repo_url.endswith("/"):
        res.logger.error(
            "Git repo URL is missing the mandatory trailing slash: %s", git_repo_url
        )
        return False

    res.fields["project_name"] = name
    res.fields["project_version"] = res.lookup_str("project", "version")
    res.fields["git_repo_url"] = git_repo_url
    return True


def _resolve_num_threads(res: _Resolution) -> bool:
    raw = res.lookup("project", "num_threads")

    if raw is _MISSING:
        res.fields["num_threads"] = DEFAULT_NUM_THREADS
        return True
    if not _is_int(raw):
        res.logger.error("Number of threads in %s is not an integer.", CONFIG_FILENAME)
        return False
    if raw < 0:
        res.logger.error(
            "Number of threads must be a positive integer greater than or equal to 0."
        )
        return False

    res.fields["num_threads"] = raw
    return True


def _resolve_system_includes(res: _Resolution) -> bool:
    raw = res.lookup("includes", "use_system_includes")
    use_system_includes = raw if isinstance(raw, bool) else DEFAULT_USE_SYSTEM_INCLUDES
    res.fields["use_system_includes"] = use_system_includes

    include_paths: list[str] = []
    if use_system_includes:
        discovered = res.include_prober()
        if discovered is None:
            return False
        include_paths.extend(discovered)

    # System paths come first: they are searched before user paths.
    res.fields["include_paths"] = include_paths
    return True


def _resolve_include_paths(res: _Resolution) -> bool:
    user_paths = _collect_strings(res, "includes", "paths", "An include path")
    res.fields["include_paths"].extend(user_paths)
    return True


def _resolve_ignore_paths(res: _Resolution) -> bool:
    patterns = _collect_strings(res, "ignore", "paths", "An ignore directive")
    # duplicates add nothing to substring matching
    res.fields["ignore_paths"] = tuple(dict.fromkeys(patterns))
    return True


def _resolve_ignore_flags(res: _Resolution) -> bool:
    private_members = res.lookup("ignore", "ignore_private_members")
    plain_comments = res.lookup("ignore", "ignore_plain_comments")
    res.fields["ignore_private_members"] = (
        private_members
        if isinstance(private_members, bool)
        else DEFAULT_IGNORE_PRIVATE_MEMBERS
    )
    res.fields["ignore_plain_comments"] = (
        plain_comments
        if isinstance(plain_comments, bool)
        else DEFAULT_IGNORE_PLAIN_COMMENTS
    )
    return True


def _resolve_pages(res: _Resolution) -> bool:
    homepage = res.lookup_str("pages", "homepage")
    res.fields["homepage"] = res.rooted(homepage) if homepage else None

    md_paths: list[Path] = []
    for raw in _collect_strings(res, "pages", "paths", "A path to a markdown file"):
        md_path = res.rooted(raw)
        if not _is_regular_file(md_path):
            res.logger.warning(
                "A path to a markdown file in %s either doesn't exist "
                "or isn't a file, ignoring it: %s",
                CONFIG_FILENAME,
                raw,
            )
            continue
        md_paths.append(md_path)
    res.fields["md_paths"] = tuple(md_paths)
    return True


def _resolve_debug_limit(res: _Resolution) -> bool:
    # Only meant for bringing up hdoc on huge codebases, not for production.
    raw = res.lookup("debug", "limit_num_indexed_files")
    limit = raw if _is_int(raw) else DEFAULT_LIMIT_NUM_INDEXED_FILES
    if limit < 0:
        res.logger.warning(
            "debug.limit_num_indexed_files must not be negative, ignoring it."
        )
        limit = DEFAULT_LIMIT_NUM_INDEXED_FILES
    res.fields["debug_limit_num_indexed_files"] = limit
    return True


def _resolve_timestamp(res: _Resolution) -> bool:
    res.fields["timestamp"] = datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)
    return True


RESOLUTION_STEPS: tuple[Callable[[_Resolution], bool], ...] = (
    _resolve_compile_commands,
    _resolve_output_dir,
    _resolve_project,
    _resolve_num_threads,
    _resolve_system_includes,
    _resolve_include_paths,
    _resolve_ignore_paths,
    _resolve_ignore_flags,
    _resolve_pages,
    _resolve_debug_limit,
    _resolve_timestamp,
)


# --------------------------------------------------------------------------- #
# entry point
# --------------------------------------------------------------------------- #


def _log_summary(cfg: ResolvedConfig, logger: HdocLogger) -> None:
    logger.info("hdoc version: %s", cfg.tool_version)
    logger.info("Timestamp: %s", cfg.timestamp)
    logger.info("Root directory: %s", cfg.root_dir)
    if cfg.binary_mode is not BinaryMode.CLIENT:
        logger.info("Output directory: %s", cfg.output_dir)
    logger.info("Project name: %s", cfg.project_name)
    logger.info("Project version: %s", cfg.project_version)
    logger.info(
        "Indexing using %s threads",
        "all" if cfg.num_threads == 0 else cfg.num_threads,
    )
    if cfg.debug_limit_num_indexed_files > 0:
        logger.info("Only indexing %d files", cfg.debug_limit_num_indexed_files)


def resolve_fields(
    doc: RootConfig,
    *,
    root_dir: Path,
    binary_mode: BinaryMode,
    tool_version: str,
    logger: HdocLogger | None = None,
    include_prober: IncludeProber | None = None,
) -> ResolvedConfig:
    """Run every resolution step over `doc`.

    Stops at the first step that fails and returns an invalid config;
    otherwise returns a valid one. Never raises for bad config values.
    """
    logger = logger or get_logger()
    if include_prober is None:
        include_prober = partial(discover_system_include_paths, logger=logger)

    res = _Resolution(
        doc=doc,
        root_dir=root_dir,
        binary_mode=binary_mode,
        logger=logger,
        include_prober=include_prober,
    )

    for step in RESOLUTION_STEPS:
        if not step(res):
            logger.trace(f"[resolve_fields] aborted in {step.__name__}")
            return ResolvedConfig.invalid(tool_version, root_dir, binary_mode)

    fields = dict(res.fields)
    fields["include_paths"] = tuple(fields["include_paths"])
    cfg = ResolvedConfig(
        tool_version=tool_version,
        root_dir=root_dir,
        binary_mode=binary_mode,
        valid=True,
        **fields,
    )
    _log_summary(cfg, logger)
    return cfg
