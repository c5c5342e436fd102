# src/hdoc/config/config_types.py


from dataclasses import dataclass
from pathlib import Path
from typing import TypedDict

from typing_extensions import Self

from hdoc.constants import (
    DEFAULT_IGNORE_PLAIN_COMMENTS,
    DEFAULT_IGNORE_PRIVATE_MEMBERS,
    DEFAULT_LIMIT_NUM_INDEXED_FILES,
    DEFAULT_NUM_THREADS,
    DEFAULT_USE_SYSTEM_INCLUDES,
    BinaryMode,
)


# Raw .hdoc.toml layout, as written by users. Values are not trusted:
# every field is type-checked again during resolution.
class PathsSection(TypedDict, total=False):
    compile_commands: str
    output_dir: str


class ProjectSection(TypedDict, total=False):
    name: str
    version: str
    git_repo_url: str  # must end with "/"
    num_threads: int  # 0 = all available


class IncludesSection(TypedDict, total=False):
    use_system_includes: bool
    paths: list[str]


class IgnoreSection(TypedDict, total=False):
    paths: list[str]  # substrings, not globs
    ignore_private_members: bool
    ignore_plain_comments: bool


class PagesSection(TypedDict, total=False):
    homepage: str
    paths: list[str]


class DebugSection(TypedDict, total=False):
    limit_num_indexed_files: int


class RootConfig(TypedDict, total=False):
    paths: PathsSection
    project: ProjectSection
    includes: IncludesSection
    ignore: IgnoreSection
    pages: PagesSection
    debug: DebugSection


@dataclass(frozen=True)
class ResolvedConfig:
    """Everything the indexer and renderer need, validated.

    Only use an instance when `valid` is True; an invalid one carries
    nothing beyond the tool identity and root directory.
    """

    tool_version: str
    root_dir: Path
    binary_mode: BinaryMode
    compile_commands_path: Path | None = None
    output_dir: Path | None = None
    project_name: str = ""
    project_version: str = ""
    git_repo_url: str = ""
    num_threads: int = DEFAULT_NUM_THREADS
    use_system_includes: bool = DEFAULT_USE_SYSTEM_INCLUDES
    include_paths: tuple[str, ...] = ()  # search order
    ignore_paths: tuple[str, ...] = ()
    ignore_private_members: bool = DEFAULT_IGNORE_PRIVATE_MEMBERS
    ignore_plain_comments: bool = DEFAULT_IGNORE_PLAIN_COMMENTS
    homepage: Path | None = None
    md_paths: tuple[Path, ...] = ()
    debug_limit_num_indexed_files: int = DEFAULT_LIMIT_NUM_INDEXED_FILES
    timestamp: str = ""
    valid: bool = False

    @classmethod
    def invalid(
        cls, tool_version: str, root_dir: Path, binary_mode: BinaryMode
    ) -> Self:
        return cls(tool_version=tool_version, root_dir=root_dir, binary_mode=binary_mode)
