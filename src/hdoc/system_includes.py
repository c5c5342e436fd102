# src/hdoc/system_includes.py
"""Ask the host C++ compiler for its built-in header search paths.

The compiler is run on an empty translation unit with `-Wp,-v`, which makes
the preprocessor print its search list to stderr, e.g. (gcc):

    #include "..." search starts here:
    #include <...> search starts here:
     /usr/include/c++/12
     /usr/include
    End of search list.

gcc and clang both use this layout, but it is not a documented format.
"""

import os
import shutil
import subprocess
import tempfile
from collections.abc import Iterable

from .constants import (
    DEFAULT_COMPILER,
    DEFAULT_PROBE_TIMEOUT,
    PROBE_TEMPFILE_PREFIX,
    SEARCH_LIST_END_MARKER,
    SEARCH_LIST_START_MARKERS,
)
from .logs import HdocLogger, get_logger
from .utils import plural


def find_compiler(name: str = DEFAULT_COMPILER) -> str | None:
    """Find the compiler executable on PATH.

    Returns:
        Path to executable if found, None otherwise
    """
    return shutil.which(name)


def build_probe_command(compiler_path: str) -> list[str]:
    """Command that preprocesses nothing and dumps the include search list."""
    return [compiler_path, "-E", "-Wp,-v", "-xc++", os.devnull]


def parse_include_search_list(lines: Iterable[str]) -> list[str]:
    """Extract include directories from the compiler's `-v` output.

    Collects indented lines between the first "search starts here:" line and
    "End of search list.". Output without those markers yields no paths.
    """
    paths: list[str] = []
    in_search_list = False
    for line in lines:
        if not in_search_list:
            in_search_list = all(marker in line for marker in SEARCH_LIST_START_MARKERS)

        if in_search_list and line.startswith(" "):
            path = line.strip()
            if path:
                paths.append(path)

        if SEARCH_LIST_END_MARKER in line:
            break
    return paths


def discover_system_include_paths(
    *,
    compiler: str = DEFAULT_COMPILER,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
    logger: HdocLogger | None = None,
) -> list[str] | None:
    """Return the compiler's built-in include paths, in search order.

    Returns None (after logging an error) if the compiler cannot be found,
    run, or its output read. The temporary file holding the compiler's
    stderr is removed before returning, whatever the outcome.
    """
    logger = logger or get_logger()

    try:
        tmp = tempfile.NamedTemporaryFile(  # noqa: SIM115
            mode="w+b", prefix=PROBE_TEMPFILE_PREFIX, delete=True
        )
    except OSError as e:
        logger.error("Unable to create temporary file to store system includes: %s.", e)
        return None

    with tmp:
        compiler_path = find_compiler(compiler)
        if compiler_path is None:
            logger.error(
                "Unable to find system default C++ compiler to find system includes."
            )
            return None

        command = build_probe_command(compiler_path)
        logger.debug("Probing system includes: %s", " ".join(command))
        try:
            result = subprocess.run(  # noqa: S603
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=tmp,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.error(
                "Failed to determine the system include paths (%d, %s).",
                -1,
                f"timed out after {timeout:g}s",
            )
            return None
        except OSError as e:
            logger.error("Failed to determine the system include paths (%d, %s).", -1, e)
            return None

        try:
            tmp.seek(0)
            output = tmp.read().decode("utf-8", errors="replace")
        except OSError as e:
            logger.error("Failed to read compiler's default include paths: %s", e)
            return None

    if result.returncode != 0:
        logger.error(
            "Failed to determine the system include paths (%d, %s).",
            result.returncode,
            output.strip() or "no output",
        )
        return None

    paths = parse_include_search_list(output.split("\n"))
    logger.debug(
        "Found %d system include path%s from %s", len(paths), plural(paths), compiler_path
    )
    return paths
