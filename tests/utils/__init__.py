# tests/utils/__init__.py

from .compiler_output import CLANG_OUTPUT, CLANG_PATHS, GCC_OUTPUT, GCC_PATHS
from .configfile import (
    COMPILE_COMMANDS,
    make_config_content,
    make_config_doc,
    make_project_root,
    write_config_file,
)
from .probers import failing_prober, forbidden_prober, make_prober


__all__ = [  # noqa: RUF022
    # compiler_output
    "CLANG_OUTPUT",
    "CLANG_PATHS",
    "GCC_OUTPUT",
    "GCC_PATHS",
    # configfile
    "COMPILE_COMMANDS",
    "make_config_content",
    "make_config_doc",
    "make_project_root",
    "write_config_file",
    # probers
    "failing_prober",
    "forbidden_prober",
    "make_prober",
]
