# src/hdoc/meta.py
"""Program identity and build metadata."""

import re
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path


# --- program identity ---------------------------------------------------------

PROGRAM_PACKAGE = "hdoc"
PROGRAM_SCRIPT = "hdoc"
PROGRAM_DISPLAY = "hdoc"
PROGRAM_CONFIG = "hdoc"  # -> .hdoc.toml
PROGRAM_ENV = "HDOC"


@dataclass(frozen=True)
class Metadata:
    """Version information baked into the installed distribution."""

    version: str

    def __str__(self) -> str:
        return self.version


def _version_from_pyproject() -> str | None:
    root = Path(__file__).resolve().parents[2]
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return None
    text = pyproject.read_text(encoding="utf-8")
    match = re.search(r'(?m)^\s*version\s*=\s*["\']([^"\']+)["\']', text)
    return match.group(1) if match else None


def get_metadata() -> Metadata:
    """Return the tool version.

    - Installed distribution → package metadata
    - Source checkout → pyproject.toml next to `src/`
    """
    try:
        return Metadata(metadata.version(PROGRAM_PACKAGE))
    except metadata.PackageNotFoundError:
        pass
    return Metadata(_version_from_pyproject() or "unknown")
