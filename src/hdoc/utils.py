# src/hdoc/utils.py

import re
import sys
from pathlib import Path
from typing import Any


if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib


# tomllib/tomli append the position to the message: "Invalid value (at line 3, column 8)"
_TOML_POSITION_RE = re.compile(r"^(?P<msg>.*?)\s*\(at line (?P<line>\d+), column (?P<col>\d+)\)$")


def load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Uses `tomllib` on Python 3.11+ and `tomli` on 3.10.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file cannot be read
        tomllib.TOMLDecodeError: If the file cannot be parsed (a ValueError)
    """
    if not path.exists():
        xmsg = f"TOML file not found: {path}"
        raise FileNotFoundError(xmsg)

    with path.open("rb") as f:
        return tomllib.load(f)


def toml_error_position(err: ValueError) -> tuple[str, int | None, int | None]:
    """Split a TOML decode error into (description, line, column).

    Newer parsers expose `msg`/`lineno`/`colno`; older ones only embed the
    position in the message text.
    """
    lineno = getattr(err, "lineno", None)
    colno = getattr(err, "colno", None)
    msg = getattr(err, "msg", None)
    if isinstance(lineno, int) and isinstance(colno, int) and isinstance(msg, str):
        return msg, lineno, colno

    text = str(err)
    match = _TOML_POSITION_RE.match(text)
    if match:
        return match.group("msg"), int(match.group("line")), int(match.group("col"))
    return text, None, None


def plural(obj: Any) -> str:
    """Return 's' if obj represents a plural count."""
    count = obj if isinstance(obj, int) else len(obj)
    return "s" if count != 1 else ""
