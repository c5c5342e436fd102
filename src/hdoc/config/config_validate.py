# src/hdoc/config/config_validate.py


from difflib import get_close_matches
from typing import Any, get_type_hints

from hdoc.logs import HdocLogger, get_logger

from .config_loader import CONFIG_FILENAME
from .config_types import RootConfig


def schema_from_typeddict(td: type[Any]) -> dict[str, Any]:
    """Extract field names and their annotated types from a TypedDict."""
    return get_type_hints(td, include_extras=True)


def _unknown_key_msg(key: str, known: list[str], ctx: str) -> str:
    msg = f"Unknown key '{key}' {ctx} in {CONFIG_FILENAME}, ignoring it."
    close = get_close_matches(key, known, n=1, cutoff=0.6)
    if close:
        msg += f" Hint: did you mean '{close[0]}'?"
    return msg


def validate_config(
    doc: dict[str, Any],
    *,
    logger: HdocLogger | None = None,
) -> list[str]:
    """Warn about sections and keys that nothing reads.

    Typos in optional keys would otherwise silently fall back to defaults.
    Never fatal; returns the warnings that were logged.
    """
    logger = logger or get_logger()
    warnings: list[str] = []

    root_schema = schema_from_typeddict(RootConfig)
    known_sections = list(root_schema)

    for section, value in doc.items():
        if section not in root_schema:
            warnings.append(_unknown_key_msg(section, known_sections, "at top level"))
            continue
        if not isinstance(value, dict):
            warnings.append(
                f"'{section}' in {CONFIG_FILENAME} is not a table, ignoring it."
            )
            continue

        section_keys = list(schema_from_typeddict(root_schema[section]))
        for key in value:
            if key not in section_keys:
                warnings.append(
                    _unknown_key_msg(key, section_keys, f"in [{section}]")
                )

    for msg in warnings:
        logger.warning(msg)
    return warnings
