# src/hdoc/logs.py

import logging
from typing import cast

from apathetic_logging import (
    Logger,
    registerDefaultLogLevel,
    registerLogger,
    registerLogLevelEnvVars,
)

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


class HdocLogger(Logger):
    """App-specific logger class."""

    # for future use if needed, empty for now


# --- Logger initialization ---------------------------------------------------

# Force the logging module to use the Logger class globally.
# This must happen *before* any loggers are created.
logging.setLoggerClass(HdocLogger)

# TRACE and SILENT levels
HdocLogger.extendLoggingModule()

# HDOC_LOG_LEVEL wins over LOG_LEVEL; both lose to --verbose
registerLogLevelEnvVars(
    [f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}", DEFAULT_ENV_LOG_LEVEL]
)
registerDefaultLogLevel(DEFAULT_LOG_LEVEL)

registerLogger(PROGRAM_PACKAGE)

_APP_LOGGER = cast("HdocLogger", logging.getLogger(PROGRAM_PACKAGE))


# --- Convenience utils -------------------------------------------------------


def get_logger() -> HdocLogger:
    """Return the configured app logger."""
    return _APP_LOGGER
