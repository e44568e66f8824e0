"""Package-local logging utilities.

formcore is embedded by rendering services, so it stays silent unless the host
application configures logging. CLI users can opt into logs via
``FORMCORE_LOG_LEVEL`` or ``--log-level``.
"""

from __future__ import annotations

import logging
import os

from loguru import logger as loguru_logger

LOGGER_NAME = "formcore"
LOG_LEVEL_ENV = "FORMCORE_LOG_LEVEL"
logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())
loguru_logger.disable(LOGGER_NAME)


def configure_logging(level: str | None = None) -> None:
    """Configure package logging for CLI/runtime diagnostics.

    Explicit ``level`` wins over the environment. With neither, the package
    logger is reset to a silent ``NullHandler``.
    """
    env_level = os.getenv(LOG_LEVEL_ENV, "")
    raw_level = level if level is not None else (env_level or "")
    resolved_level = raw_level.strip()
    pkg_logger = logging.getLogger(LOGGER_NAME)
    # Reset handlers so repeated CLI calls do not hold stale stderr streams.
    pkg_logger.handlers = []

    if not resolved_level:
        loguru_logger.disable(LOGGER_NAME)
        pkg_logger.addHandler(logging.NullHandler())
        pkg_logger.setLevel(logging.NOTSET)
        pkg_logger.propagate = False
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, resolved_level.upper(), logging.INFO))
    pkg_logger.propagate = False
    loguru_logger.enable(LOGGER_NAME)
