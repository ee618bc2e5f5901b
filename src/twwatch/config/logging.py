"""Diagnostic logging for twwatch.

The rendered execution view owns stdout; log records go to stderr and,
when ``TWWATCH_LOG_FILE`` is set, to a file as well.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .settings import get_settings


LOGGER_NAME = "twwatch"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _diagnostic_handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(level: Optional[str] = None, log_file: Optional[Path] = None) -> None:
    """(Re)install the handlers of the ``twwatch`` logger.

    ``level`` and ``log_file`` override TWWATCH_LOG_LEVEL and TWWATCH_LOG_FILE.
    Records stop at the ``twwatch`` logger so host applications keep their
    own root configuration.
    """
    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    target = log_file or settings.log_file

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(log_level)
    package_logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in _diagnostic_handlers(Path(target) if target else None):
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``twwatch`` namespace; installs handlers on first use."""
    if not logging.getLogger(LOGGER_NAME).handlers:
        setup_logging()
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
