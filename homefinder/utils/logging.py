"""
Logging Configuration

Configures the "homefinder" package logger from the `logging` config section.
Modules log through `logging.getLogger(__name__)` and inherit these handlers.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

PACKAGE_LOGGER = "homefinder"

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(name: Any) -> Optional[int]:
    level = logging.getLevelName(str(name or "INFO").upper())
    return level if isinstance(level, int) else None


def setup_logging(settings: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        settings: The `logging` config section. Keys: `level` (default INFO),
            `file` (optional rotating log file), `max_size_mb` (default 10),
            `backup_count` (default 5).

    Returns:
        The "homefinder" logger
    """
    settings = settings or {}
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    level = _resolve_level(settings.get('level'))
    logger.setLevel(level if level is not None else logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    logger.addHandler(console)

    log_file = settings.get('file')
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=int(settings.get('max_size_mb', 10)) * 1024 * 1024,
            backupCount=int(settings.get('backup_count', 5)),
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if level is None:
        logger.warning(f"Unknown log level {settings.get('level')!r}, using INFO")

    return logger
