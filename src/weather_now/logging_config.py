# Project: weather-now
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
logging_config.py — Route weather-now log records to the console and a file.

Library code only ever calls logging.getLogger(__name__); this module is
used by the CLI to decide where those records end up:

  INFO and below  → stdout, bare message
  WARNING and up  → stderr, bare message
  everything      → rotating log file, timestamped
"""

import logging
import logging.handlers
import sys
from pathlib import Path

ROOT_LOGGER = "weather_now"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_LOG_BYTES = 1024 * 1024
BACKUP_COUNT = 3


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def setup_logging(level: str = "INFO", log_path: str | Path | None = None) -> logging.Logger:
    """Configure the weather_now logger. Safe to call more than once.

    Args:
        level: Console level name, e.g. 'INFO' or 'DEBUG'.
        log_path: Log file location. None or '' disables file logging.

    Returns:
        The configured 'weather_now' logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_level = getattr(logging, level.upper(), logging.INFO)
    plain = logging.Formatter("%(message)s")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(console_level)
    stdout_handler.addFilter(_BelowWarning())
    stdout_handler.setFormatter(plain)
    logger.addHandler(stdout_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(max(console_level, logging.WARNING))
    stderr_handler.setFormatter(plain)
    logger.addHandler(stderr_handler)

    if log_path:
        try:
            path = Path(log_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                path, maxBytes=MAX_LOG_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
            )
        except OSError as e:
            logger.warning("[log] Cannot write log file %s: %s", log_path, e)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)

    return logger
