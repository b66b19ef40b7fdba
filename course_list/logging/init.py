from __future__ import annotations

import logging
import sys

"""Application logger for the course list CLI.

Output format is one "LABEL message" line per record on stdout, LABEL being
INFO|WARN|ERROR|SUMMARY (DEBUG with --debug). Modules log through
logging.getLogger(__name__); their records propagate into the "course_list"
logger configured here, which itself does not propagate to root.
"""

__all__ = [
    "setup_logging",
    "enable_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
]

LOGGER_NAME = "course_list"

# INFO(20) < SUMMARY < WARNING(30)
SUMMARY_LEVEL = 25

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formats records as: LABEL message (WARNING is shortened to WARN)."""

    LABELS = {
        logging.WARNING: "WARN",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno, record.levelname)
        line = f"{label} {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the "course_list" logger once and return it.

    Later calls return the same logger untouched (level included); use
    enable_debug() to lower the level afterwards.
    """
    global _configured

    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # handlers left over from a previous reset_logging()
    for old in logger.handlers[:]:
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    _configured = logger
    return logger


def enable_debug() -> logging.Logger:
    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)
    return logger


def get_logger() -> logging.Logger:
    return _configured if _configured is not None else setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger (tests re-run setup against a fresh stdout)."""
    global _configured
    _configured = None
