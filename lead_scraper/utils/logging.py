"""
Logger factory shared by every module.

Log calls pass structured context through ``extra={...}``; the formatter
renders those fields as ``key=value`` pairs after the message.
"""

import logging
import sys

from lead_scraper.core.config import settings

# Attributes present on every LogRecord; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class ExtraFieldsFormatter(logging.Formatter):
    """Appends fields passed via `extra` to the formatted line."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        fields = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} | {fields}"


def setup_logger(name: str, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ExtraFieldsFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
