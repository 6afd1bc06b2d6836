"""Loggers configured by environment."""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

from .config import ENV_LOCAL, ENV_PROD

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "ERROR",
}


def _timestamp(record: logging.LogRecord) -> str:
    import datetime

    return datetime.datetime.fromtimestamp(record.created).astimezone().isoformat()


class _TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        return f"time={_timestamp(record)} level={_LEVEL_NAMES.get(record.levelno, record.levelname)} msg={json.dumps(message) if ' ' in message else message}"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "time": _timestamp(record),
                "level": _LEVEL_NAMES.get(record.levelno, record.levelname),
                "msg": record.getMessage(),
            }
        )


def new_logger(env: str, stream: TextIO | None = None) -> logging.Logger | None:
    """Return a text debug logger for local, a JSON info logger for prod, else None."""
    if env == ENV_LOCAL:
        formatter: logging.Formatter = _TextFormatter()
        level = logging.DEBUG
    elif env == ENV_PROD:
        formatter = _JsonFormatter()
        level = logging.INFO
    else:
        return None

    logger = logging.getLogger(f"patients_service.{env}")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger