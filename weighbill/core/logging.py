# weighbill/core/logging.py
from __future__ import annotations

import logging
import sys

from weighbill.core.config import settings

_CONFIGURED = False


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package logger.
    Safe to call more than once.
    """
    global _CONFIGURED

    logger = logging.getLogger("weighbill")
    logger.setLevel((level or settings.LOG_LEVEL or "INFO").upper())

    if _CONFIGURED:
        return logger

    # Console handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(
        logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s",
                          datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(ch)

    # File handler
    path = log_file if log_file is not None else settings.LOG_FILE
    if path:
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            ))
        logger.addHandler(fh)

    _CONFIGURED = True
    return logger
