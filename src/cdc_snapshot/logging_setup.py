from __future__ import annotations
import logging
import os
import sys

from cdc_snapshot.errors import ConfigError

_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class ColoredFormatter(logging.Formatter):
    COLORS = {
        'DEBUG': '\033[36m', 'INFO': '\033[32m', 'WARNING': '\033[33m',
        'ERROR': '\033[31m', 'CRITICAL': '\033[35m'
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname_colored = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ConfigError(
            f"Unknown log level {name!r} (LOG_LEVEL); "
            "use DEBUG, INFO, WARNING, ERROR or CRITICAL"
        )
    return level


def setup_logger(name: str = "cdc_snapshot", verbose: bool = False, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if verbose else resolve_level(level or _LEVEL))
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    if sys.stderr.isatty():
        fmt = "%(asctime)s | %(levelname_colored)s | %(name)s | %(message)s"
        handler.setFormatter(ColoredFormatter(fmt))
    else:
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
