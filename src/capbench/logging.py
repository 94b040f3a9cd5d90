"""Console and file logging for benchmark runs."""

from __future__ import annotations

from pathlib import Path
import logging
import os
from logging.config import dictConfig
from typing import Any

__all__ = ["setup_logging"]

LOG_DIR = Path("logs")
LOG_FILE_NAME = "capbench.log"

# AWS SDK loggers are chatty at DEBUG and would drown the capacity report.
NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


class BenchmarkFormatter(logging.Formatter):
    """Formatter with fixed-width level labels and short logger names."""

    LEVEL_ALIASES = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO ",
        logging.WARNING: "WARN ",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRIT ",
    }

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        record.level_label = self.LEVEL_ALIASES.get(record.levelno, record.levelname)
        record.clean_name = record.name.split(".")[-1]
        return super().format(record)


def setup_logging(
    level: str | int | None = None,
    log_directory: str | Path | None = LOG_DIR,
) -> None:
    """Configure console logging and, unless ``log_directory`` is None, a rotating log file."""

    effective_level = _normalize_level(level or os.getenv("LOG_LEVEL") or "INFO")

    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "level": effective_level,
        },
    }
    if log_directory is not None:
        log_dir = Path(log_directory)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_dir / LOG_FILE_NAME),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 2,
            "encoding": "utf-8",
            "formatter": "file",
            "level": "DEBUG",
        }

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "()": "capbench.logging.BenchmarkFormatter",
                    "format": "%(asctime)s | %(level_label)s | %(clean_name)s | %(message)s",
                },
                "file": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
                },
            },
            "handlers": handlers,
            "loggers": {name: {"level": "WARNING"} for name in NOISY_LOGGERS},
            "root": {
                "handlers": list(handlers),
                "level": effective_level,
            },
        }
    )


def _normalize_level(level: str | int) -> int:
    """Return a valid logging level for numeric or string inputs."""

    if isinstance(level, int):
        return level

    normalized = logging.getLevelName(str(level).upper())
    if isinstance(normalized, int):
        return normalized

    raise ValueError(f"Unsupported logging level: {level!r}")
