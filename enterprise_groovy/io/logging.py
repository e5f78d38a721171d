"""Logging utilities for Enterprise Groovy.

Provides timestamped file logging and YAML run records.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Tuple, Union

import yaml

PathLike = Union[str, Path]

LOGGER_NAME = "enterprise_groovy"


def get_timestamped_log_path(log_path: PathLike) -> Path:
    """Generate a timestamped log path from the base log path.

    Example: enforcement.log -> enforcement_20251209_080530.log
    """
    log_path = Path(log_path)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    stem = log_path.stem
    suffix = log_path.suffix or ".log"
    return log_path.parent / f"{stem}_{timestamp}{suffix}"


def get_logger(
    log_path: PathLike,
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    timestamped: bool = True,
) -> Tuple[logging.Logger, Path]:
    """Attach a file handler to the package logger.

    Records from every ``enterprise_groovy.*`` module logger propagate to it.

    Parameters
    ----------
    log_path : PathLike
        Base path for log file.
    name : str
        Logger name (default: the package logger).
    level : int
        Logging level (default: INFO).
    timestamped : bool
        If True, add timestamp to filename to preserve previous logs.
        If False, overwrite existing log file.

    Returns
    -------
    Tuple[logging.Logger, Path]
        Tuple of (logger, actual_log_path).
    """
    log_path = Path(log_path)

    if timestamped:
        actual_log_path = get_timestamped_log_path(log_path)
    else:
        actual_log_path = log_path
        actual_log_path.unlink(missing_ok=True)

    actual_log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler):
            logger.removeHandler(handler)
            handler.close()
    handler = logging.FileHandler(actual_log_path, mode="a", encoding="utf-8")
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger, actual_log_path


def log_yaml(logger: logging.Logger, record: dict[str, Any]) -> None:
    """Log a dictionary as a YAML document."""
    yaml_text = yaml.safe_dump(record, sort_keys=False).rstrip("\n")
    logger.info("%s", f"{yaml_text}\n---")
