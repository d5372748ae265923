from __future__ import annotations

"""
Logging Configuration Model.

Settings used to initialize the logging subsystem, plus the mapping of
level names accepted on the command line.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable logging setup.

    Attributes:
        level: Minimum severity captured.
        console: Emit records on stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size of one log segment before rotation.
        backup_count: Rotated segments kept.
        console_fmt: Record format on stderr.
        file_fmt: Record format in the log file.
        datefmt: Timestamp format for the log file.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "mkmk: %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
