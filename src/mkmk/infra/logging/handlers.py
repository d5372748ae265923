from __future__ import annotations

"""
Logging Handler Factories.

Builds the concrete handlers and tags them, so reconfiguration removes only
handlers this package installed and leaves library or test handlers alone.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from mkmk.infra.fs import ensure_parent_dir

_HANDLER_TAG_ATTR: str = "_mkmk_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.Handler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open a rotating log file.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None if the file
                                       cannot be opened (a warning goes to stderr).
    """
    try:
        ensure_parent_dir(log_file)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"mkmk: WARNING | cannot open log file '{log_file}': {e}\n")
        return None
    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
