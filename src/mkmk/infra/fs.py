from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and whole-file output helpers shared by the CLI and the
logging subsystem.
"""

import os
import tempfile
from typing import Optional

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and '~'. Reverts to fallback if the input
    is empty.

    Args:
        path: Raw input path string.
        fallback: Path used when `path` is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def ensure_parent_dir(path: str) -> None:
    """Create the parent directory hierarchy of a target file."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)


# -----------------------------------------------------------------------------
# OUTPUT API
# -----------------------------------------------------------------------------

def write_text_atomic(path: str, text: str) -> None:
    """
    Replace `path` with `text` in one step.

    The content is written to a temporary sibling first, so readers (and make)
    never observe a truncated file.

    Args:
        path: Destination file.
        text: Complete file content.
    """
    ensure_parent_dir(path)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".mkmk-", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
