from __future__ import annotations

"""
Build Configuration Domain Management.

Holds the per-project constants that shape generated rules (extensions,
shell commands, path prefixes, preamble) and their JSON persistence.
A configuration is built once at startup and passed explicitly to every
consumer.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from mkmk.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_CONFIG_NAME = "mkmk.json"
CONFIG_ENV_VAR = "MKMK_CONFIG"

DEFAULT_PREAMBLE = (
    "PREFIX = $(shell git rev-parse --show-toplevel)\n"
    "SRCDIR = $(PREFIX)/src\n"
    "OBJDIR = $(PREFIX)/var/obj\n"
    "CXX = clang++\n"
    "CPPFLAGS = -I$(SRCDIR)\n"
    "CXXFLAGS = -std=c++1y -pedantic -Wall -stdlib=libc++\n"
    "LDFLAGS = -lc++\n"
    "MKDIR = mkdir -p\n"
    "RMDIR = rm -rf\n"
)


# -----------------------------------------------------------------------------
# Configuration Model
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class BuildConfig:
    """
    Immutable record of project-specific generation settings.

    Attributes:
        path_separator: Separator used in source names, typically '/'.
        preamble: Text printed verbatim at the top of the makefile.
        indent_width: Spaces per continuation line.
        corpus_ext: Extension of body source files, e.g. '.cpp'.
        header_ext: Extension of header source files, e.g. '.hpp'.
        object_ext: Extension of object files, e.g. '.o'.
        linked_ext: Extension of executables, e.g. '' or '.exe'.
        compile_command: Shell command building an object from sources.
        link_command: Shell command building a program from objects.
        source_prefix: Prepended to source dependency paths.
        object_prefix: Prepended to target paths.
    """
    path_separator: str = "/"

    preamble: str = DEFAULT_PREAMBLE
    indent_width: int = 4

    corpus_ext: str = ".cpp"
    header_ext: str = ".hpp"
    object_ext: str = ".o"
    linked_ext: str = ""

    compile_command: str = "$(CXX) -o $@ $(CPPFLAGS) $(CXXFLAGS) -c $<"
    link_command: str = "$(CXX) -o $@ $^ $(LDFLAGS)"

    source_prefix: str = "$(SRCDIR)/"
    object_prefix: str = "$(OBJDIR)/"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration in dictionary form.

    Returns:
        Dict[str, Any]: Default values for every BuildConfig field.
    """
    return BuildConfig().to_dict()


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def resolve_config_path(explicit: Optional[str] = None) -> Optional[str]:
    """
    Locate the configuration file to load, if any.

    Lookup order: the explicit path, the MKMK_CONFIG environment variable,
    then 'mkmk.json' in the working directory.

    Args:
        explicit: Path given on the command line.

    Returns:
        Optional[str]: Path to load, or None to use defaults.
    """
    if explicit:
        return explicit

    from_env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if from_env:
        return from_env

    local = os.path.join(os.getcwd(), DEFAULT_CONFIG_NAME)
    if os.path.isfile(local):
        return local
    return None


def load_config(path: Optional[str]) -> Dict[str, Any]:
    """
    Load raw configuration values from a JSON file.

    Values are returned unvalidated; missing keys are filled from defaults.

    Args:
        path: JSON file to read, or None for defaults only.

    Returns:
        Dict[str, Any]: Defaults updated with the file's contents.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object.
    """
    config = get_default_config()
    if not path:
        logger.debug("No configuration file. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"cannot read configuration '{path}': {e.strerror or e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"invalid configuration '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"configuration '{path}' must contain a JSON object")

    logger.debug(f"Configuration loaded from {path}")
    config.update(data)
    return config


def save_config(config: BuildConfig, path: str) -> None:
    """
    Persist a configuration as JSON.

    Args:
        config: The configuration to write.
        path: Destination file.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, ensure_ascii=False, indent=4)
    logger.debug(f"Configuration saved to {path}")
