from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the validator.
"""

import argparse
from typing import Any, Dict, List

# Flags whose destination is named after a BuildConfig field
_OVERRIDE_FIELDS: List[str] = [
    "corpus_ext", "header_ext", "object_ext", "linked_ext",
    "source_prefix", "object_prefix", "compile_command", "link_command",
    "indent_width",
]

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the mkmk CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="mkmk",
        description="Generate a makefile from the include structure of C-family sources.",
    )

    p.add_argument(
        "roots",
        nargs="*",
        metavar="SOURCE",
        help="Root source files (e.g. every .cpp file of the project).",
    )

    # --- Paths ---
    p.add_argument(
        "-C", "--directory",
        dest="base_dir",
        default=None,
        help="Directory the source names are relative to (default: current directory).",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the makefile to this file instead of standard output.",
    )

    # --- Configuration sources ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (default: $MKMK_CONFIG, then ./mkmk.json).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore configuration files and start from built-in defaults.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        dest="save_config_path",
        default=None,
        help="Write the effective configuration to this JSON file and exit.",
    )

    # --- Configuration overrides ---
    p.add_argument("--corpus-ext", dest="corpus_ext", default=None,
                   help="Extension of body source files (default: .cpp).")
    p.add_argument("--header-ext", dest="header_ext", default=None,
                   help="Extension of header files (default: .hpp).")
    p.add_argument("--object-ext", dest="object_ext", default=None,
                   help="Extension of object files (default: .o).")
    p.add_argument("--linked-ext", dest="linked_ext", default=None,
                   help="Extension of executables (default: none).")
    p.add_argument("--source-prefix", dest="source_prefix", default=None,
                   help="Prefix of source paths in rules (default: $(SRCDIR)/).")
    p.add_argument("--object-prefix", dest="object_prefix", default=None,
                   help="Prefix of target paths in rules (default: $(OBJDIR)/).")
    p.add_argument("--compile-command", dest="compile_command", default=None,
                   help="Recipe of compile rules.")
    p.add_argument("--link-command", dest="link_command", default=None,
                   help="Recipe of link rules.")
    p.add_argument("--indent", dest="indent_width", type=int, default=None,
                   help="Spaces per continuation line (default: 4).")

    # --- Diagnostics ---
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Report progress on stderr.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write the log to this (rotating) file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Collect the configuration values given on the command line.

    Only flags that were actually passed appear in the result, so an
    explicit empty value (e.g. --linked-ext '') still overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: BuildConfig field overrides.
    """
    overrides: Dict[str, Any] = {}
    for field in _OVERRIDE_FIELDS:
        value = getattr(args, field, None)
        if value is not None:
            overrides[field] = value
    return overrides


def log_level(args: argparse.Namespace) -> str:
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    return "WARNING"
