from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates one CLI run: logging bootstrap, configuration resolution
(defaults, JSON file, flag overrides), generation and output. Every failure
is reported here, once, as a message on stderr plus an exit status.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from mkmk.core.engine import generate_makefile
from mkmk.core.validator import validate_config
from mkmk.domain.config import BuildConfig, load_config, resolve_config_path, save_config
from mkmk.domain.errors import InternalError, MkmkError
from mkmk.infra.fs import normalize_path, write_text_atomic
from mkmk.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from mkmk.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INTERNAL_ERROR = 1
EXIT_USER_ERROR = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 on success, 2 for input or configuration errors, 1 for
             internal errors, 130 when interrupted.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        LoggingConfig(level=cli_args.log_level(args), console=True, log_file=args.log_file),
        force=True,
    )

    try:
        return _run(args)
    except MkmkError as e:
        logger.debug("Generation aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USER_ERROR
    except InternalError as e:
        logger.critical(f"Internal failure: {e}", exc_info=True)
        print(f"Internal Error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    config = _resolve_config(args)

    if args.dump_config:
        print(json.dumps(config.to_dict(), ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config_path:
        try:
            save_config(config, args.save_config_path)
        except OSError as e:
            raise MkmkError(f"cannot write configuration '{args.save_config_path}': {e}") from e
        logger.info(f"Configuration written to {args.save_config_path}")
        return EXIT_OK

    base_dir = normalize_path(args.base_dir, ".") if args.base_dir else ""
    result = generate_makefile(args.roots, config, base_dir=base_dir)

    if args.output_path:
        try:
            write_text_atomic(args.output_path, result.makefile)
        except OSError as e:
            raise MkmkError(f"cannot write output '{args.output_path}': {e}") from e
        logger.info(f"Makefile written to {args.output_path}")
    else:
        sys.stdout.write(result.makefile)
        sys.stdout.flush()

    return EXIT_OK

# -----------------------------------------------------------------------------
# CONFIGURATION RESOLUTION
# -----------------------------------------------------------------------------

def _resolve_config(args: Any) -> BuildConfig:
    """
    Merge defaults, the configuration file and command-line overrides.

    Raises:
        ConfigurationError: If the file is unreadable or the result is unusable.
    """
    path = None if args.use_defaults else resolve_config_path(args.config_path)
    raw: Dict[str, Any] = load_config(path)
    raw.update(cli_args.args_to_overrides(args))

    config, warnings = validate_config(raw, strict=False)
    for w in warnings:
        logger.warning(f"Configuration: {w}")
    return config

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
