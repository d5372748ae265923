from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Installs a last-resort exception hook and delegates to the CLI controller.
Anything that escapes the controller is a defect in mkmk and exits with the
internal-error status.
"""

import logging
import os
import sys
import traceback
from typing import Any

# -----------------------------------------------------------------------------
# ENVIRONMENT INITIALIZATION
# -----------------------------------------------------------------------------

# Allow running this file directly from a source checkout.
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if not getattr(sys, "frozen", False):
    SRC_DIR = os.path.dirname(BASE_DIR)
    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)

EXIT_INTERNAL_ERROR = 1


# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Report an unhandled exception and terminate with the internal-error status.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    logging.getLogger("mkmk.supervisor").critical(f"Unhandled exception: {value}")

    print(f"Internal Error: {value}", file=sys.stderr)
    print(stack_trace, file=sys.stderr)
    sys.exit(EXIT_INTERNAL_ERROR)


sys.excepthook = global_exception_handler


# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """
    Run the CLI and return its exit status.

    Returns:
        int: Process exit code.
    """
    from mkmk.interface.cli.app import main as cli_main

    try:
        return cli_main()
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return EXIT_INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
