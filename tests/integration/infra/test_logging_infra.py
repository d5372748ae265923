from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the queue-based setup, idempotency, teardown and the optional
rotating log file.
"""

import logging
from pathlib import Path

import pytest

from mkmk.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from mkmk.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from mkmk.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging():
    """Make sure each test starts and ends without our handlers."""
    shutdown_logging()
    yield
    shutdown_logging()


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_configuration_is_idempotent() -> None:
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    count = len(_our_handlers())
    configure_logging(cfg)

    assert count == 1
    assert len(_our_handlers()) == count


def test_force_replaces_handlers() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    first_listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first_listener
    assert len(_our_handlers()) == 1


def test_unknown_level_defaults_to_warning() -> None:
    configure_logging(LoggingConfig(level="chatty"))

    assert logging.getLogger().level == logging.WARNING


def test_shutdown_removes_handlers_and_flag() -> None:
    configure_logging(LoggingConfig())

    shutdown_logging()

    root = logging.getLogger()
    assert _our_handlers() == []
    assert not hasattr(root, _CONFIGURED_FLAG_ATTR)
    assert getattr(root, _QUEUE_LISTENER_ATTR, None) is None


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "mkmk.log"
    configure_logging(LoggingConfig(level="DEBUG", console=False, log_file=str(log_file)))

    get_logger("mkmk.test").info("graph closed")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO | mkmk.test | graph closed" in content


def test_no_handlers_requested_leaves_root_untouched() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))

    assert _our_handlers() == []
