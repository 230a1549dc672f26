from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, forced re-configuration and log file rotation.
"""

import logging
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from gotracer.infra.logging import (
    LoggingConfig,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_logger,
    shutdown_logging,
)


def _our_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    first = _our_handlers()
    configure_logging(cfg)

    assert len(first) == 1
    assert isinstance(first[0], QueueHandler)
    assert _our_handlers() == first


def test_force_reinstalls_handlers() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    old_listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)
    root = logging.getLogger()

    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not old_listener
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)


def test_log_file_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    get_logger("gotracer.test").info("hello from the pipeline")
    shutdown_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO | gotracer.test | hello from the pipeline" in content


def test_log_file_rotation(tmp_path: Path) -> None:
    log_file = tmp_path / "rotate.log"
    configure_logging(LoggingConfig(
        level="INFO",
        console=False,
        log_file=str(log_file),
        max_bytes=200,
        backup_count=2,
    ))

    logger = get_logger("gotracer.rotation")
    for i in range(50):
        logger.info(f"record number {i} with some padding text")
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "rotate.log.1").exists()
    assert not (tmp_path / "rotate.log.3").exists()


def test_shutdown_detaches_handlers() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    shutdown_logging()

    assert _our_handlers() == []
    assert getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR) is None


def test_no_sinks_installs_nothing() -> None:
    configure_logging(LoggingConfig(console=False, log_file=None))

    assert _our_handlers() == []


def test_cli_settings_route_debug_records_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "debug.log"
    cfg = LoggingConfig.for_cli(debug=True, log_file=str(log_file))

    assert cfg.level == "DEBUG"
    assert cfg.console is True
    assert LoggingConfig.for_cli(debug=False).level == "INFO"

    configure_logging(LoggingConfig(level=cfg.level, console=False, log_file=cfg.log_file))
    get_logger("gotracer.core").debug("fragment validated")
    shutdown_logging()

    assert "DEBUG | gotracer.core | fragment validated" in log_file.read_text(encoding="utf-8")
