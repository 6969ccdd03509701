"""
Test that lingua_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from lingua_logging and use the logger."""
    from backend_lingua.lingua_logging import get_logger, short_wallet

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "exception")
    logger.info("test_message", key="value")
    assert short_wallet("0x1111111111111111111111111111111111111111") == "0x11111111111111..."
    assert short_wallet(None) == ""


def test_bind_wallet_tags_every_line():
    from structlog.testing import capture_logs

    from backend_lingua.lingua_logging import bind_wallet

    with capture_logs() as logs:
        log = bind_wallet("0x2222222222222222222222222222222222222222", "tests")
        log.info("first")
        log.warning("second", extra=1)
    assert [e["event"] for e in logs] == ["first", "second"]
    assert all(e["wallet"] == "0x22222222222222..." for e in logs)
    assert all(e["logger"] == "tests" for e in logs)
