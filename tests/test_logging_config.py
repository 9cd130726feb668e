"""Tests for logging setup and the CLI entry point."""
import logging

import main
from partner_match.logging_config import setup_logging


def test_setup_logging_adds_console_and_file(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_file = tmp_path / "logs" / "partner_match.log"

    setup_logging(level="debug", log_file=str(log_file))
    try:
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert log_file.parent.is_dir()

        # Second call is a no-op
        setup_logging(level="ERROR")
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers:
            handler.close()


def test_setup_logging_keeps_host_handlers(monkeypatch):
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])
    monkeypatch.setattr(root, "level", logging.WARNING)

    setup_logging(level="DEBUG")
    assert root.handlers == [existing]
    assert root.level == logging.WARNING


def test_setup_logging_quiets_access_logs(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    access = logging.getLogger("uvicorn.access")
    monkeypatch.setattr(access, "level", logging.NOTSET)

    setup_logging(level="DEBUG")
    try:
        assert access.level == logging.WARNING
    finally:
        for handler in root.handlers:
            handler.close()


def test_parser_defaults():
    args = main.build_parser().parse_args([])
    assert isinstance(args.port, int)
    assert args.reload is False
    assert args.workers == 1
    assert args.log_level.upper() in ("DEBUG", "INFO", "WARNING", "ERROR")


def test_parser_overrides():
    args = main.build_parser().parse_args(
        ["--port", "9000", "--reload", "--log-level", "DEBUG", "--log-file", "x.log"]
    )
    assert args.port == 9000
    assert args.reload is True
    assert args.log_level == "DEBUG"
    assert args.log_file == "x.log"
