"""
Tests for observability — logging setup and level resolution.
"""

import logging
from pathlib import Path

import pytest

from nfinstall.core.observability.logging_config import (
    _console_format,
    _parse_level,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _drop_installed_handlers():
    """Remove and close the handlers setup_logging attaches to the root logger."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


class TestResolveLevel:
    def test_default(self):
        assert resolve_level() == "WARNING"

    def test_env(self):
        assert resolve_level(env_level="INFO") == "INFO"

    def test_flags_beat_env(self):
        assert resolve_level(quiet=True, env_level="DEBUG") == "ERROR"
        assert resolve_level(verbose=True, env_level="ERROR") == "INFO"

    def test_debug_beats_everything(self):
        assert resolve_level(debug=True, verbose=True, quiet=True) == "DEBUG"


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_garbage_is_warning(self):
        assert _parse_level("loud") == logging.WARNING
        assert _parse_level(None) == logging.WARNING


class TestSetupLogging:
    def test_single_console_handler(self):
        setup_logging("INFO")
        setup_logging("INFO")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.INFO

    def test_file_appends(self, tmp_path: Path):
        log = tmp_path / "install.log"
        log.write_text("earlier run\n")

        setup_logging("WARNING", log_file=str(log), log_file_level="DEBUG")
        logging.getLogger("nfinstall.test").debug("detail for the file")
        for h in logging.getLogger().handlers:
            h.flush()

        text = log.read_text()
        assert text.startswith("earlier run\n")
        assert "detail for the file" in text
        assert logging.getLogger().level == logging.DEBUG

    def test_unopenable_file_is_skipped(self, tmp_path: Path, capsys):
        setup_logging("WARNING", log_file=str(tmp_path / "missing-dir" / "x.log"))
        assert len(logging.getLogger().handlers) == 1
        assert "Cannot open log file" in capsys.readouterr().err

    def test_console_format_by_level(self):
        assert _console_format(logging.WARNING) == ("%(message)s", None)
        assert "[%(name)s]" in _console_format(logging.INFO)[0]
        assert "%(lineno)d" in _console_format(logging.DEBUG)[0]
