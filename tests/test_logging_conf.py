"""
Logging Configuration Tests - Unit Tests for Handler Setup

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- assetwatch.shared.logging_conf (setup_logging for testing)
- pytest (testing framework)
"""
import logging  # Root logger inspection
from logging.handlers import RotatingFileHandler  # Expected file handler type

import pytest  # Testing framework for writing and running tests

from assetwatch.shared.logging_conf import setup_logging  # Function to test


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_log_dir_writes_assetwatch_log(self, tmp_path):
        setup_logging(log_dir=tmp_path / "logs", log_to_stdout=False, max_bytes=1024, backup_count=2)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert handlers[0].maxBytes == 1024
        assert handlers[0].backupCount == 2

        logging.getLogger("assetwatch.test").info("rates refreshed")
        handlers[0].flush()
        text = (tmp_path / "logs" / "assetwatch.log").read_text(encoding="utf-8")
        assert "INFO assetwatch.test :: rates refreshed" in text

    def test_stdout_and_file(self, tmp_path):
        setup_logging(log_file=tmp_path / "app.log", log_to_stdout=True)

        kinds = {type(h) for h in logging.getLogger().handlers}
        assert kinds == {logging.StreamHandler, RotatingFileHandler}

    def test_falls_back_to_stdout(self):
        setup_logging(log_to_stdout=False)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert type(handlers[0]) is logging.StreamHandler

    def test_env_switch(self, monkeypatch):
        monkeypatch.setenv("ASSETWATCH_LOG_STDOUT", "false")
        setup_logging(level=logging.DEBUG)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        # stdout disabled by env and no file configured: fallback handler only
        assert len(root.handlers) == 1
