"""Unit tests for the package logging setup (logging_config.py)."""

import logging

import pytest

from fuzzy_segment.logging_config import DEBUG_ENV, LOG_FILE_ENV, level_from_env, setup_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(DEBUG_ENV, raising=False)
    monkeypatch.delenv(LOG_FILE_ENV, raising=False)


class TestLevelFromEnv:

    def test_unset_is_info(self):
        assert level_from_env() == logging.INFO

    @pytest.mark.parametrize("value", ["1", "true", "yes", "on"])
    def test_set_is_debug(self, monkeypatch, value):
        monkeypatch.setenv(DEBUG_ENV, value)
        assert level_from_env() == logging.DEBUG

    @pytest.mark.parametrize("value", ["", "0", "false", "No"])
    def test_off_values(self, monkeypatch, value):
        monkeypatch.setenv(DEBUG_ENV, value)
        assert level_from_env() == logging.INFO


class TestSetupLogging:

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv(DEBUG_ENV, "1")
        logger = setup_logging()
        assert logger.name == "fuzzy_segment"
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv(DEBUG_ENV, "1")
        assert setup_logging(logging.WARNING).level == logging.WARNING

    def test_repeated_calls_do_not_stack_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file_from_env(self, monkeypatch, tmp_path):
        path = tmp_path / "run.log"
        monkeypatch.setenv(LOG_FILE_ENV, str(path))
        logger = setup_logging(logging.INFO)
        assert len(logger.handlers) == 2
        logging.getLogger("fuzzy_segment.core").info("found %d contours", 3)
        for handler in logger.handlers:
            handler.flush()
        assert "fuzzy_segment.core - INFO - found 3 contours" in path.read_text(encoding="utf-8")
