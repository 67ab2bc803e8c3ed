"""
Unit tests for logging setup.
"""

import logging

import pytest

from mirror_flip.errors import ConfigError
from mirror_flip.utils.logging import resolve_level, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    pil_level = logging.getLogger("PIL").level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("PIL").setLevel(pil_level)


class TestResolveLevel:
    @pytest.mark.parametrize("name, expected", [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (" Error ", logging.ERROR),
        (logging.INFO, logging.INFO),
    ])
    def test_known_levels(self, name, expected):
        assert resolve_level(name) == expected

    def test_unknown_level(self):
        with pytest.raises(ConfigError):
            resolve_level("LOUD")


class TestSetupLogging:
    def test_level_from_name(self, restore_root_logger):
        root = setup_logging("debug")
        assert root is restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert logging.getLogger("PIL").level == logging.INFO

    def test_writes_to_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "mirror-flip.log"
        root = setup_logging("INFO", str(log_file))
        assert len(root.handlers) == 2

        logging.getLogger("mirror_flip.test").info("Rendered Below")
        logging.getLogger("mirror_flip.test").debug("hidden at INFO")
        for handler in root.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "mirror_flip.test - INFO - Rendered Below" in text
        assert "hidden at INFO" not in text

    def test_replaces_previous_handlers(self, restore_root_logger, tmp_path):
        setup_logging(logging.INFO, tmp_path / "first.log")
        root = setup_logging(logging.WARNING)
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING

    def test_unknown_level_from_config(self, restore_root_logger):
        with pytest.raises(ConfigError):
            setup_logging("chatty")
