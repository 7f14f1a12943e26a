import logging
from logging.handlers import RotatingFileHandler

import pytest
from rich.logging import RichHandler

from quotescroll.logging_config import setup_logging


@pytest.fixture(autouse=True)
def isolate_logging():
    """Restore the root logger after each test."""
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level

    yield

    for handler in root_logger.handlers[:]:
        if handler not in original_handlers:
            handler.close()
    root_logger.handlers[:] = original_handlers
    root_logger.setLevel(original_level)


def test_setup_logging_with_file(tmp_path):
    log_file = tmp_path / "logs" / "quotescroll.log"

    setup_logging(level="DEBUG", log_file=log_file)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert any(isinstance(h, RichHandler) for h in root_logger.handlers)
    file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert log_file.parent.is_dir()

    logging.getLogger("quotescroll.test").info("hello from the test")
    file_handlers[0].flush()
    assert "hello from the test" in log_file.read_text()


def test_setup_logging_console_only():
    setup_logging(level="WARNING", log_file=None)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.WARNING
    assert not any(isinstance(h, RotatingFileHandler) for h in root_logger.handlers)


def test_repeated_setup_does_not_duplicate_handlers(tmp_path):
    log_file = tmp_path / "quotescroll.log"

    setup_logging(log_file=log_file)
    setup_logging(log_file=log_file)

    root_logger = logging.getLogger()
    assert sum(isinstance(h, RichHandler) for h in root_logger.handlers) == 1
    assert sum(isinstance(h, RotatingFileHandler) for h in root_logger.handlers) == 1


def test_invalid_level_falls_back_to_info():
    setup_logging(level="NOPE", log_file=None)

    assert logging.getLogger().level == logging.INFO
