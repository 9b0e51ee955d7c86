# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

from shout.logger import configure, init_logging, logger


def test_library_logger_is_silent_by_default():
    assert logger.name == "shout"
    assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)


def test_configure_stderr_only():
    lg = configure(level="INFO")
    assert lg is logger
    assert lg.level == logging.INFO
    assert lg.propagate is False
    assert [type(h) for h in lg.handlers] == [logging.StreamHandler]


def test_init_logging_writes_rotating_file(tmp_path):
    diag = tmp_path / "diag.log"
    lg = init_logging(level="DEBUG", log_file=diag)
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    lg.debug("destination opened")
    assert "DEBUG    | shout | destination opened" in diag.read_text(encoding="utf-8")


def test_replace_handlers_false_appends():
    configure(level="WARNING")
    lg = configure(level="WARNING", replace_handlers=False)
    assert len(lg.handlers) == 2
