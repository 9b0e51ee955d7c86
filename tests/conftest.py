# File: tests/conftest.py
import logging
import time
from pathlib import Path

import pytest

from shout.config import ShoutConfig


class FakeClock:
    """Управляемая замена time.time()."""

    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingHandle:
    """Handle, который принимает не больше *chunk* байт за вызов (None - всё)."""

    def __init__(self, chunk=None, path: str = "recording") -> None:
        self.path = path
        self.mode = "a"
        self.chunk = chunk
        self.data = bytearray()
        self.closed = False

    def write(self, data: bytes) -> int:
        n = len(data) if self.chunk is None else min(self.chunk, len(data))
        self.data += data[:n]
        return n

    def set_blocking(self, blocking: bool) -> None:
        pass

    def close(self) -> None:
        self.closed = True


class FailingHandle(RecordingHandle):
    """Handle, запись в который всегда завершается ошибкой *exc_type*."""

    def __init__(self, exc_type=OSError) -> None:
        super().__init__(path="failing")
        self.exc_type = exc_type
        self.attempts = 0

    def write(self, data: bytes) -> int:
        self.attempts += 1
        raise self.exc_type("write failed")


@pytest.fixture()
def clock(monkeypatch) -> FakeClock:
    """
    Freeze time.time() at a fixed moment; tests move it with clock.advance().
    """
    fake = FakeClock(1_700_000_000.0)
    monkeypatch.setattr(time, "time", fake)
    return fake


@pytest.fixture()
def log_file(tmp_path) -> Path:
    return tmp_path / "app.log"


@pytest.fixture()
def message_only() -> ShoutConfig:
    """
    Config whose lines contain only the message and a newline.
    """
    return ShoutConfig(line_format="%3$s\n")


@pytest.fixture(autouse=True)
def reset_diagnostics():
    """CLI tests attach handlers to the 'shout' logger; restore the library default."""
    yield
    lg = logging.getLogger("shout")
    for handler in lg.handlers:
        handler.close()
    lg.handlers.clear()
    lg.addHandler(logging.NullHandler())
    lg.setLevel(logging.NOTSET)
    lg.propagate = True


@pytest.fixture()
def recording_handle():
    """Factory for in-memory handles: recording_handle(chunk=3)."""
    return RecordingHandle


@pytest.fixture()
def failing_handle():
    """Factory for handles that refuse every write: failing_handle(BlockingIOError)."""
    return FailingHandle
