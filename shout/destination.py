# shout/destination.py
"""
Destination management: resolves the destination template, opens it in the
configured write mode and replaces the handle on rotation or retargeting.
"""
from __future__ import annotations

import os
import sys
import time
from typing import Callable, Dict, Optional, TextIO, Union

from shout.config import STDERR, STDOUT, ShoutConfig, WriteMode, parse_write_mode, update_config
from shout.errors import IOFaultError
from shout.formatter import format_timestamp, interpolate
from shout.logger import logger

_FLAGS: Dict[WriteMode, int] = {
    WriteMode.READ_WRITE: os.O_RDWR,
    WriteMode.OVERWRITE: os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    WriteMode.READ_WRITE_TRUNCATE: os.O_RDWR | os.O_CREAT | os.O_TRUNC,
    WriteMode.APPEND: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    WriteMode.READ_APPEND: os.O_RDWR | os.O_CREAT | os.O_APPEND,
    WriteMode.EXCLUSIVE: os.O_WRONLY | os.O_CREAT | os.O_EXCL,
    WriteMode.EXCLUSIVE_READ_WRITE: os.O_RDWR | os.O_CREAT | os.O_EXCL,
    WriteMode.CREATE: os.O_WRONLY | os.O_CREAT,
    WriteMode.CREATE_READ_WRITE: os.O_RDWR | os.O_CREAT,
}

# resolved lazily so that redirected/captured streams are honoured
_STREAMS: Dict[str, Callable[[], TextIO]] = {
    STDOUT: lambda: sys.stdout,
    STDERR: lambda: sys.stderr,
}


class FileHandle:
    """Raw file descriptor opened with ``os.open``; writes may be partial."""

    def __init__(self, path: str, mode: WriteMode, fd: int) -> None:
        self.path = path
        self.mode = mode
        self.fd = fd
        self.closed = False

    @classmethod
    def open(cls, path: str, mode: WriteMode) -> FileHandle:
        fd = os.open(path, _FLAGS[mode], 0o666)
        return cls(path, mode, fd)

    def write(self, data: bytes) -> int:
        """Write once; returns the number of bytes accepted.

        Raises BlockingIOError when a non-blocking descriptor is full.
        """
        return os.write(self.fd, data)

    def set_blocking(self, blocking: bool) -> None:
        os.set_blocking(self.fd, blocking)

    def close(self) -> None:
        if not self.closed:
            self.closed = True
            os.close(self.fd)


class StreamHandle:
    """Standard output/error stream; never closed, only flushed."""

    encoding = "utf-8"

    def __init__(self, path: str, stream: TextIO, mode: WriteMode) -> None:
        self.path = path
        self.mode = mode
        self.stream = stream
        self.closed = False
        self._restore_blocking: Optional[bool] = None

    def _fileno(self) -> Optional[int]:
        try:
            return self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None

    def write(self, data: bytes) -> int:
        """Write once; returns the number of bytes accepted.

        Streams backed by a descriptor get the raw bytes, like FileHandle.
        Text-only streams (captured or in-memory) take the whole line or fail
        with IOFaultError.
        """
        fd = self._fileno()
        try:
            if fd is None:
                self.stream.write(data.decode(self.encoding, errors="replace"))
                self.stream.flush()
                return len(data)
            # text already buffered by the stream must go out first
            self.stream.flush()
            return os.write(fd, data)
        except BlockingIOError:
            if fd is None:
                raise IOFaultError(f"Stream {self.path} would block") from None
            return 0
        except (UnicodeError, ValueError) as exc:
            raise IOFaultError(f"Cannot write to {self.path}: {exc}") from exc

    def set_blocking(self, blocking: bool) -> None:
        fd = self._fileno()
        if fd is None:
            logger.debug("Stream %s has no descriptor, blocking flag ignored", self.path)
            return
        if self._restore_blocking is None:
            self._restore_blocking = os.get_blocking(fd)
        os.set_blocking(fd, blocking)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.stream.flush()
        except (OSError, ValueError) as exc:
            logger.debug("Flushing %s on close failed: %s", self.path, exc)
        finally:
            fd = self._fileno()
            if fd is not None and self._restore_blocking is not None:
                os.set_blocking(fd, self._restore_blocking)


Handle = Union[FileHandle, StreamHandle]
ModeT = Union[WriteMode, str, None]


class DestinationManager:
    """Owns the single live destination handle of a logger."""

    def __init__(self, config: ShoutConfig) -> None:
        self.config = config
        self.handle: Optional[Handle] = None

    def resolve(self, now: Optional[float] = None) -> str:
        """Concrete path for *now*: ``%1$s`` is the unix time, ``%2$s`` the date."""
        if now is None:
            now = time.time()
        return interpolate(
            self.config.destination,
            int(now),
            format_timestamp(now, self.config.datetime_format),
        )

    def open(self, template: Optional[str] = None, mode: ModeT = None) -> Handle:
        """Open *template* with *mode* (or the configured ones), replacing the current handle."""
        changes: Dict[str, object] = {}
        if mode is not None:
            changes["write_mode"] = parse_write_mode(mode)
        if template is not None:
            changes["destination"] = template
        if changes:
            update_config(self.config, **changes)

        self.close()
        return self._open()

    def retarget(self, template: Optional[str] = None, mode: ModeT = None) -> Handle:
        """Change destination and/or write mode; always reopens."""
        return self.open(template, mode)

    def rotate(self) -> Handle:
        """Close the current handle and reopen the re-resolved template."""
        self.close()
        handle = self._open()
        logger.info("Rotated log destination to %s", handle.path)
        return handle

    def set_blocking(self, blocking: bool) -> None:
        if self.handle is not None:
            self.handle.set_blocking(blocking)

    def close(self) -> None:
        if self.handle is None:
            return
        handle, self.handle = self.handle, None
        handle.close()
        logger.debug("Closed destination %s", handle.path)

    def _open(self) -> Handle:
        template = self.config.destination
        mode = self.config.write_mode
        path = self.resolve()

        handle: Handle
        if path in _STREAMS:
            handle = StreamHandle(path, _STREAMS[path](), mode)
        else:
            try:
                handle = FileHandle.open(path, mode)
            except OSError as exc:
                logger.error("Cannot open %s: %s", path, exc)
                raise IOFaultError(
                    f"Failed to open file {path} created from {template} "
                    f"expression (mode: {mode.value})"
                ) from exc

        if not self.config.blocking:
            handle.set_blocking(False)

        self.handle = handle
        logger.debug("Opened destination %s (mode: %s)", path, mode.value)
        return handle
