# shout/buffer.py
"""
Write buffer for non-blocking destinations: keeps the bytes the handle has
not accepted yet and retries them on every subsequent write or flush.
"""
from __future__ import annotations

from typing import Optional, Protocol

from shout.logger import logger


class Writable(Protocol):
    path: str

    def write(self, data: bytes) -> int: ...


class WriteBuffer:
    """Pending bytes awaiting a non-blocking write."""

    def __init__(self) -> None:
        self._pending = bytearray()
        self.last_error: Optional[Exception] = None

    @property
    def pending(self) -> bytes:
        return bytes(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def append(self, handle: Optional[Writable], data: bytes) -> int:
        """Queue *data* and try to push the whole buffer once; returns bytes written."""
        self._pending.extend(data)
        return self._attempt(handle)

    def flush(self, handle: Optional[Writable]) -> bool:
        """One more write attempt; True when nothing is left pending."""
        if self._pending:
            self._attempt(handle)
        return not self._pending

    def drain(self, handle: Optional[Writable]) -> None:
        """Busy-wait until the buffer is empty.

        A handle that fails with anything other than would-block will never
        accept the bytes, so they are dropped instead of spinning forever.
        """
        while not self.flush(handle):
            if self.last_error is not None or handle is None:
                logger.warning(
                    "Dropping %d pending bytes for %s: %s",
                    len(self._pending),
                    getattr(handle, "path", None),
                    self.last_error or "no open destination",
                )
                self.clear()
                return

    def clear(self) -> None:
        self._pending.clear()

    def _attempt(self, handle: Optional[Writable]) -> int:
        self.last_error = None
        if handle is None or not self._pending:
            return 0
        try:
            written = handle.write(bytes(self._pending))
        except BlockingIOError:
            written = 0
        except (OSError, ValueError) as exc:
            self.last_error = exc
            logger.debug("Write to %s failed: %s", handle.path, exc)
            written = 0
        del self._pending[:written]
        return written
