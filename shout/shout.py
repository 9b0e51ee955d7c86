# File: shout/shout.py
"""shout.shout: Фасад логгера – фильтрация по уровню, ротация, форматирование и запись."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from shout.buffer import WriteBuffer
from shout.config import ShoutConfig, WriteMode, load_config, parse_write_mode, update_config
from shout.destination import DestinationManager, Handle
from shout.formatter import LineFormatter
from shout.levels import Level, LevelTable, Priority
from shout.logger import logger

__all__ = ["Shout"]

Context = Optional[Mapping[str, Any]]


class Shout:
    """Простой и лёгкий логгер с ротацией и неблокирующей записью.

    Пример::

        with Shout("app-%1$s.log", "w") as log:
            log.info("Hello world")
            log.log("paranoia", "Aaaa!!!", {"user": "bob"})
    """

    ROTATION_MESSAGE = "Rotating log file..."

    def __init__(
        self,
        destination: Optional[str] = None,
        mode: Union[WriteMode, str, None] = None,
        *,
        config: Optional[ShoutConfig] = None,
    ) -> None:
        """Открывает назначение; ошибки открытия пробрасываются вызывающему."""
        self.config = config.model_copy(deep=True) if config is not None else ShoutConfig()
        self.last_rotation = int(time.time())
        self.destination = DestinationManager(self.config)
        self.formatter = LineFormatter(self.config)
        self.buffer = WriteBuffer()
        self._closed = False
        self.destination.open(destination, mode)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> Shout:
        """Создаёт логгер по YAML/JSON-конфигу."""
        return cls(config=load_config(path))

    # ------------------------------------------------------------------ #
    # State                                                              #
    # ------------------------------------------------------------------ #

    @property
    def levels(self) -> LevelTable:
        return LevelTable(self.config.level_priorities)

    @property
    def handle(self) -> Optional[Handle]:
        return self.destination.handle

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------ #
    # Logging                                                            #
    # ------------------------------------------------------------------ #

    def log(self, level: str, message: Any, context: Context = None) -> None:
        """Записывает сообщение произвольного уровня.

        Уровень без зарегистрированного приоритета всегда проходит фильтр.
        Ошибки записи не пробрасываются; ошибки шаблона строки - пробрасываются.
        """
        self._emit(level, message, context, allow_rotation=True)

    def emergency(self, message: Any, context: Context = None) -> None:
        self.log(Level.EMERGENCY, message, context)

    def alert(self, message: Any, context: Context = None) -> None:
        self.log(Level.ALERT, message, context)

    def critical(self, message: Any, context: Context = None) -> None:
        self.log(Level.CRITICAL, message, context)

    def error(self, message: Any, context: Context = None) -> None:
        self.log(Level.ERROR, message, context)

    def warning(self, message: Any, context: Context = None) -> None:
        self.log(Level.WARNING, message, context)

    def notice(self, message: Any, context: Context = None) -> None:
        self.log(Level.NOTICE, message, context)

    def info(self, message: Any, context: Context = None) -> None:
        self.log(Level.INFO, message, context)

    def debug(self, message: Any, context: Context = None) -> None:
        self.log(Level.DEBUG, message, context)

    def rotate(self, reset_timer: bool = True) -> None:
        """Ротация назначения.

        Сообщение о ротации пишется ещё в старый файл, затем файл закрывается
        и шаблон назначения разрешается заново.
        """
        self._drain()
        if reset_timer:
            self.last_rotation = int(time.time())

        self._emit(Level.INFO, self.ROTATION_MESSAGE, None, allow_rotation=False)
        self._drain()
        self.destination.rotate()

    def flush(self) -> bool:
        """Ещё одна попытка записать буфер; True, если буфер пуст."""
        return self.buffer.flush(self.destination.handle)

    def close(self) -> None:
        """Дописывает буфер (в неблокирующем режиме) и закрывает назначение."""
        if self._closed:
            return
        self._drain()
        self.destination.close()
        self._closed = True

    def __enter__(self) -> Shout:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Configuration setters                                              #
    # ------------------------------------------------------------------ #

    def set_destination(self, destination: str) -> None:
        """Путь или поток; %1$s - unix-время, %2$s - дата. Файл открывается заново."""
        self._drain()
        self.destination.retarget(template=destination)

    def set_write_mode(self, mode: Union[WriteMode, str]) -> None:
        """Любой режим из WriteMode; файл открывается заново."""
        mode = parse_write_mode(mode)
        self._drain()
        self.destination.retarget(mode=mode)

    def set_blocking(self, blocking: bool) -> None:
        """Переключает блокирующую запись; при включении буфер дописывается."""
        blocking = bool(blocking)
        update_config(self.config, blocking=blocking)
        self.destination.set_blocking(blocking)
        if blocking:
            self.buffer.drain(self.destination.handle)

    def set_rotate(self, rotate: bool) -> None:
        update_config(self.config, rotate_enabled=bool(rotate))

    def set_rotation_interval(self, interval: int) -> None:
        """Интервал автоматической ротации в секундах (целое число)."""
        update_config(self.config, rotation_interval=interval)

    def set_line_format(self, line_format: str) -> None:
        update_config(self.config, line_format=line_format)

    def set_datetime_format(self, datetime_format: str) -> None:
        update_config(self.config, datetime_format=datetime_format)

    def set_maximum_log_level(self, level: Optional[Priority]) -> None:
        """Например, 1 пропускает только ALERT и EMERGENCY; None отключает фильтр."""
        update_config(self.config, maximum_log_level=level)

    def set_level_priority(self, level: str, priority: Priority) -> None:
        self.levels.set_priority(level, priority)

    # ------------------------------------------------------------------ #
    # Internals                                                          #
    # ------------------------------------------------------------------ #

    def _rotation_due(self) -> bool:
        elapsed = int(time.time()) - self.last_rotation
        return self.config.rotate_enabled and elapsed > self.config.rotation_interval

    def _emit(self, level: str, message: Any, context: Context, *, allow_rotation: bool) -> None:
        level = str(level).upper()
        if self.levels.is_suppressed(level, self.config.maximum_log_level):
            return

        if allow_rotation and self._rotation_due():
            self.rotate()

        line = self.formatter.format(level, message, context, time.time())
        self._write(line.encode("utf-8"))

    def _write(self, data: bytes) -> None:
        handle = self.destination.handle
        if not self.config.blocking:
            self.buffer.append(handle, data)
            return

        if handle is None:
            logger.debug("No open destination, log line dropped")
            return
        try:
            handle.write(data)
        except (OSError, ValueError) as exc:
            logger.debug("Log line dropped for %s: %s", handle.path, exc)

    def _drain(self) -> None:
        if not self.config.blocking:
            self.buffer.drain(self.destination.handle)
