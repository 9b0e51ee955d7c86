# File: shout/errors.py
"""shout.errors: Исключения, которые логгер пробрасывает вызывающему коду."""

from __future__ import annotations

__all__ = ["ShoutError", "InvalidConfigError", "IOFaultError", "LineFormatError"]


class ShoutError(Exception):
    """Базовое исключение пакета shout."""


class InvalidConfigError(ShoutError, ValueError):
    """Недопустимое значение конфигурации (режим записи, уровень, интервал)."""


class IOFaultError(ShoutError, OSError):
    """Не удалось открыть назначение логов для записи."""


class LineFormatError(ShoutError, ValueError):
    """Шаблон строки или пути не может быть подставлен."""
