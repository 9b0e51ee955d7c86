# File: shout/levels.py
"""shout.levels: Таблица уровней логирования и их числовых приоритетов.

Приоритеты соответствуют Table 2 (Syslog Message Severities) из RFC 5424:
чем меньше число, тем серьёзнее сообщение.

Ключи таблицы для самого тяжёлого уровня и для предупреждения короткие
(``EMERG``, ``WARN``), а методы :meth:`Shout.emergency` и :meth:`Shout.warning`
пишут полные имена ``EMERGENCY`` и ``WARNING``. Эти имена в таблице не
зарегистрированы и поэтому проходят любой фильтр, пока для них не задан
приоритет.
"""

from __future__ import annotations

from typing import Dict, Iterator, MutableMapping, Optional, Sequence, Union

__all__: Sequence[str] = ("Level", "Priority", "LevelTable", "standard_priorities")

Priority = Union[int, float]


class Level:
    """Имена уровней, которые пишут методы-сокращения Shout."""

    EMERGENCY = "EMERGENCY"
    ALERT = "ALERT"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    NOTICE = "NOTICE"
    INFO = "INFO"
    DEBUG = "DEBUG"

    # ключи стандартной таблицы, отличающиеся от имён выше
    EMERG = "EMERG"
    WARN = "WARN"


_STANDARD: Dict[str, int] = {
    Level.EMERG: 0,
    Level.ALERT: 1,
    Level.CRITICAL: 2,
    Level.ERROR: 3,
    Level.WARN: 4,
    Level.NOTICE: 5,
    Level.INFO: 6,
    Level.DEBUG: 7,
}


def standard_priorities() -> Dict[str, Priority]:
    """Возвращает новую копию стандартной таблицы приоритетов."""
    return dict(_STANDARD)


class LevelTable:
    """Отображение имя уровня -> приоритет, имена хранятся в верхнем регистре.

    Таблица может оборачивать внешний словарь (например, поле конфигурации),
    тогда изменения сразу видны владельцу словаря.
    """

    def __init__(self, priorities: Optional[MutableMapping[str, Priority]] = None) -> None:
        if priorities is None:
            priorities = standard_priorities()
        self._priorities = priorities

    def set_priority(self, level: str, priority: Priority) -> None:
        """Регистрирует или переопределяет приоритет уровня."""
        self._priorities[level.upper()] = priority

    def priority_of(self, level: str) -> Optional[Priority]:
        """Приоритет уровня или None, если уровень не зарегистрирован."""
        return self._priorities.get(level.upper())

    def is_suppressed(self, level: str, maximum: Optional[Priority]) -> bool:
        """True, если сообщение уровня *level* должно быть отброшено фильтром."""
        if maximum is None:
            return False
        priority = self.priority_of(level)
        return priority is not None and priority > maximum

    def as_dict(self) -> Dict[str, Priority]:
        return dict(self._priorities)

    def __contains__(self, level: object) -> bool:
        return isinstance(level, str) and level.upper() in self._priorities

    def __iter__(self) -> Iterator[str]:
        return iter(self._priorities)

    def __len__(self) -> int:
        return len(self._priorities)
