# File: shout/formatter.py
"""shout.formatter: Подстановка значений в шаблоны строк и путей, форматирование даты и контекста.

Шаблоны используют позиционный синтаксис printf:

* ``%1$s`` … ``%N$s`` – значение по номеру (нумерация с единицы);
* ``%N$d`` – то же значение, приведённое к целому;
* ``%s`` / ``%d`` – следующее по порядку значение;
* ``%%`` – символ процента.

Между номером и буквой допускаются флаги и ширина поля: ``%2$-8s`` – по
левому краю в восемь символов, ``%05d`` – нулями слева, ``%+d`` – со знаком.

Слоты строки лога: 1 – дата, 2 – уровень, 3 – сообщение, 4 – контекст,
5 – unix-время.
"""

from __future__ import annotations

import re
import time
from collections.abc import Mapping
from typing import Any, FrozenSet, List, Optional, Sequence

from shout.config import ShoutConfig
from shout.errors import LineFormatError

__all__: Sequence[str] = (
    "LineFormatter",
    "interpolate",
    "render",
    "format_timestamp",
    "dump_context",
)

_PLACEHOLDER = re.compile(r"%(?:(\d+)\$)?([-+ 0]*)(\d*)(.?)", re.DOTALL)
_INDENT = 4


def _scalar_text(value: Any) -> str:
    """Текстовое представление скаляра в духе printf: True -> '1', False/None -> ''."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def _as_int(value: Any, template: str) -> int:
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        pass
    try:
        return int(float(str(value).strip()))
    except ValueError as exc:
        raise LineFormatError(f"Value {value!r} is not an integer (template {template!r})") from exc


def _pad(text: str, conversion: str, flags: str, width: str) -> str:
    if "+" in flags and conversion == "d" and not text.startswith("-"):
        text = "+" + text
    if not width:
        return text
    size = int(width)
    if "-" in flags:
        return text.ljust(size)
    if "0" in flags:
        return text.zfill(size) if conversion == "d" else text.rjust(size, "0")
    return text.rjust(size)


def interpolate(template: str, *values: Any) -> str:
    """Подставляет *values* в *template*; ошибки шаблона -> LineFormatError."""
    out: List[str] = []
    pos = 0
    sequential = 0

    for match in _PLACEHOLDER.finditer(template):
        out.append(template[pos:match.start()])
        pos = match.end()
        index, flags, width, conversion = match.groups()

        if conversion == "%" and index is None and not flags and not width:
            out.append("%")
            continue
        if conversion not in ("s", "d"):
            raise LineFormatError(
                f"Unsupported placeholder {match.group(0)!r} at {match.start()} in {template!r}"
            )

        if index is None:
            number = sequential
            sequential += 1
        else:
            number = int(index) - 1
            if number < 0:
                raise LineFormatError(f"Argument number must be greater than zero in {template!r}")
        if number >= len(values):
            raise LineFormatError(
                f"Template {template!r} refers to argument {number + 1}, only {len(values)} given"
            )

        value = values[number]
        text = str(_as_int(value, template)) if conversion == "d" else _scalar_text(value)
        out.append(_pad(text, conversion, flags, width))

    out.append(template[pos:])
    return "".join(out)


def render(
    template: str,
    timestamp_text: str,
    level_text: str,
    message_text: str,
    context_text: str,
    unix_time: int,
) -> str:
    """Собирает строку лога из пяти позиционных значений."""
    return interpolate(template, timestamp_text, level_text, message_text, context_text, unix_time)


def format_timestamp(epoch: float, datetime_format: str) -> str:
    """Форматирует время *epoch* в локальной зоне по шаблону strftime."""
    return time.strftime(datetime_format, time.localtime(epoch))


def _items(value: Any) -> Optional[tuple[str, list[tuple[Any, Any]]]]:
    if isinstance(value, Mapping):
        return "Array", list(value.items())
    if isinstance(value, (list, tuple)):
        return "Array", list(enumerate(value))
    if isinstance(value, (set, frozenset)):
        return "Array", list(enumerate(sorted(value, key=repr)))
    if isinstance(value, type) or callable(value):
        return None
    if hasattr(value, "__dict__"):
        return f"{type(value).__name__} Object", list(vars(value).items())
    return None


def _dump(value: Any, indent: int, seen: FrozenSet[int]) -> str:
    if isinstance(value, BaseException):
        return f"{type(value).__name__}: {value}"
    parts = _items(value)
    if parts is None:
        return _scalar_text(value)

    head, items = parts
    if id(value) in seen:
        return f"{head}\n *RECURSION*"
    seen = seen | {id(value)}

    pad = " " * indent
    lines = [f"{head}\n{pad}(\n"]
    for key, item in items:
        nested = _dump(item, indent + 2 * _INDENT, seen)
        lines.append(f"{pad}{' ' * _INDENT}[{key}] => {nested}\n")
    lines.append(f"{pad})\n")
    return "".join(lines)


def dump_context(context: Any) -> str:
    """Человекочитаемый дамп контекста; пустой контекст даёт пустую строку.

    Порядок ключей совпадает с порядком вставки, поэтому результат стабилен
    для одинаковых входных данных.
    """
    if not context or not isinstance(context, (Mapping, list, tuple)):
        return ""
    return _dump(context, 0, frozenset())


class LineFormatter:
    """Форматирует записи по шаблонам текущей конфигурации."""

    def __init__(self, config: ShoutConfig) -> None:
        self.config = config

    def timestamp(self, epoch: float) -> str:
        return format_timestamp(epoch, self.config.datetime_format)

    def format(
        self, level: str, message: Any, context: Any = None, now: Optional[float] = None
    ) -> str:
        if now is None:
            now = time.time()
        return render(
            self.config.line_format,
            self.timestamp(now),
            level,
            _scalar_text(message),
            dump_context(context),
            int(now),
        )
