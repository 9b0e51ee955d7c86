# === FILE: shout/config.py ===
"""
Модуль для загрузки и валидации конфигурации логгера Shout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from shout.errors import InvalidConfigError
from shout.levels import standard_priorities

STDOUT = "<stdout>"
STDERR = "<stderr>"

DEFAULT_LINE_FORMAT = "<%1$s> [%2$s] %3$s [%4$s]\n"
DEFAULT_DATETIME_FORMAT = "%d.%m.%Y %H:%M:%S"


class WriteMode(str, Enum):
    """Режимы открытия назначения (словарь fopen)."""

    OVERWRITE = "w"
    APPEND = "a"
    READ_WRITE = "r+"
    READ_WRITE_TRUNCATE = "w+"
    READ_APPEND = "a+"
    EXCLUSIVE = "x"
    EXCLUSIVE_READ_WRITE = "x+"
    CREATE = "c"
    CREATE_READ_WRITE = "c+"

    def __str__(self) -> str:
        return self.value


def parse_write_mode(value: Any) -> WriteMode:
    """Проверяет режим записи до любого обращения к файловой системе."""
    if isinstance(value, WriteMode):
        return value
    if isinstance(value, str):
        try:
            return WriteMode(value)
        except ValueError:
            pass
    raise InvalidConfigError(f"Invalid write mode specified: {value!r}")


class ShoutConfig(BaseModel):
    """Конфигурация одного экземпляра логгера."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    destination: str = Field(
        STDOUT,
        min_length=1,
        description="Путь или поток; %1$s - unix-время, %2$s - дата.",
    )
    write_mode: WriteMode = Field(WriteMode.APPEND, description="Режим открытия файла.")
    blocking: bool = Field(True, description="Блокирующая запись в назначение.")
    rotate_enabled: bool = Field(False, description="Автоматическая ротация по времени.")
    rotation_interval: int = Field(86400, ge=0, description="Интервал ротации (секунд).")
    line_format: str = Field(DEFAULT_LINE_FORMAT, description="Шаблон строки лога.")
    datetime_format: str = Field(DEFAULT_DATETIME_FORMAT, description="Формат даты (strftime).")
    level_priorities: Dict[str, Union[int, float]] = Field(
        default_factory=standard_priorities, description="Приоритеты уровней."
    )
    maximum_log_level: Optional[Union[int, float]] = Field(
        999, description="Максимальный пропускаемый приоритет (включительно)."
    )

    @field_validator("write_mode", mode="before")
    def _check_write_mode(cls, v: Any) -> WriteMode:
        return parse_write_mode(v)

    @field_validator("rotation_interval", mode="before")
    def _check_interval(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("Interval should be integer")
        return v

    @field_validator("maximum_log_level", mode="before")
    def _check_maximum(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("Maximum log level must be a number")
        return v

    @field_validator("level_priorities", mode="before")
    def _merge_levels(cls, v: Any) -> Any:
        # стандартные уровни остаются, если их явно не переопределили
        if not isinstance(v, dict):
            return v
        merged: Dict[str, Any] = standard_priorities()
        for name, priority in v.items():
            if isinstance(priority, bool):
                raise ValueError(f"Priority of {name!r} must be a number")
            merged[str(name).upper()] = priority
        return merged


def update_config(config: ShoutConfig, **changes: Any) -> None:
    """Применяет изменения с проверкой; при ошибке конфигурация остаётся прежней."""
    try:
        checked = ShoutConfig.model_validate({**config.model_dump(), **changes})
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise InvalidConfigError(f"{field}: {error['msg']}") from exc
    for name in changes:
        setattr(config, name, getattr(checked, name))


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise InvalidConfigError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfigError(
            f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}"
        )
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfigError(
            f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}"
        )
    return data


def load_config(path: Union[str, Path, None]) -> ShoutConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ShoutConfig.
    Без пути возвращает конфигурацию по умолчанию.
    """
    if path is None:
        return ShoutConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise InvalidConfigError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return ShoutConfig(**data)
    except ValidationError as exc:
        raise InvalidConfigError(f"Ошибка в конфигурации {path_obj}: {exc}") from exc
