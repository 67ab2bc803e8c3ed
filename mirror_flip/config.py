"""Конфигурация приложения: размеры холста, диапазоны параметров, значения по умолчанию.

Принципы:
- Неизменяемость (`frozen=True`): конфигурация читается один раз при старте.
- Необязательный JSON-файл переопределяет только перечисленные в нём поля.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from mirror_flip.errors import ConfigError
from mirror_flip.models.parameters import Direction

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MIRROR_FLIP_CONFIG"

_ACCEPTED_TYPES = {int: (int,), float: (int, float), str: (str,)}


@dataclass(frozen=True)
class AppConfig:
    """Настройки холста и элементов управления.

    Fields:
        canvas_size: Сторона квадратного холста, px.
        zoom_step: Шаг кнопок масштаба.
        min_scale_factor / max_scale_factor: Границы масштаба.
        max_offset_slider: Верхняя граница слайдера смещения.
        opacity_step: Шаг слайдера непрозрачности.
        default_*: Начальные значения параметров.
        export_filename: Имя файла, предлагаемое при сохранении.
        log_level: Уровень логирования по имени ("INFO", "DEBUG", ...).
        log_file: Путь к файлу журнала; пустая строка: только консоль.
    """
    canvas_size: int = 400
    zoom_step: float = 0.2
    min_scale_factor: float = 0.5
    max_scale_factor: float = 3.0
    max_offset_slider: float = 100.0
    opacity_step: float = 0.05
    default_opacity: float = 0.47
    default_offset: float = 61.0
    default_scale_factor: float = 1.0
    default_direction: str = "Below"
    export_filename: str = "flipped-image.png"
    log_level: str = "INFO"
    log_file: str = ""

    def __post_init__(self) -> None:
        if self.canvas_size <= 0:
            raise ConfigError(f"canvas_size должен быть положительным: {self.canvas_size}")
        if not 0 < self.min_scale_factor <= self.max_scale_factor:
            raise ConfigError(
                f"Некорректный диапазон масштаба: {self.min_scale_factor}..{self.max_scale_factor}"
            )
        if self.zoom_step <= 0:
            raise ConfigError(f"zoom_step должен быть положительным: {self.zoom_step}")
        try:
            Direction.parse(self.default_direction)
        except ValueError as exc:
            raise ConfigError(f"Неизвестное направление: {self.default_direction}") from exc

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AppConfig":
        """Создаёт конфигурацию, переопределяя значения по умолчанию полями из `data`."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Неизвестные ключи конфигурации: {', '.join(unknown)}")

        overrides = {}
        for key, value in data.items():
            expected = type(getattr(cls, key))
            # bool is an int subclass; floats never truncate into int fields
            if isinstance(value, bool) or not isinstance(value, _ACCEPTED_TYPES[expected]):
                raise ConfigError(
                    f"Недопустимое значение для {key}: {value!r} (ожидался {expected.__name__})"
                )
            overrides[key] = expected(value)
        return replace(cls(), **overrides)


def load_config(path: Optional[str | Path] = None) -> AppConfig:
    """Загружает конфигурацию из JSON-файла.

    Args:
        path: Путь к файлу. Если не указан, берётся из переменной окружения
            `MIRROR_FLIP_CONFIG`; если нет и её, возвращаются значения по умолчанию.

    Raises:
        ConfigError: файл не найден, не является JSON-объектом или содержит ошибки.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return AppConfig()

    config_path = Path(path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Не удалось прочитать конфигурацию: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Конфигурация не является корректным JSON: {config_path}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Ожидался JSON-объект в {config_path}")

    config = AppConfig.from_mapping(raw)
    logger.info(f"Loaded configuration from {config_path}")
    return config
