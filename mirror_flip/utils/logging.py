"""Настройка журнала приложения по значениям из `AppConfig`.

Принципы:
- Один вызов при старте: корневой логгер получает консольный и, по желанию, файловый обработчик.
- Уровень задаётся именем из конфигурации ("DEBUG", "info", ...) или числом.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from mirror_flip.errors import ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_level(level: Union[int, str]) -> int:
    """Переводит имя уровня в число; неизвестное имя даёт `ConfigError`."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ConfigError(f"Неизвестный уровень логирования: {level!r}")
    return value


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Перенастраивает корневой логгер: прежние обработчики снимаются,
    вывод идёт в stdout и, если задан `log_file`, дописывается в файл (UTF-8).
    """
    numeric_level = resolve_level(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # PIL plugin discovery is noisy at DEBUG
    logging.getLogger("PIL").setLevel(max(numeric_level, logging.INFO))

    logging.getLogger(__name__).debug(
        f"Logging configured: level {logging.getLevelName(numeric_level)}, file {log_file or '-'}"
    )
    return root_logger
